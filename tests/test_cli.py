"""
Tests for the command-line entry point.
"""

import json

import pytest

from main import main, run_parsing


@pytest.fixture
def receipt_file(tmp_path, clean_receipt_text):
    path = tmp_path / "receipt.txt"
    path.write_text(clean_receipt_text, encoding="utf-8")
    return path


def test_run_parsing_single_file(receipt_file):
    results = run_parsing(str(receipt_file))

    assert len(results) == 1
    assert results[0]["merchant"] == "Acme Store"
    assert results[0]["status"] == "valid"
    assert results[0]["source_file"] == str(receipt_file)


def test_run_parsing_display(receipt_file):
    results = run_parsing(str(receipt_file), display=True)
    assert results[0]["total"] == "₹80.00"


def test_write_json_file(receipt_file, tmp_path):
    output = tmp_path / "out" / "results.json"
    run_parsing(str(receipt_file), output_path=str(output))

    data = json.loads(output.read_text(encoding="utf-8"))
    assert data[0]["total"] == {"minor_units": 8000, "currency": "INR"}


def test_write_directory(receipt_file, tmp_path):
    output = tmp_path / "parsed"
    run_parsing(str(receipt_file), output_path=str(output))

    written = list(output.glob("Acme_Store_*_1.json"))
    assert len(written) == 1
    assert json.loads(written[0].read_text(encoding="utf-8"))["merchant"] == "Acme Store"


def test_main_prints_json(receipt_file, capsys):
    assert main(["--input", str(receipt_file), "--quiet"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data[0]["corrected_total"]["minor_units"] == 8000


def test_main_missing_input(tmp_path):
    assert main(["--input", str(tmp_path / "missing.txt"), "--quiet"]) == 1


def test_main_bad_config(receipt_file, tmp_path):
    assert main(["--input", str(receipt_file), "--config", str(tmp_path / "nope.yaml")]) == 1


def test_main_rejects_out_of_range_quality(receipt_file):
    assert main(["--input", str(receipt_file), "--ocr-quality", "150", "--quiet"]) == 1
