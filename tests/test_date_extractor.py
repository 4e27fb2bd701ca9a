"""
Tests for date discovery, day/month resolution and ISO output.
"""

from datetime import date

import pytest

from src.extraction import DateExtractor, DocumentText
from src.extraction.date_extractor import DateRules, LabeledDateStrategy


@pytest.fixture
def extractor():
    return DateExtractor()


def extract(extractor, text):
    return extractor.extract(DocumentText.build(text))


@pytest.mark.parametrize("text, expected", [
    ("2024-03-12", "2024-03-12"),
    ("2024/3/5", "2024-03-05"),
    ("25.12.2023", "2023-12-25"),
    ("03/25/2024", "2024-03-25"),
    ("Bill date 05/11/23", "2023-11-05"),
    ("05-11-99", "1999-11-05"),
    ("March 5, 2024", "2024-03-05"),
    ("Sept 9 2023", "2023-09-09"),
    ("5th Mar 2024", "2024-03-05"),
])
def test_supported_forms(extractor, text, expected):
    assert extract(extractor, text).iso == expected


def test_day_month_reading_preferred_and_flagged(extractor):
    match = extract(extractor, "Acme Store\n12/03/2024")
    assert match.iso == "2024-03-12"
    assert match.ambiguous is True
    assert match.source == "12/03/2024"


def test_unambiguous_dates_are_not_flagged(extractor):
    assert extract(extractor, "2024-03-12").ambiguous is False
    assert extract(extractor, "25/12/2023").ambiguous is False


def test_impossible_calendar_dates_are_rejected(extractor):
    assert extract(extractor, "31/04/2024") is None
    assert extract(extractor, "2023-02-29") is None
    assert extract(extractor, "31/04/2024 then 2024-05-01").iso == "2024-05-01"


def test_years_outside_range_are_rejected(extractor):
    assert extract(extractor, "2150-01-01") is None


def test_first_date_in_text_wins(extractor):
    assert extract(extractor, "Invoice 2024-01-05\nDue 2024-02-05").iso == "2024-01-05"


def test_labeled_line_parsed_with_dateutil(extractor):
    match = extract(extractor, "Acme\nDate: 2024 March 5")
    assert match.iso == "2024-03-05"
    assert match.source == "2024 March 5"


def test_incomplete_labeled_dates_are_rejected():
    strategy = LabeledDateStrategy()
    assert strategy.extract(DocumentText.build("Date: March 5")) is None
    assert strategy.extract(DocumentText.build("Date: tomorrow")) is None


def test_labeled_values_with_unrelated_words_are_rejected(extractor):
    assert LabeledDateStrategy().extract(DocumentText.build("Date: Cashier Ravi 7 8 2023")) is None
    assert extract(extractor, "Acme\nDate: Cashier Ravi 7 8 2023") is None


def test_no_date(extractor):
    assert extract(extractor, "") is None
    assert extract(extractor, "Bread 2 40.00 80.00") is None


def test_iso_output_round_trips(extractor):
    for text in ("12/03/2024", "March 5, 2024", "05/11/23"):
        iso = extract(extractor, text).iso
        assert date.fromisoformat(iso).isoformat() == iso


def test_iter_candidates_lists_all_readings(extractor):
    candidates = list(extractor.iter_candidates("12/03/2024 and 2024-01-05 and 31/04/2024"))
    assert candidates == [
        ("12/03/2024", ["2024-03-12", "2024-12-03"]),
        ("2024-01-05", ["2024-01-05"]),
        ("31/04/2024", []),
    ]


def test_two_digit_year_pivot():
    rules = DateRules()
    assert rules.expand_year(49, 2) == 2049
    assert rules.expand_year(50, 2) == 1950
    assert rules.expand_year(2024, 4) == 2024
