"""
Tests for grand total extraction.
"""

import pytest

from src.extraction import DocumentText, TotalExtractor
from src.extraction.total_extractor import AmountScanner, LabeledTotalStrategy
from src.normalization import CurrencyDetector


@pytest.fixture
def extractor():
    return TotalExtractor()


def extract(extractor, text):
    return extractor.extract(DocumentText.build(text))


def test_largest_labeled_amount(extractor):
    assert extract(extractor, "Subtotal 70.00\nTax 10.00\nTotal: $80.00") == 8000


def test_larger_subtotal_above_discounted_total_wins(extractor):
    # Known limitation of the maximum heuristic
    text = "Sub Total 1,050.00\nDiscount 100.00\nTotal 950.00"
    assert extract(extractor, text) == 105000


def test_currency_marked_lines_are_candidates(extractor):
    assert extract(extractor, "Acme\nCash ₹100.00\nBread 40.00") == 10000


def test_falls_back_to_largest_amount(extractor):
    assert extract(extractor, "Acme\nBread 40.00\nMilk 25.50") == 4000


def test_dates_and_long_digit_runs_are_not_amounts(extractor):
    text = "Acme\nPhone 9876543210\n12/03/2024\nBread 40.00"
    assert extract(extractor, text) == 4000


def test_percentages_are_not_amounts(extractor):
    assert extract(extractor, "Total incl. 18% GST 118.00") == 11800


def test_no_amounts(extractor):
    assert extract(extractor, "") is None
    assert extract(extractor, "Acme Store") is None


def test_only_the_bottom_window_is_labeled():
    strategy = LabeledTotalStrategy(AmountScanner(), CurrencyDetector(), window=2)
    document = DocumentText.build("Total 500.00\nBread 40.00\nMilk 25.00")
    assert strategy.extract(document) is None


def test_amount_scanner_skips_plain_digit_runs():
    scanner = AmountScanner(max_plain_digits=7)
    assert scanner.amounts("GSTIN 29123456789 Amount 1,234.50") == [123450]
    assert scanner.amounts("Invoice 1234567 5.00") == [123456700, 500]
