"""
Tests for the confidence score.
"""

import pytest

from src.records import LineItem, MonetaryAmount
from src.reconciliation import ConfidenceScorer
from src.utils.exceptions import InvalidInputError


def items(count):
    return [LineItem(f"Item {i}", 1, None, MonetaryAmount(100)) for i in range(count)]


@pytest.fixture
def scorer():
    return ConfidenceScorer()


def test_field_weights(scorer):
    total = MonetaryAmount(8000)
    assert scorer.score("Acme", "2024-03-12", total, items(1)) == 70
    assert scorer.score("Acme", None, None, []) == 20
    assert scorer.score("UNKNOWN", "2024-03-12", None, []) == 15
    assert scorer.score("UNKNOWN", None, total, []) == 30


def test_items_contribution_is_capped(scorer):
    total = MonetaryAmount(8000)
    assert scorer.score("Acme", "2024-03-12", total, items(5)) == 90
    assert scorer.score("Acme", "2024-03-12", total, items(12)) == 90


def test_nothing_found(scorer):
    assert scorer.score("UNKNOWN", None, None, []) == 0


def test_ocr_quality_bonus(scorer):
    total = MonetaryAmount(8000)
    assert scorer.ocr_bonus(None) == 0
    assert scorer.ocr_bonus(0) == 0
    assert scorer.ocr_bonus(80) == 8
    assert scorer.ocr_bonus(25) == 3
    assert scorer.ocr_bonus(35) == 4
    assert scorer.score("Acme", "2024-03-12", total, items(1), ocr_quality=80) == 78
    assert scorer.score("Acme", "2024-03-12", total, items(5), ocr_quality=100) == 100


@pytest.mark.parametrize("quality", [-1, 100.5])
def test_ocr_quality_out_of_range(scorer, quality):
    with pytest.raises(InvalidInputError):
        scorer.ocr_bonus(quality)
