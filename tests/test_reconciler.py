"""
Tests for total / items-sum reconciliation.
"""

import pytest

from src.records import (
    CorrectionReason,
    CurrencyCode,
    Issue,
    LineItem,
    MonetaryAmount
)
from src.reconciliation import Reconciler, compute_items_sum


def usd(minor_units):
    return MonetaryAmount(minor_units, CurrencyCode.USD)


def item(name, line_total, quantity=1):
    return LineItem(name, quantity, None, usd(line_total))


@pytest.fixture
def reconciler():
    return Reconciler()


def test_significant_mismatch_uses_items_sum(reconciler):
    items = [item("Pen", 3000), item("Paper", 4000, quantity=2)]
    result = reconciler.reconcile(usd(10000), items, CurrencyCode.USD)

    assert result.items_sum == 7000
    assert result.tolerance == 100
    assert result.corrected_total == usd(7000)
    assert len(result.corrections) == 1
    correction = result.corrections[0]
    assert correction.field == "total"
    assert (correction.from_value, correction.to) == ("10000", "7000")
    assert correction.reason == CorrectionReason.ITEMS_SUM_MISMATCH
    assert result.issues == ()


def test_missing_total_is_inferred_from_items(reconciler):
    items = [item("Pen", 2000), item("Paper", 3000)]
    result = reconciler.reconcile(None, items, CurrencyCode.INR)

    assert result.corrected_total == MonetaryAmount(5000, CurrencyCode.INR)
    assert result.corrections[0].reason == CorrectionReason.INFERRED_FROM_ITEMS
    assert result.corrections[0].from_value is None
    assert result.corrections[0].to == "5000"
    assert Issue("total", "missing_total") not in result.issues


def test_missing_total_without_items(reconciler):
    result = reconciler.reconcile(None, [])
    assert result.corrected_total is None
    assert result.corrections == ()
    assert result.issues == (Issue("total", "missing_total"),)


def test_rounding_difference_keeps_stated_total(reconciler):
    result = reconciler.reconcile(usd(10050), [item("Meal", 10000)])

    assert result.corrected_total == usd(10050)
    correction = result.corrections[0]
    assert correction.field == "items_sum"
    assert (correction.from_value, correction.to) == ("10000", "10050")
    assert correction.reason == CorrectionReason.MINOR_ROUNDING_DIFFERENCE


def test_exact_match(reconciler):
    result = reconciler.reconcile(usd(8000), [item("Bread", 8000)])
    assert result.corrected_total == usd(8000)
    assert result.corrections == ()
    assert result.issues == ()


def test_tolerance_is_one_percent_above_one_unit(reconciler):
    assert reconciler.tolerance_for(5000) == 100
    assert reconciler.tolerance_for(20000) == 200
    assert reconciler.tolerance_for(-20000) == 200

    at_limit = reconciler.reconcile(usd(20000), [item("A", 19800)])
    assert at_limit.corrections[0].reason == CorrectionReason.MINOR_ROUNDING_DIFFERENCE

    past_limit = reconciler.reconcile(usd(20000), [item("A", 19799)])
    assert past_limit.corrections[0].reason == CorrectionReason.ITEMS_SUM_MISMATCH


def test_custom_tolerance():
    reconciler = Reconciler(tolerance_divisor=50, min_tolerance=0)
    assert reconciler.tolerance_for(10000) == 200
    assert reconciler.tolerance_for(10) == 0


def test_items_sum_uses_unit_price_when_line_total_missing():
    items = [
        LineItem("Tea", 3, usd(1500), None),
        LineItem("Cake", 1, usd(999), usd(999)),
        LineItem("Free sample", 1, None, None),
    ]
    assert compute_items_sum(items) == 5499
