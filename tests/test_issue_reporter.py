"""
Tests for issue aggregation and ordering.
"""

import pytest

from src.records import Correction, CorrectionReason, LineItem, MonetaryAmount
from src.reconciliation import IssueReport, IssueReporter, Reconciler


def test_everything_missing():
    reconciliation = Reconciler().reconcile(None, [])
    report = IssueReporter().report("UNKNOWN", None, (), reconciliation)

    assert [issue.code for issue in report.ordered_issues()] == [
        "merchant.missing",
        "date.missing_or_unrecognized",
        "total.missing_total",
        "items.no_items_detected",
    ]
    assert not report.is_valid


def test_complete_document_is_valid():
    items = (LineItem("Bread", 2, MonetaryAmount(4000), MonetaryAmount(8000)),)
    reconciliation = Reconciler().reconcile(MonetaryAmount(8000), items)
    report = IssueReporter().report("Acme", "2024-03-12", items, reconciliation)

    assert report.issues == []
    assert report.corrections == []
    assert report.is_valid


def test_corrections_are_carried_over():
    items = (LineItem("Bread", 1, None, MonetaryAmount(7000)),)
    reconciliation = Reconciler().reconcile(MonetaryAmount(10000), items)
    report = IssueReporter().report("Acme", "2024-03-12", items, reconciliation)

    assert report.issues == []
    assert [c.reason for c in report.corrections] == [CorrectionReason.ITEMS_SUM_MISMATCH]
    assert not report.is_valid


def test_issues_are_ordered_by_field():
    report = IssueReport()
    report.add_issue("items", "no_items_detected")
    report.add_issue("merchant", "missing")
    report.add_issue("items", "second")

    assert [issue.code for issue in report.ordered_issues()] == [
        "merchant.missing",
        "items.no_items_detected",
        "items.second",
    ]


def test_unknown_issue_field():
    with pytest.raises(ValueError):
        IssueReport().add_issue("currency", "missing")


def test_correction_serialization():
    correction = Correction("total", None, "5000", CorrectionReason.INFERRED_FROM_ITEMS)
    assert correction.to_dict() == {
        "field": "total",
        "from": None,
        "to": "5000",
        "reason": "inferred_from_items",
    }
    assert Correction.from_dict(correction.to_dict()) == correction
