"""
Issue Reporter Module.

Collects the diagnostics of every extractor and of the reconciler into
the final issue and correction lists, in a fixed field order.

Author: ML Engineering Team
"""

from typing import List, Optional, Sequence, Tuple

from src.records import (
    Correction,
    ISSUE_FIELDS,
    Issue,
    LineItem,
    MERCHANT_UNKNOWN
)
from src.utils.logger import get_logger
from .reconciler import ReconciliationResult

logger = get_logger(__name__)


class IssueReport:
    """
    Accumulates issues and corrections for one document.

    Attributes:
        issues: Issues in the order they were added
        corrections: Corrections in the order they were added
    """

    def __init__(self) -> None:
        self.issues: List[Issue] = []
        self.corrections: List[Correction] = []

    def add_issue(self, field: str, problem: str) -> None:
        """Record a problem with one of the invoice fields."""
        if field not in ISSUE_FIELDS:
            raise ValueError(f"Unknown issue field: {field}")
        self.issues.append(Issue(field=field, problem=problem))

    def add_correction(self, correction: Correction) -> None:
        self.corrections.append(correction)

    @property
    def is_valid(self) -> bool:
        return not self.issues and not self.corrections

    def ordered_issues(self) -> Tuple[Issue, ...]:
        """Issues sorted by field (merchant, date, total, items), stable within a field."""
        return tuple(sorted(self.issues, key=lambda issue: ISSUE_FIELDS.index(issue.field)))


class IssueReporter:
    """
    Builds the issue report of a parsed document.

    Example:
        >>> report = IssueReporter().report("UNKNOWN", None, (), reconciliation)
        >>> [issue.code for issue in report.ordered_issues()]
        ['merchant.missing', 'date.missing_or_unrecognized', 'total.missing_total', 'items.no_items_detected']
    """

    def report(
        self,
        merchant: str,
        date: Optional[str],
        items: Sequence[LineItem],
        reconciliation: ReconciliationResult
    ) -> IssueReport:
        report = IssueReport()

        if not merchant or merchant == MERCHANT_UNKNOWN:
            report.add_issue("merchant", "missing")
        if date is None:
            report.add_issue("date", "missing_or_unrecognized")
        for issue in reconciliation.issues:
            report.add_issue(issue.field, issue.problem)
        if not items:
            report.add_issue("items", "no_items_detected")

        for correction in reconciliation.corrections:
            report.add_correction(correction)

        if not report.is_valid:
            logger.debug(
                f"Issues: {[issue.code for issue in report.ordered_issues()]}, "
                f"corrections: {len(report.corrections)}"
            )
        return report
