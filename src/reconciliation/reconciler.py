"""
Reconciliation Engine Module.

Compares the stated total against the sum of the extracted line items
and decides which total to trust.

Tolerance policy (all values in minor units):
    tol = max(|total| // tolerance_divisor, min_tolerance)

    - no total, items sum > 0  -> total inferred from items
    - no total, items sum == 0 -> total.missing_total issue
    - |total - sum| > tol      -> items sum wins (items_sum_mismatch)
    - 0 < |total - sum| <= tol -> stated total kept, rounding noted
    - total == sum             -> nothing to report

Author: ML Engineering Team
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from config import get_config
from src.records import (
    Correction,
    CorrectionReason,
    CurrencyCode,
    Issue,
    LineItem,
    MonetaryAmount
)
from src.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ReconciliationResult:
    """
    Outcome of reconciling one document.

    Attributes:
        items_sum: Sum of the item rows in minor units
        corrected_total: Total to report, or None if unknown
        corrections: Changes and annotations made
        issues: Problems that could not be resolved
        tolerance: Tolerance that was applied (0 without a stated total)
    """
    items_sum: int
    corrected_total: Optional[MonetaryAmount]
    corrections: Tuple[Correction, ...] = field(default_factory=tuple)
    issues: Tuple[Issue, ...] = field(default_factory=tuple)
    tolerance: int = 0


def compute_items_sum(items: Sequence[LineItem]) -> int:
    """
    Sum item rows using line_total, else unit_price x quantity.

    Example:
        >>> compute_items_sum([LineItem("Tea", 2, MonetaryAmount(1500), None)])
        3000
    """
    return sum(item.effective_total for item in items)


class Reconciler:
    """
    Two-tier total reconciliation.

    Example:
        >>> reconciler = Reconciler()
        >>> result = reconciler.reconcile(MonetaryAmount(10000, CurrencyCode.USD), items)
        >>> result.corrected_total.minor_units
        7000
    """

    def __init__(
        self,
        tolerance_divisor: Optional[int] = None,
        min_tolerance: Optional[int] = None
    ) -> None:
        self.tolerance_divisor = tolerance_divisor or get_config(
            "reconciliation.tolerance_divisor", 100
        )
        self.min_tolerance = min_tolerance if min_tolerance is not None else get_config(
            "reconciliation.min_tolerance", 100
        )

    def tolerance_for(self, total_minor_units: int) -> int:
        """Allowed difference for a stated total: 1% or one currency unit."""
        return max(abs(total_minor_units) // self.tolerance_divisor, self.min_tolerance)

    def reconcile(
        self,
        total: Optional[MonetaryAmount],
        items: Sequence[LineItem],
        currency: CurrencyCode = CurrencyCode.UNKNOWN
    ) -> ReconciliationResult:
        """
        Reconcile a stated total with its line items.

        Args:
            total: Extracted total, or None.
            items: Extracted line items.
            currency: Currency for an inferred total.

        Returns:
            ReconciliationResult.
        """
        items_sum = compute_items_sum(items)

        if total is None:
            return self._reconcile_missing_total(items_sum, currency)

        stated = total.minor_units
        diff = stated - items_sum
        tolerance = self.tolerance_for(stated)

        if abs(diff) > tolerance:
            logger.warning(
                f"Stated total {stated} differs from items sum {items_sum} "
                f"by {diff} (tolerance {tolerance}); using items sum"
            )
            return ReconciliationResult(
                items_sum=items_sum,
                corrected_total=MonetaryAmount(items_sum, total.currency),
                corrections=(Correction(
                    field="total",
                    from_value=str(stated),
                    to=str(items_sum),
                    reason=CorrectionReason.ITEMS_SUM_MISMATCH
                ),),
                tolerance=tolerance
            )

        if diff != 0:
            logger.info(
                f"Rounding difference of {diff} between total and items sum "
                f"is within tolerance {tolerance}"
            )
            return ReconciliationResult(
                items_sum=items_sum,
                corrected_total=total,
                corrections=(Correction(
                    field="items_sum",
                    from_value=str(items_sum),
                    to=str(stated),
                    reason=CorrectionReason.MINOR_ROUNDING_DIFFERENCE
                ),),
                tolerance=tolerance
            )

        return ReconciliationResult(
            items_sum=items_sum,
            corrected_total=total,
            tolerance=tolerance
        )

    def _reconcile_missing_total(
        self,
        items_sum: int,
        currency: CurrencyCode
    ) -> ReconciliationResult:
        if items_sum > 0:
            logger.info(f"No total found; inferred {items_sum} from line items")
            return ReconciliationResult(
                items_sum=items_sum,
                corrected_total=MonetaryAmount(items_sum, currency),
                corrections=(Correction(
                    field="total",
                    from_value=None,
                    to=str(items_sum),
                    reason=CorrectionReason.INFERRED_FROM_ITEMS
                ),)
            )

        return ReconciliationResult(
            items_sum=items_sum,
            corrected_total=None,
            issues=(Issue(field="total", problem="missing_total"),)
        )
