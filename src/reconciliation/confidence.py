"""
Confidence Scorer Module.

Heuristic 0-100 estimate of how complete an extraction is. It measures
which fields were found, not how certain any of them is.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Sequence

from config import get_config
from src.records import LineItem, MERCHANT_UNKNOWN
from src.utils.exceptions import InvalidInputError


class ConfidenceScorer:
    """
    Weighted field-presence score.

    score = 20*[merchant] + 15*[date] + 30*[total] + min(25, 5*items)
            + OCR bonus, capped at 100

    The optional OCR-quality hint (0-100) adds at most ``max_ocr_bonus``
    points, proportionally, rounded half up like monetary amounts.

    Example:
        >>> ConfidenceScorer().score("Acme", "2024-03-12", total, items)
        70
    """

    def __init__(self) -> None:
        self.merchant_weight = get_config("confidence.weights.merchant", 20)
        self.date_weight = get_config("confidence.weights.date", 15)
        self.total_weight = get_config("confidence.weights.total", 30)
        self.per_item = get_config("confidence.weights.per_item", 5)
        self.items_cap = get_config("confidence.weights.items_cap", 25)
        self.max_ocr_bonus = get_config("confidence.max_ocr_bonus", 10)

    def ocr_bonus(self, ocr_quality: Optional[float]) -> int:
        """Bounded bonus from the caller's OCR-quality hint."""
        if ocr_quality is None:
            return 0
        if not 0 <= ocr_quality <= 100:
            raise InvalidInputError("ocr_quality", ocr_quality, "must be within 0..100")
        bonus = Decimal(str(ocr_quality)) * self.max_ocr_bonus / 100
        return int(bonus.quantize(Decimal(1), rounding=ROUND_HALF_UP))

    def score(
        self,
        merchant: str,
        date: Optional[str],
        total,
        items: Sequence[LineItem],
        ocr_quality: Optional[float] = None
    ) -> int:
        score = 0
        if merchant and merchant != MERCHANT_UNKNOWN:
            score += self.merchant_weight
        if date is not None:
            score += self.date_weight
        if total is not None:
            score += self.total_weight
        score += min(self.items_cap, self.per_item * len(items))
        score += self.ocr_bonus(ocr_quality)
        return max(0, min(100, score))
