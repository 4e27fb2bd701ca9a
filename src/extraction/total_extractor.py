"""
Total Extractor Module.

Finds the document's stated grand total.

The bottom of the document is scanned for lines that announce a total
or carry a currency marker; every amount on those lines is a candidate
and the largest one wins. OCR tends to drop digits from the smaller
subtotal lines, so the largest labeled amount is usually the grand
total. This misfires on documents that print a larger subtotal above a
smaller, discounted final total.

Author: ML Engineering Team
"""

import re
from typing import Iterable, List, Optional

from config import get_config
from src.normalization import CurrencyDetector, iter_amount_tokens, parse_minor_units
from src.utils.logger import get_logger
from .base import DocumentText, FieldStrategy, StrategyChain
from .patterns import TOTAL_KEYWORD_RE, strip_dates, strip_percentages

logger = get_logger(__name__)

_PLAIN_DIGITS_RE = re.compile(r'-?\d+')


class AmountScanner:
    """
    Reads amount candidates from lines.

    Dates and percentages are blanked out first. Bare digit runs longer
    than ``max_plain_digits`` (phone numbers, GSTINs, invoice numbers)
    are ignored.
    """

    def __init__(self, max_plain_digits: int = 7) -> None:
        self.max_plain_digits = max_plain_digits

    def amounts(self, line: str) -> List[int]:
        cleaned = strip_percentages(strip_dates(line))
        values = []
        for token in iter_amount_tokens(cleaned):
            if _PLAIN_DIGITS_RE.fullmatch(token) and len(token.lstrip('-')) > self.max_plain_digits:
                continue
            value = parse_minor_units(token)
            if value is not None:
                values.append(value)
        return values

    def amounts_in(self, lines: Iterable[str]) -> List[int]:
        values = []
        for line in lines:
            values.extend(self.amounts(line))
        return values


class LabeledTotalStrategy(FieldStrategy[int]):
    """Largest amount on total-labeled or currency-marked lines near the bottom."""

    name = "labeled_total"

    def __init__(
        self,
        scanner: AmountScanner,
        detector: CurrencyDetector,
        window: int = 20
    ) -> None:
        self.scanner = scanner
        self.detector = detector
        self.window = window

    def is_total_line(self, line: str) -> bool:
        return bool(TOTAL_KEYWORD_RE.search(line)) or self.detector.has_currency_marker(line)

    def extract(self, document: DocumentText) -> Optional[int]:
        tail = document.lines[-self.window:] if self.window > 0 else ()
        candidates = []

        for line in reversed(tail):
            if self.is_total_line(line):
                candidates.extend(self.scanner.amounts(line))

        if not candidates:
            return None

        logger.debug(f"Total candidates (minor units): {candidates}")
        return max(candidates)


class LargestAmountStrategy(FieldStrategy[int]):
    """Largest amount anywhere in the document."""

    name = "largest_amount"

    def __init__(self, scanner: AmountScanner) -> None:
        self.scanner = scanner

    def extract(self, document: DocumentText) -> Optional[int]:
        candidates = self.scanner.amounts_in(document.lines)
        return max(candidates) if candidates else None


class TotalExtractor:
    """
    Grand total extraction, in minor units.

    Example:
        >>> doc = DocumentText.build("Subtotal 70.00\\nTax 10.00\\nTotal: $80.00")
        >>> TotalExtractor().extract(doc)
        8000
    """

    def __init__(self, detector: Optional[CurrencyDetector] = None) -> None:
        detector = detector or CurrencyDetector()
        scanner = AmountScanner(get_config("extraction.total.max_plain_digits", 7))

        self.chain: StrategyChain[int] = StrategyChain("total", [
            LabeledTotalStrategy(
                scanner,
                detector,
                window=get_config("extraction.total.window", 20)
            ),
            LargestAmountStrategy(scanner),
        ])

    def extract(self, document: DocumentText) -> Optional[int]:
        return self.chain.extract(document)
