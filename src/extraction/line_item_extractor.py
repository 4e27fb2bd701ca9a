"""
Line-Item Extractor Module.

Detects tabular item rows (name, quantity, unit price, line total) in
normalized receipt lines.

Steps:
    1. Re-join rows that OCR wrapped over two lines
    2. Drop summary, payment and header rows
    3. Match row shapes from most to least specific:
       name qty unit total / name unit total / name unit
    4. Fill in the missing price from the known one
    5. Suppress duplicate rows

Author: ML Engineering Team
"""

import re
from typing import List, Optional, Sequence, Tuple

from config import get_config
from src.records import CurrencyCode, LineItem, MonetaryAmount
from src.normalization import parse_minor_units
from src.normalization.currency_detector import SYMBOL_CHARACTERS
from src.utils.logger import get_logger
from .base import DocumentText
from .patterns import (
    DATE_PATTERN,
    HAS_DIGIT_RE,
    HAS_LETTER_RE,
    SUMMARY_LINE_RE
)

logger = get_logger(__name__)


_CURRENCY_PREFIX = rf'(?:[{re.escape(SYMBOL_CHARACTERS)}]|Rs\.?)'
_AMOUNT = rf'{_CURRENCY_PREFIX}?\s?-?\d(?:[\d.,]*\d)?'

# Row shapes, most specific first
ROW_PATTERNS = (
    ('qty_unit_total', re.compile(
        rf'^(?P<name>.{{2,70}}?)\s+(?P<qty>\d{{1,4}})\s+(?P<unit>{_AMOUNT})\s+(?P<total>{_AMOUNT})$'
    )),
    ('unit_total', re.compile(
        rf'^(?P<name>.{{2,70}}?)\s+(?P<unit>{_AMOUNT})\s+(?P<total>{_AMOUNT})$'
    )),
    ('unit_only', re.compile(
        rf'^(?P<name>.{{2,70}}?)\s+(?P<unit>{_AMOUNT})$'
    )),
)

_NAME_CURRENCY_RE = re.compile(
    rf'[{re.escape(SYMBOL_CHARACTERS)}]|(?<![A-Za-z])(?:Rs\.?|INR|USD|EUR|GBP|JPY)(?![A-Za-z])'
)
# Free-standing numbers; digits glued to letters ("7UP", "500g") stay
_NAME_NUMBER_RE = re.compile(r'(?<![A-Za-z\d.,])\d[\d.,]*(?![A-Za-z\d])')
_EMPTY_BRACKETS_RE = re.compile(r'\(\s*\)|\[\s*\]')


def merge_wrapped_lines(lines: Sequence[str]) -> List[str]:
    """
    Re-join rows that OCR split over two lines.

    - A line ending in a hyphen is joined with the next one, hyphen removed.
    - A line without digits absorbs the next line when that line has one
      ("Fresh Juice" + "Large 1 60.00 60.00"). Summary and header lines
      never absorb, and a date line is never absorbed.

    Example:
        >>> merge_wrapped_lines(["Whole wheat", "2 40.00 80.00"])
        ['Whole wheat 2 40.00 80.00']
    """
    merged = []
    index = 0

    while index < len(lines):
        line = lines[index]

        while index + 1 < len(lines):
            following = lines[index + 1]

            if len(line) > 1 and line.endswith('-') and line[-2].isalpha():
                line = line[:-1] + following
            elif (
                not HAS_DIGIT_RE.search(line)
                and not SUMMARY_LINE_RE.search(line)
                and HAS_DIGIT_RE.search(following)
                and not DATE_PATTERN.search(following)
            ):
                line = f"{line} {following}"
            else:
                break
            index += 1

        merged.append(line)
        index += 1

    return merged


def clean_item_name(name: str) -> str:
    """Strip currency markers and free-standing numbers from a row's name."""
    name = _NAME_CURRENCY_RE.sub(' ', name)
    name = _NAME_NUMBER_RE.sub(' ', name)
    name = _EMPTY_BRACKETS_RE.sub(' ', name)
    return ' '.join(name.split()).strip(' :-.,*#@')


def complete_prices(
    quantity: int,
    unit_price: Optional[int],
    line_total: Optional[int]
) -> Optional[Tuple[int, int]]:
    """
    Derive the missing price of a row.

    Returns:
        (unit_price, line_total) in minor units, or None if neither is known.

    Example:
        >>> complete_prices(3, None, 1000)
        (333, 1000)
        >>> complete_prices(2, 4000, None)
        (4000, 8000)
    """
    if unit_price is None and line_total is None:
        return None
    if line_total is None:
        line_total = unit_price * quantity
    if unit_price is None:
        unit_price = line_total // quantity
    return unit_price, line_total


class LineItemExtractor:
    """
    Tabular line-item detection.

    Attributes:
        max_name_length: Names are cut to this many characters
        dedupe_prefix_length: Name prefix compared when suppressing duplicates

    Example:
        >>> doc = DocumentText.build("Bread 2 40.00 80.00\\nTotal 80.00")
        >>> items = LineItemExtractor().extract(doc)
        >>> items[0].name, items[0].quantity, items[0].line_total.minor_units
        ('Bread', 2, 8000)
    """

    def __init__(self) -> None:
        self.max_name_length = get_config("extraction.items.max_name_length", 120)
        self.dedupe_prefix_length = get_config("extraction.items.dedupe_prefix_length", 16)

    def extract(self, document: DocumentText) -> Tuple[LineItem, ...]:
        """
        Extract line items from a document.

        Args:
            document: Normalized document text.

        Returns:
            Items in document order, duplicates removed.
        """
        items = []
        seen = set()

        for line in merge_wrapped_lines(document.lines):
            if SUMMARY_LINE_RE.search(line) or not HAS_LETTER_RE.search(line):
                continue

            item = self.parse_row(line, document.currency)
            if item is None:
                continue

            key = (item.name.lower()[:self.dedupe_prefix_length], item.effective_total)
            if key in seen:
                logger.debug(f"Suppressed duplicate item row: '{line}'")
                continue

            seen.add(key)
            items.append(item)

        logger.debug(f"Extracted {len(items)} line items")
        return tuple(items)

    def parse_row(
        self,
        line: str,
        currency: CurrencyCode = CurrencyCode.UNKNOWN
    ) -> Optional[LineItem]:
        """
        Match one line against the row shapes.

        Returns:
            LineItem, or None when no shape yields a usable row.
        """
        for shape, pattern in ROW_PATTERNS:
            match = pattern.match(line)
            if match is None:
                continue

            item = self._build_item(match, currency)
            if item is not None:
                logger.debug(f"Row '{line}' matched shape '{shape}'")
                return item
        return None

    def _build_item(self, match, currency: CurrencyCode) -> Optional[LineItem]:
        groups = match.groupdict()

        name = clean_item_name(groups['name'])[:self.max_name_length].strip()
        if len(name) < 2 or not HAS_LETTER_RE.search(name):
            return None

        quantity = int(groups['qty']) if groups.get('qty') else 1
        if quantity < 1:
            return None

        unit_price = parse_minor_units(groups['unit'])
        total_token = groups.get('total')
        line_total = parse_minor_units(total_token) if total_token else unit_price

        prices = complete_prices(quantity, unit_price, line_total)
        if prices is None:
            return None

        return LineItem(
            name=name,
            quantity=quantity,
            unit_price=MonetaryAmount(prices[0], currency),
            line_total=MonetaryAmount(prices[1], currency)
        )
