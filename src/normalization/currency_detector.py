"""
Currency Detector Module.

Scans text for currency symbols and codes and maps them onto the closed
CurrencyCode set. Detection is table driven: the first table entry with
a match wins, so INR markers take precedence over a stray "$".

Author: ML Engineering Team
"""

import re
from typing import Dict, List, Pattern, Tuple

from src.records import CurrencyCode
from src.utils.logger import get_logger

logger = get_logger(__name__)


# Display symbol per currency
CURRENCY_SYMBOLS: Dict[CurrencyCode, str] = {
    CurrencyCode.INR: '₹',
    CurrencyCode.USD: '$',
    CurrencyCode.EUR: '€',
    CurrencyCode.GBP: '£',
    CurrencyCode.JPY: '¥',
    CurrencyCode.UNKNOWN: '',
}

# Ordered detection table: (currency, symbols, word-like codes)
CURRENCY_TABLE: Tuple[Tuple[CurrencyCode, Tuple[str, ...], Tuple[str, ...]], ...] = (
    (CurrencyCode.INR, ('₹',), ('INR', r'Rs\.?')),
    (CurrencyCode.USD, ('$',), ('USD',)),
    (CurrencyCode.EUR, ('€',), ('EUR',)),
    (CurrencyCode.GBP, ('£',), ('GBP',)),
    (CurrencyCode.JPY, ('¥',), ('JPY',)),
)

# Every symbol the detector knows, for stripping from item names
SYMBOL_CHARACTERS = ''.join(
    symbol for _, symbols, _ in CURRENCY_TABLE for symbol in symbols
)


def _compile_entry(symbols: Tuple[str, ...], codes: Tuple[str, ...]) -> Pattern:
    parts = [re.escape(symbol) for symbol in symbols]
    parts.extend(rf'(?<![A-Za-z]){code}(?![A-Za-z])' for code in codes)
    return re.compile('|'.join(parts), re.IGNORECASE)


class CurrencyDetector:
    """
    Table-driven currency detection.

    Example:
        >>> detector = CurrencyDetector()
        >>> detector.detect("Total: Rs. 450")
        <CurrencyCode.INR: 'INR'>
        >>> detector.detect("no money here")
        <CurrencyCode.UNKNOWN: 'UNKNOWN'>
        >>> detector.detect("Total 450", has_amounts=True)
        <CurrencyCode.INR: 'INR'>
    """

    def __init__(self) -> None:
        self._patterns: List[Tuple[CurrencyCode, Pattern]] = [
            (code, _compile_entry(symbols, codes))
            for code, symbols, codes in CURRENCY_TABLE
        ]
        self._any_marker = re.compile(
            '|'.join(pattern.pattern for _, pattern in self._patterns),
            re.IGNORECASE
        )

    def detect(self, text: str, has_amounts: bool = False) -> CurrencyCode:
        """
        Detect the currency of a document or a single line.

        Args:
            text: Text to scan.
            has_amounts: Whether numeric amounts were found. With no
                        marker present this selects INR over UNKNOWN.

        Returns:
            Detected CurrencyCode.
        """
        if text:
            for code, pattern in self._patterns:
                if pattern.search(text):
                    logger.debug(f"Detected currency {code.value}")
                    return code

        if has_amounts:
            return CurrencyCode.INR
        return CurrencyCode.UNKNOWN

    def has_currency_marker(self, line: str) -> bool:
        """Return True when the line carries any known symbol or code."""
        return bool(line) and self._any_marker.search(line) is not None

    @staticmethod
    def symbol_for(currency: CurrencyCode) -> str:
        """Display symbol for a currency ('' for UNKNOWN)."""
        return CURRENCY_SYMBOLS.get(currency, '')
