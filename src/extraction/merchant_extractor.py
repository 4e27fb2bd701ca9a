"""
Merchant Extractor Module.

Picks the most plausible header line as the merchant name.

Author: ML Engineering Team
"""

from typing import Optional

from config import get_config
from src.utils.logger import get_logger
from .base import DocumentText, FieldStrategy, StrategyChain
from .patterns import (
    HAS_LETTER_RE,
    MERCHANT_BLACKLIST_RE,
    MERCHANT_DISALLOWED_RE
)

logger = get_logger(__name__)


def clean_merchant_name(line: str) -> str:
    """Drop characters that never occur in a business name and tidy spaces."""
    return ' '.join(MERCHANT_DISALLOWED_RE.sub('', line).split())


class HeaderLineStrategy(FieldStrategy[str]):
    """
    First header line that is not a structural label.

    A line qualifies when it contains no blacklisted keyword and, once
    cleaned, still holds an alphanumeric character and is longer than
    two characters.
    """

    name = "header_line"

    def __init__(self, scan_lines: int = 5) -> None:
        self.scan_lines = scan_lines

    def extract(self, document: DocumentText) -> Optional[str]:
        for line in document.lines[:self.scan_lines]:
            if MERCHANT_BLACKLIST_RE.search(line):
                continue

            cleaned = clean_merchant_name(line)
            if len(cleaned) > 2 and any(char.isalnum() for char in cleaned):
                return cleaned
        return None


class AnyLetterLineStrategy(FieldStrategy[str]):
    """First line anywhere in the document that contains a letter."""

    name = "any_letter_line"

    def extract(self, document: DocumentText) -> Optional[str]:
        for line in document.lines:
            if HAS_LETTER_RE.search(line):
                return clean_merchant_name(line) or line
        return None


class MerchantExtractor:
    """
    Merchant name extraction.

    Returns None when nothing plausible exists; the pipeline then
    records the "UNKNOWN" sentinel and a merchant.missing issue.

    Example:
        >>> MerchantExtractor().extract(DocumentText.build("TAX INVOICE\\nAcme Store"))
        'Acme Store'
    """

    def __init__(self) -> None:
        self.max_length = get_config("extraction.merchant.max_length", 120)
        self.chain: StrategyChain[str] = StrategyChain("merchant", [
            HeaderLineStrategy(get_config("extraction.merchant.scan_lines", 5)),
            AnyLetterLineStrategy(),
        ])

    def extract(self, document: DocumentText) -> Optional[str]:
        merchant = self.chain.extract(document)
        if merchant is None:
            return None
        return merchant[:self.max_length].strip()
