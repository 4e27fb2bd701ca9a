"""
Text Normalizer Module.

Turns raw OCR / PDF text into an ordered sequence of trimmed, non-empty
lines. Every extractor works on this line view.
"""

import re
from typing import Tuple

from src.utils.logger import get_logger

logger = get_logger(__name__)

# Runs of two or more spaces and non-breaking spaces; a lone NBSP is left alone
_SPACE_RUN_RE = re.compile(r'[ \u00a0]{2,}')


class TextNormalizer:
    """
    Whitespace normalizer for extracted document text.

    Rules:
        - CRLF and lone CR become LF
        - Tabs become a single space
        - Runs of two or more spaces / non-breaking spaces collapse to one space
        - Lines are trimmed and empty lines dropped

    Example:
        >>> TextNormalizer().to_lines("Acme\\t Store\\r\\n\\r\\nTotal  5.00 ")
        ('Acme Store', 'Total 5.00')
    """

    def normalize(self, text: str) -> str:
        """
        Normalize line endings and horizontal whitespace.

        Args:
            text: Raw text, may be empty.

        Returns:
            Text with unified line endings and collapsed spaces.
        """
        if not text:
            return ""

        text = text.replace('\r\n', '\n').replace('\r', '\n')
        text = text.replace('\t', ' ')
        return _SPACE_RUN_RE.sub(' ', text).strip()

    def to_lines(self, text: str) -> Tuple[str, ...]:
        """
        Split text into trimmed, non-empty lines.

        Args:
            text: Raw text, may be empty.

        Returns:
            Tuple of lines in document order.
        """
        lines = tuple(
            line.strip()
            for line in self.normalize(text).split('\n')
            if line.strip()
        )
        logger.debug(f"Normalized text into {len(lines)} lines")
        return lines


_default_normalizer = TextNormalizer()


def normalize_text(text: str) -> str:
    """Module-level shortcut for TextNormalizer().normalize()."""
    return _default_normalizer.normalize(text)


def split_lines(text: str) -> Tuple[str, ...]:
    """Module-level shortcut for TextNormalizer().to_lines()."""
    return _default_normalizer.to_lines(text)
