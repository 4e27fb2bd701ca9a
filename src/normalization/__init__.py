"""
Normalization Module for the Receipt Reconciliation Engine.

This module provides the leaf utilities every extractor relies on:
    - Whitespace normalization and line splitting
    - Minor-unit-exact amount parsing and formatting
    - Currency detection

Author: ML Engineering Team
"""

from .text_normalizer import TextNormalizer, normalize_text, split_lines
from .currency_detector import CurrencyDetector, CURRENCY_SYMBOLS
from .numeric_parser import (
    parse_minor_units,
    parse_all_amounts,
    iter_amount_tokens,
    format_minor_units
)

__all__ = [
    'TextNormalizer',
    'normalize_text',
    'split_lines',
    'CurrencyDetector',
    'CURRENCY_SYMBOLS',
    'parse_minor_units',
    'parse_all_amounts',
    'iter_amount_tokens',
    'format_minor_units'
]
