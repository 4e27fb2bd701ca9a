"""
Field Extraction Module for the Receipt Reconciliation Engine.

This module provides one extractor per invoice field. Merchant, date and
total are each found by an ordered chain of independent strategies;
line items are detected by matching row shapes.

Author: ML Engineering Team
"""

from .base import DocumentText, FieldStrategy, StrategyChain
from .date_extractor import DateExtractor, DateMatch
from .merchant_extractor import MerchantExtractor
from .total_extractor import TotalExtractor
from .line_item_extractor import LineItemExtractor

__all__ = [
    'DocumentText',
    'FieldStrategy',
    'StrategyChain',
    'DateExtractor',
    'DateMatch',
    'MerchantExtractor',
    'TotalExtractor',
    'LineItemExtractor'
]
