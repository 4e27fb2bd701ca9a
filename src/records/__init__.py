"""
Record Types for the Receipt Reconciliation Engine.

This module defines the immutable value types that flow out of the
parsing pipeline: money, line items, issues, corrections and the final
parsed invoice.

Author: ML Engineering Team
"""

from .parsed_invoice import (
    CurrencyCode,
    CorrectionReason,
    MonetaryAmount,
    LineItem,
    Issue,
    Correction,
    ParsedInvoice,
    ISSUE_FIELDS,
    MERCHANT_UNKNOWN
)

__all__ = [
    'CurrencyCode',
    'CorrectionReason',
    'MonetaryAmount',
    'LineItem',
    'Issue',
    'Correction',
    'ParsedInvoice',
    'ISSUE_FIELDS',
    'MERCHANT_UNKNOWN'
]
