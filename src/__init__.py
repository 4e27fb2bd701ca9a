"""
Receipt Reconciliation Engine - Source Package.

This package turns OCR / PDF text dumps of receipts and invoices into
structured, reconciled records. Each module has a single responsibility.

Modules:
    - records: Immutable result types (ParsedInvoice, LineItem, ...)
    - normalization: Whitespace, currency and numeric-token handling
    - extraction: Merchant, date, total and line-item strategies
    - reconciliation: Total reconciliation, confidence and issues
    - pipeline: Text -> ParsedInvoice composition
    - input_handler: File and collaborator-based text loading
    - utils: Logging, exceptions and helpers

Architecture:
    Input -> Normalize -> Extract fields -> Reconcile -> ParsedInvoice
"""

__version__ = "1.0.0"
__author__ = "ML Engineering Team"

__all__ = [
    'records',
    'normalization',
    'extraction',
    'reconciliation',
    'pipeline',
    'input_handler',
    'utils'
]
