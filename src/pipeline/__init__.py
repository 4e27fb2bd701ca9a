"""
Pipeline Module for the Receipt Reconciliation Engine.

This module composes normalization, field extraction and reconciliation
into a single text -> ParsedInvoice function.

Author: ML Engineering Team
"""

from .invoice_parser import InvoiceParser, parse_invoice

__all__ = ['InvoiceParser', 'parse_invoice']
