"""
Reconciliation Module for the Receipt Reconciliation Engine.

This module provides functionality for:
    - Comparing the stated total with the line-item sum
    - Confidence scoring
    - Issue and correction reporting

Author: ML Engineering Team
"""

from .reconciler import Reconciler, ReconciliationResult, compute_items_sum
from .confidence import ConfidenceScorer
from .issue_reporter import IssueReporter, IssueReport

__all__ = [
    'Reconciler',
    'ReconciliationResult',
    'compute_items_sum',
    'ConfidenceScorer',
    'IssueReporter',
    'IssueReport'
]
