"""
Input Handler Module for the Receipt Reconciliation Engine.

This module provides functionality for:
    - Validating input paths
    - Reading plain-text OCR / PDF dumps
    - Delegating images and PDFs to injected OCR / text-layer collaborators

Author: ML Engineering Team
"""

from .handler import (
    TextInputHandler,
    TextDocument,
    TextRecognizer,
    TextLayerExtractor
)

__all__ = [
    'TextInputHandler',
    'TextDocument',
    'TextRecognizer',
    'TextLayerExtractor'
]
