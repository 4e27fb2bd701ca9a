"""
Utility Module for the Receipt Reconciliation Engine.

This module provides common utilities used across all other modules:
    - Logging configuration
    - Exceptions
    - File and dictionary helpers
"""

from .logger import setup_logger, get_logger
from .helpers import (
    ensure_directory,
    get_file_extension,
    generate_timestamp,
    safe_filename,
    merge_dicts
)

__all__ = [
    'setup_logger',
    'get_logger',
    'ensure_directory',
    'get_file_extension',
    'generate_timestamp',
    'safe_filename',
    'merge_dicts'
]
