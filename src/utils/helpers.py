"""
Helper Utilities Module.

Small filesystem and dictionary helpers shared by the configuration
layer, the input handler and the CLI's result writer.

Functions:
    - ensure_directory: Create an output directory on demand
    - get_file_extension: Lower-cased suffix used to pick a text source
    - generate_timestamp: Timestamp fragment for result file names
    - safe_filename: Merchant name -> file-system-safe base name
    - validate_file_exists: Regular-file check for input paths
    - merge_dicts: Deep merge of a user config over the defaults
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Union

_UNSAFE_FILENAME_RE = re.compile(r'[^A-Za-z0-9._-]')


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Create a directory (and its parents) unless it already exists.

    Args:
        path: Directory to create, e.g. the CLI's --output directory.

    Returns:
        The directory as a Path.

    Example:
        >>> ensure_directory("parsed/2024")
        PosixPath('parsed/2024')
    """
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def get_file_extension(filepath: Union[str, Path]) -> str:
    """
    Lower-cased suffix of a path, dot included ("" when there is none).

    Example:
        >>> get_file_extension("scans/Receipt.TXT")
        '.txt'
    """
    return Path(filepath).suffix.lower()


def generate_timestamp(format_str: str = "%Y%m%d_%H%M%S") -> str:
    """Current local time rendered with strftime."""
    return datetime.now().strftime(format_str)


def safe_filename(filename: str, replacement: str = "_") -> str:
    """
    Turn an arbitrary label (usually a merchant name) into a file name.

    Everything except ASCII letters, digits, dots, dashes and underscores
    is replaced and leading/trailing dots are dropped.

    Args:
        filename: Label to sanitize.
        replacement: Substitute for each rejected character.

    Returns:
        Sanitized name, or "unnamed" when nothing usable is left.

    Example:
        >>> safe_filename("Acme Store: Main/2")
        'Acme_Store__Main_2'
        >>> safe_filename("...")
        'unnamed'
    """
    sanitized = _UNSAFE_FILENAME_RE.sub(replacement, filename).strip('.')
    return sanitized or "unnamed"


def validate_file_exists(filepath: Union[str, Path]) -> bool:
    """True when the path exists and is a regular file."""
    return Path(filepath).is_file()


def merge_dicts(base: dict, override: dict) -> dict:
    """
    Recursively merge ``override`` into a copy of ``base``.

    Nested mappings are merged key by key; any other value in
    ``override`` replaces the one in ``base``. Neither input is modified.

    Example:
        >>> merge_dicts({"reconciliation": {"min_tolerance": 100, "tolerance_divisor": 100}},
        ...             {"reconciliation": {"min_tolerance": 500}})
        {'reconciliation': {'min_tolerance': 500, 'tolerance_divisor': 100}}
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_dicts(current, value)
        else:
            merged[key] = value
    return merged
