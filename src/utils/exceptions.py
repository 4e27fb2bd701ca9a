"""
Custom Exceptions Module.

This module defines the exceptions raised by the receipt reconciliation
engine. Extraction quality problems (a missing date, an unreadable total)
are never raised; they are reported as issues on the parsed record. Only
contract violations and I/O failures around the engine become exceptions.

Exception Hierarchy:
    InvoiceExtractionError (base)
    ├── InputError
    │   ├── InvalidInputError
    │   ├── UnsupportedFileTypeError
    │   ├── FileNotFoundError
    │   └── CorruptedFileError
    └── ConfigurationError
"""

class InvoiceExtractionError(Exception):
    """
    Root of the engine's exception tree.

    ``details`` carries machine-readable context (paths, argument names)
    that the CLI logs next to the message.
    """

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        return f"{self.message} | Details: {self.details}"


# =============================================================================
# INPUT ERRORS
# =============================================================================

class InputError(InvoiceExtractionError):
    """Problems with the text a caller or the CLI hands to the engine."""
    pass

class InvalidInputError(InputError):
    """
    Raised when the caller breaks the parser's input contract.

    Example:
        >>> raise InvalidInputError("text", None, "expected str")
    """

    def __init__(self, argument: str, value, reason: str = None):
        message = f"Invalid value for '{argument}'"
        details = {
            "argument": argument,
            "type": type(value).__name__,
            "reason": reason
        }
        super().__init__(message, details)

class UnsupportedFileTypeError(InputError):
    """
    Raised when an unsupported file type is provided.

    Example:
        >>> raise UnsupportedFileTypeError(".doc", [".txt"])
    """

    def __init__(self, file_type: str, supported_types: list):
        message = f"Unsupported file type: '{file_type}'"
        details = {"file_type": file_type, "supported_types": supported_types}
        super().__init__(message, details)

class FileNotFoundError(InputError):
    """An input path named on the command line does not exist."""

    def __init__(self, filepath: str):
        message = f"File not found: {filepath}"
        details = {"filepath": filepath}
        super().__init__(message, details)

class CorruptedFileError(InputError):
    """A text, image or PDF source could not be decoded."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Corrupted or unreadable file: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)

# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================

class ConfigurationError(InvoiceExtractionError):
    """Raised when a configuration file is missing or malformed."""
    pass

__all__ = [
    'InvoiceExtractionError',
    'InputError',
    'InvalidInputError',
    'UnsupportedFileTypeError',
    'FileNotFoundError',
    'CorruptedFileError',
    'ConfigurationError',
]
