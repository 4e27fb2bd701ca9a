"""
Main Input Handler Module.

This module provides the TextInputHandler class that turns input files
into document text for the parser. Plain-text files are read directly.
Scanned images and PDFs need an OCR engine or a PDF text-layer reader;
those are not part of this package and are injected by the caller.

Usage:
    from src.input_handler import TextInputHandler

    handler = TextInputHandler()
    document = handler.load("receipt.txt")

    # With collaborators for other formats
    handler = TextInputHandler(recognizer=my_ocr, text_layer_extractor=my_pdf_reader)
    documents = handler.load_batch("./receipts/")

Classes:
    TextDocument: Loaded text plus metadata
    TextInputHandler: Main class for file input handling
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

from config import get_config
from src.utils.logger import get_logger
from src.utils.helpers import get_file_extension, validate_file_exists
from src.utils.exceptions import (
    InputError,
    UnsupportedFileTypeError,
    FileNotFoundError,
    CorruptedFileError
)

# Initialize module logger
logger = get_logger(__name__)


class TextRecognizer(Protocol):
    """OCR capability: image file -> recognized text."""

    def recognize(self, path: Path) -> str:
        ...


class TextLayerExtractor(Protocol):
    """PDF capability: document file -> embedded text layer."""

    def extract_text(self, path: Path) -> str:
        ...


@dataclass
class TextDocument:
    """
    Result of loading one input file.

    Attributes:
        filepath: Original file path
        filename: Original filename
        source: How the text was obtained ('text', 'ocr', 'pdf_text' or 'unknown')
        text: Document text (empty on failure)
        success: Whether loading was successful
        error: Error message if loading failed
    """
    filepath: str
    filename: str
    source: str
    text: str = ""
    success: bool = True
    error: Optional[str] = None

    def __repr__(self) -> str:
        return (
            f"TextDocument(filename='{self.filename}', "
            f"source='{self.source}', "
            f"chars={len(self.text)}, "
            f"success={self.success})"
        )


class TextInputHandler:
    """
    Loads document text from files.

    Attributes:
        text_extensions: Suffixes read as plain text
        encoding: Encoding of plain-text files
        recognizer: Optional OCR collaborator for image files
        text_layer_extractor: Optional collaborator for PDF files

    Example:
        >>> handler = TextInputHandler()
        >>> doc = handler.load("receipt.txt")
        >>> if doc.success:
        ...     record = parse_invoice(doc.text)
    """

    PDF_EXTENSIONS = {'.pdf'}
    IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.tiff', '.tif', '.bmp'}

    def __init__(
        self,
        recognizer: Optional[TextRecognizer] = None,
        text_layer_extractor: Optional[TextLayerExtractor] = None
    ) -> None:
        """
        Initialize the TextInputHandler.

        Args:
            recognizer: OCR collaborator used for image files.
            text_layer_extractor: Collaborator used for PDF files.
        """
        self.text_extensions = {
            ext.lower() for ext in get_config("input.text_extensions", [".txt"])
        }
        self.encoding = get_config("input.encoding", "utf-8")
        self.recognizer = recognizer
        self.text_layer_extractor = text_layer_extractor

        logger.debug(f"TextInputHandler initialized with extensions: {self.supported_extensions}")

    @property
    def supported_extensions(self) -> set:
        """Suffixes this handler can currently load."""
        extensions = set(self.text_extensions)
        if self.text_layer_extractor is not None:
            extensions |= self.PDF_EXTENSIONS
        if self.recognizer is not None:
            extensions |= self.IMAGE_EXTENSIONS
        return extensions

    def detect_source(self, filepath: Union[str, Path]) -> str:
        """
        Decide how text is obtained for a file.

        Returns:
            'text', 'pdf_text' or 'ocr'.

        Raises:
            UnsupportedFileTypeError: If no reader handles the suffix.
        """
        extension = get_file_extension(filepath)

        if extension in self.text_extensions:
            return 'text'
        if extension in self.PDF_EXTENSIONS and self.text_layer_extractor is not None:
            return 'pdf_text'
        if extension in self.IMAGE_EXTENSIONS and self.recognizer is not None:
            return 'ocr'

        raise UnsupportedFileTypeError(extension, sorted(self.supported_extensions))

    def validate_file(self, filepath: Union[str, Path]) -> Path:
        """
        Validate that a file exists and is accessible.

        Raises:
            FileNotFoundError: If file doesn't exist.
            InputError: If the path is not a regular file.
        """
        path = Path(filepath)

        if not path.exists():
            raise FileNotFoundError(str(filepath))

        if not validate_file_exists(path):
            raise InputError(f"Path is not a file: {filepath}")

        return path

    def read_text_file(self, path: Path) -> str:
        """
        Read a plain-text file.

        A UTF-8 byte order mark is dropped and undecodable bytes are
        replaced, since OCR dumps are frequently not clean UTF-8.

        Raises:
            CorruptedFileError: If the file cannot be read.
        """
        try:
            data = path.read_bytes()
        except OSError as e:
            raise CorruptedFileError(str(path), str(e))

        encoding = 'utf-8-sig' if self.encoding.lower().replace('_', '-') == 'utf-8' else self.encoding
        try:
            return data.decode(encoding, errors='replace')
        except LookupError as e:
            raise CorruptedFileError(str(path), f"unknown encoding: {e}")

    def load(self, filepath: Union[str, Path]) -> TextDocument:
        """
        Load the text of one input file.

        Args:
            filepath: Path to the receipt or invoice file.

        Returns:
            TextDocument; on failure success is False and error is set.
        """
        filepath = str(filepath)
        logger.info(f"Loading file: {filepath}")

        try:
            path = self.validate_file(filepath)
            source = self.detect_source(path)

            if source == 'text':
                text = self.read_text_file(path)
            elif source == 'pdf_text':
                text = self.text_layer_extractor.extract_text(path)
            else:
                text = self.recognizer.recognize(path)

            logger.info(f"Successfully loaded: {path.name} ({len(text)} chars via {source})")
            return TextDocument(
                filepath=filepath,
                filename=path.name,
                source=source,
                text=text
            )

        except InputError as e:
            logger.error(f"Input error for {filepath}: {e}")
            return TextDocument(
                filepath=filepath,
                filename=Path(filepath).name,
                source='unknown',
                success=False,
                error=str(e)
            )

    def load_batch(self, directory: Union[str, Path]) -> List[TextDocument]:
        """
        Load every supported file of a directory, sorted by name.

        Raises:
            FileNotFoundError: If the directory doesn't exist.
        """
        dir_path = Path(directory)
        if not dir_path.is_dir():
            raise FileNotFoundError(str(directory))

        files = sorted(
            p for p in dir_path.iterdir()
            if p.is_file() and p.suffix.lower() in self.supported_extensions
        )

        if not files:
            logger.warning(f"No supported files found in: {dir_path}")
        else:
            logger.info(f"Found {len(files)} files to load")

        return [self.load(p) for p in files]

    def get_stats(self, documents: List[TextDocument]) -> Dict[str, int]:
        """Count loaded and failed documents."""
        loaded = sum(1 for d in documents if d.success)
        return {
            'total': len(documents),
            'loaded': loaded,
            'failed': len(documents) - loaded
        }
