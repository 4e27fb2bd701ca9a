"""
Logging Configuration Module.

Every module of the engine logs through a child of the
``receipt_reconciler`` logger. The CLI configures that logger once from
the ``logging`` section of the settings; library callers may configure
it themselves or leave it alone (records then propagate to the
interpreter's root logger).

Console output is colored with colorama and written to stderr, leaving
stdout to the JSON results. A size-rotated log file can be added.

Usage:
    from src.utils.logger import setup_logger, get_logger

    setup_logger(level="DEBUG")
    logger = get_logger(__name__)
    logger.info("Parsing receipt text...")
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, TextIO

import colorama
from colorama import Fore, Style

colorama.init()

# Namespace shared by every logger of the engine
ROOT_LOGGER_NAME = "receipt_reconciler"

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """
    Formatter that wraps each console line in a per-level color.

    DEBUG is cyan, INFO green, WARNING yellow, ERROR red and CRITICAL
    bright red.
    """

    COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED + Style.BRIGHT,
    }
    RESET = Style.RESET_ALL

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelno, '')
        return f"{color}{super().format(record)}{self.RESET}"


def _console_handler(
    level: int,
    formatter: logging.Formatter,
    stream: Optional[TextIO]
) -> logging.Handler:
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _file_handler(
    log_file: str,
    level: int,
    formatter: logging.Formatter,
    max_bytes: int,
    backup_count: int
) -> logging.Handler:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logger(
    level: str = "INFO",
    log_format: Optional[str] = None,
    date_format: Optional[str] = None,
    log_file: Optional[str] = None,
    max_bytes: int = 10485760,  # 10 MB
    backup_count: int = 5,
    colorize: bool = True,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Configure the engine's root logger.

    Calling it again replaces the previously installed handlers.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Record format, DEFAULT_FORMAT if None.
        date_format: Timestamp format, DEFAULT_DATE_FORMAT if None.
        log_file: Rotating log file; None disables file logging.
        max_bytes: File size that triggers rotation.
        backup_count: Rotated files kept.
        colorize: Color console records by level.
        stream: Console stream (stderr if None).

    Returns:
        The ``receipt_reconciler`` logger.

    Example:
        >>> setup_logger(level="DEBUG", log_file="logs/receipt_reconciler.log")
    """
    log_format = log_format or DEFAULT_FORMAT
    date_format = date_format or DEFAULT_DATE_FORMAT
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_formatter_class = ColoredFormatter if colorize else logging.Formatter
    root_logger.addHandler(_console_handler(
        numeric_level,
        console_formatter_class(log_format, datefmt=date_format),
        stream
    ))

    if log_file:
        root_logger.addHandler(_file_handler(
            log_file,
            numeric_level,
            logging.Formatter(log_format, datefmt=date_format),
            max_bytes,
            backup_count
        ))

    # Records stop here instead of reaching the interpreter's root logger
    root_logger.propagate = False

    root_logger.debug("Logging initialized")
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Logger for one module, placed under the engine's namespace.

    Example:
        >>> get_logger("src.pipeline.invoice_parser").name
        'receipt_reconciler.src.pipeline.invoice_parser'
    """
    if name.startswith(ROOT_LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logger_from_config() -> logging.Logger:
    """Configure logging from the ``logging`` section of the settings."""
    from config import get_config

    log_file = None
    if get_config("logging.file.enabled", False):
        log_file = get_config("logging.file.path")

    return setup_logger(
        level=get_config("logging.level", "INFO"),
        log_format=get_config("logging.format"),
        date_format=get_config("logging.date_format"),
        log_file=log_file,
        max_bytes=get_config("logging.file.max_bytes", 10485760),
        backup_count=get_config("logging.file.backup_count", 5),
        colorize=get_config("logging.console.colorize", True)
    )
