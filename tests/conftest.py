"""
Shared pytest fixtures for the receipt reconciliation engine.
"""

import logging

import pytest

from config import ConfigurationManager
from src.utils.logger import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def fresh_config():
    """Every test starts from the bundled settings."""
    ConfigurationManager.reset()
    yield
    ConfigurationManager.reset()


@pytest.fixture(autouse=True)
def fresh_logging():
    """Drop handlers a CLI test attached to captured streams."""
    yield
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True


@pytest.fixture
def clean_receipt_text():
    return "Acme Store\n12/03/2024\nBread 2 40.00 80.00\nTotal: ₹80.00"


@pytest.fixture
def grocery_receipt_text():
    return (
        "FRESH MART SUPERMARKET\n"
        "GSTIN: 29ABCDE1234F1Z5\n"
        "Phone: 9876543210\n"
        "Date: 05/11/2023\n"
        "Milk 1L 2 30.00 60.00\n"
        "Whole wheat bread\n"
        "1 45.00 45.00\n"
        "Eggs (12) 1 84.50 84.50\n"
        "Sub Total 189.50\n"
        "Grand Total Rs. 189.50\n"
        "Thank you, visit again"
    )
