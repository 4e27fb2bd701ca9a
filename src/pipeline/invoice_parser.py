"""
Invoice Parser Module.

This module provides the InvoiceParser class that runs the whole
text-to-record pipeline:

    Normalize -> Currency -> Merchant -> Date -> Total -> Items
              -> Reconcile -> Score -> Report -> ParsedInvoice

Parsing is synchronous and side-effect free. Each call builds a fresh
ParsedInvoice; nothing is shared between calls except read-only
configuration, so one parser may serve several threads.

Author: ML Engineering Team
"""

import numbers
from typing import Optional

from src.records import MERCHANT_UNKNOWN, MonetaryAmount, ParsedInvoice
from src.normalization import CurrencyDetector, TextNormalizer
from src.extraction import (
    DateExtractor,
    DocumentText,
    LineItemExtractor,
    MerchantExtractor,
    TotalExtractor
)
from src.reconciliation import ConfidenceScorer, IssueReporter, Reconciler
from src.utils.exceptions import InvalidInputError
from src.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)


class InvoiceParser:
    """
    Turns extracted document text into a ParsedInvoice.

    Malformed or incomplete text never raises: missing fields are
    reported as issues on the record. Only contract violations (text
    that is not a string, an OCR hint outside 0-100) raise
    InvalidInputError.

    Attributes:
        normalizer: TextNormalizer instance
        currency_detector: CurrencyDetector instance
        merchant_extractor: MerchantExtractor instance
        date_extractor: DateExtractor instance
        total_extractor: TotalExtractor instance
        item_extractor: LineItemExtractor instance
        reconciler: Reconciler instance
        scorer: ConfidenceScorer instance
        reporter: IssueReporter instance

    Example:
        >>> parser = InvoiceParser()
        >>> record = parser.parse("Acme Store\\n12/03/2024\\nBread 2 40.00 80.00\\nTotal: ₹80.00")
        >>> record.merchant, record.date, record.total.minor_units
        ('Acme Store', '2024-03-12', 8000)
        >>> record.status
        'valid'
    """

    def __init__(self) -> None:
        """Initialize the parser with all pipeline components."""
        self.normalizer = TextNormalizer()
        self.currency_detector = CurrencyDetector()

        self.merchant_extractor = MerchantExtractor()
        self.date_extractor = DateExtractor()
        self.total_extractor = TotalExtractor(self.currency_detector)
        self.item_extractor = LineItemExtractor()

        self.reconciler = Reconciler()
        self.scorer = ConfidenceScorer()
        self.reporter = IssueReporter()

        logger.debug("InvoiceParser initialized")

    def parse(self, text: str, ocr_quality: Optional[float] = None) -> ParsedInvoice:
        """
        Parse one document's text.

        Args:
            text: Text produced by OCR or a PDF text layer. May be empty.
            ocr_quality: Optional OCR-quality hint (0-100), used only as a
                        small confidence bonus.

        Returns:
            A new, immutable ParsedInvoice.

        Raises:
            InvalidInputError: If text is not a string or the hint is
                              not a number within 0-100.
        """
        self._validate_inputs(text, ocr_quality)

        document = DocumentText.build(text, self.normalizer, self.currency_detector)
        logger.debug(
            f"Parsing document: {len(document.lines)} lines, "
            f"currency {document.currency.value}"
        )

        # Step 1: Header fields
        merchant = self.merchant_extractor.extract(document) or MERCHANT_UNKNOWN
        date_match = self.date_extractor.extract(document)
        date = date_match.iso if date_match else None

        # Step 2: Money
        total_minor_units = self.total_extractor.extract(document)
        total = (
            MonetaryAmount(total_minor_units, document.currency)
            if total_minor_units is not None else None
        )
        items = self.item_extractor.extract(document)

        # Step 3: Reconcile and report
        reconciliation = self.reconciler.reconcile(total, items, document.currency)
        report = self.reporter.report(merchant, date, items, reconciliation)
        confidence = self.scorer.score(merchant, date, total, items, ocr_quality)

        record = ParsedInvoice(
            merchant=merchant,
            date=date,
            total=total,
            items=items,
            issues=report.ordered_issues(),
            corrections=tuple(report.corrections),
            corrected_total=reconciliation.corrected_total,
            confidence=confidence,
            raw_text=text,
            currency=document.currency
        )

        self._log_summary(record)
        return record

    @staticmethod
    def _validate_inputs(text, ocr_quality) -> None:
        if not isinstance(text, str):
            raise InvalidInputError("text", text, "expected str")

        if ocr_quality is None:
            return
        if isinstance(ocr_quality, bool) or not isinstance(ocr_quality, numbers.Real):
            raise InvalidInputError("ocr_quality", ocr_quality, "expected a number")
        if not 0 <= ocr_quality <= 100:
            raise InvalidInputError("ocr_quality", ocr_quality, "must be within 0..100")

    @staticmethod
    def _log_summary(record: ParsedInvoice) -> None:
        logger.info(
            f"Parsed '{record.merchant}': "
            f"{len(record.items)} items, "
            f"{len(record.issues)} issues, "
            f"{len(record.corrections)} corrections, "
            f"confidence {record.confidence}"
        )

        for issue in record.issues:
            logger.debug(f"Issue: {issue.code}")


def parse_invoice(text: str, ocr_quality: Optional[float] = None) -> ParsedInvoice:
    """
    Convenience function: parse text with a freshly built InvoiceParser.

    Args:
        text: Document text.
        ocr_quality: Optional OCR-quality hint (0-100).

    Returns:
        ParsedInvoice.
    """
    return InvoiceParser().parse(text, ocr_quality)
