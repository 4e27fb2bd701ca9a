"""
End-to-end tests for the text -> ParsedInvoice pipeline.
"""

import json
from dataclasses import FrozenInstanceError
from datetime import date

import pytest

from src.records import (
    CorrectionReason,
    CurrencyCode,
    MonetaryAmount,
    ParsedInvoice
)
from src.pipeline import InvoiceParser, parse_invoice
from src.utils.exceptions import InvalidInputError


@pytest.fixture
def parser():
    return InvoiceParser()


class TestCleanReceipt:

    def test_fields(self, parser, clean_receipt_text):
        record = parser.parse(clean_receipt_text)

        assert record.merchant == "Acme Store"
        assert record.date == "2024-03-12"
        assert record.currency == CurrencyCode.INR
        assert record.total == MonetaryAmount(8000, CurrencyCode.INR)
        assert record.corrected_total == record.total
        assert len(record.items) == 1

        bread = record.items[0]
        assert bread.name == "Bread"
        assert bread.quantity == 2
        assert bread.unit_price.minor_units == 4000
        assert bread.line_total.minor_units == 8000

    def test_nothing_to_report(self, parser, clean_receipt_text):
        record = parser.parse(clean_receipt_text)
        assert record.issues == ()
        assert record.corrections == ()
        assert record.status == "valid"
        assert record.confidence == 70
        assert record.raw_text == clean_receipt_text

    def test_ocr_quality_hint(self, parser, clean_receipt_text):
        assert parser.parse(clean_receipt_text, ocr_quality=80).confidence == 78


class TestIncompleteInput:

    @pytest.mark.parametrize("text", ["", "   \n\t\r\n"])
    def test_empty_input(self, parser, text):
        record = parser.parse(text)

        assert record.merchant == "UNKNOWN"
        assert record.date is None
        assert record.total is None
        assert record.corrected_total is None
        assert record.items == ()
        assert record.currency == CurrencyCode.UNKNOWN
        assert record.issue_codes == (
            "merchant.missing",
            "date.missing_or_unrecognized",
            "total.missing_total",
            "items.no_items_detected",
        )
        assert record.confidence == 0
        assert record.status == "needs_review"

    def test_missing_date(self, parser):
        record = parser.parse("Acme Store\nBread 40.00\nTotal 40.00")
        assert record.issue_codes == ("date.missing_or_unrecognized",)
        assert record.confidence == 55

    def test_garbage_never_raises(self, parser):
        record = parser.parse("%%%\n@@ ## !!\n----")
        assert record.items == ()
        assert record.total is None


class TestReconciliation:

    def test_multi_line_receipt(self, parser, grocery_receipt_text):
        record = parser.parse(grocery_receipt_text)

        assert record.merchant == "FRESH MART SUPERMARKET"
        assert record.date == "2023-11-05"
        assert record.total.minor_units == 18950
        assert [item.name for item in record.items] == ["Milk 1L", "Whole wheat bread", "Eggs"]
        assert record.status == "valid"
        assert record.confidence == 80

    def test_tax_inclusive_total_is_replaced_by_items_sum(self, parser, grocery_receipt_text):
        text = grocery_receipt_text.replace(
            "Grand Total Rs. 189.50",
            "CGST 2.5% 4.74\nSGST 2.5% 4.74\nGrand Total Rs. 198.98"
        )
        record = parser.parse(text)

        assert record.total.minor_units == 19898
        assert record.corrected_total.minor_units == 18950
        assert [c.reason for c in record.corrections] == [CorrectionReason.ITEMS_SUM_MISMATCH]
        assert record.issues == ()
        assert record.status == "needs_review"

    def test_items_sum_matches_rows(self, parser, grocery_receipt_text):
        record = parser.parse(grocery_receipt_text)
        expected = sum(
            item.line_total.minor_units if item.line_total
            else item.unit_price.minor_units * item.quantity
            for item in record.items
        )
        assert record.items_sum == expected


class TestRecordProperties:

    def test_parsing_is_idempotent(self, parser, grocery_receipt_text):
        assert parser.parse(grocery_receipt_text) == parser.parse(grocery_receipt_text)
        assert parse_invoice(grocery_receipt_text) == parser.parse(grocery_receipt_text)

    def test_money_is_integer_minor_units(self, parser, grocery_receipt_text):
        record = parser.parse(grocery_receipt_text)
        amounts = [record.total, record.corrected_total]
        for item in record.items:
            amounts.extend([item.unit_price, item.line_total])
        assert all(type(amount.minor_units) is int for amount in amounts)

    def test_date_round_trips(self, parser, clean_receipt_text):
        iso = parser.parse(clean_receipt_text).date
        assert date.fromisoformat(iso).isoformat() == iso

    def test_records_are_immutable(self, parser, clean_receipt_text):
        record = parser.parse(clean_receipt_text)
        with pytest.raises(FrozenInstanceError):
            record.merchant = "Other"
        with pytest.raises(FrozenInstanceError):
            record.items[0].quantity = 5

    def test_dict_round_trip(self, parser, grocery_receipt_text):
        record = parser.parse(grocery_receipt_text)
        assert ParsedInvoice.from_dict(record.to_dict()) == record

    def test_json(self, parser, clean_receipt_text):
        data = json.loads(parser.parse(clean_receipt_text).to_json())
        assert data["total"] == {"minor_units": 8000, "currency": "INR"}
        assert data["items"][0]["unit_price"] == {"minor_units": 4000, "currency": "INR"}
        assert data["status"] == "valid"
        assert data["issues"] == []

    def test_display(self, parser, clean_receipt_text):
        view = parser.parse(clean_receipt_text).display()
        assert view["total"] == "₹80.00"
        assert view["items"][0]["line_total"] == "₹80.00"
        assert view["date"] == "2024-03-12"

        empty = parser.parse("").display()
        assert empty["total"] == "-"
        assert empty["date"] == "-"
        assert empty["issues"][0] == "merchant.missing"


class TestContractViolations:

    @pytest.mark.parametrize("text", [None, b"Acme", 42])
    def test_text_must_be_a_string(self, parser, text):
        with pytest.raises(InvalidInputError) as exc_info:
            parser.parse(text)
        assert exc_info.value.details["argument"] == "text"

    @pytest.mark.parametrize("quality", [-5, 150, True, "80"])
    def test_bad_ocr_quality(self, parser, quality):
        with pytest.raises(InvalidInputError):
            parser.parse("Acme", ocr_quality=quality)


def test_monetary_amount_rejects_floats():
    with pytest.raises(TypeError):
        MonetaryAmount(80.0)
    with pytest.raises(TypeError):
        MonetaryAmount(True)
