"""
Parsed Invoice Data Classes.

This module defines the immutable records produced by one run of the
parsing pipeline. Money is always carried as an exact integer count of
minor units (cents, paise) together with an explicit currency code.

Author: ML Engineering Team
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, Optional, Tuple


class CurrencyCode(str, Enum):
    """Closed set of currencies the detector can report."""

    INR = "INR"
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    JPY = "JPY"
    UNKNOWN = "UNKNOWN"


class CorrectionReason(str, Enum):
    """Why the reconciler changed or annotated a value."""

    ITEMS_SUM_MISMATCH = "items_sum_mismatch"
    MINOR_ROUNDING_DIFFERENCE = "minor_rounding_difference"
    INFERRED_FROM_ITEMS = "inferred_from_items"


# Fields an Issue may point at
ISSUE_FIELDS = ("merchant", "date", "total", "items")

MERCHANT_UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class MonetaryAmount:
    """
    An exact amount of money.

    Attributes:
        minor_units: Integer count of the currency's smallest unit.
        currency: Currency the amount is denominated in.
    """
    minor_units: int
    currency: CurrencyCode = CurrencyCode.UNKNOWN

    def __post_init__(self):
        if isinstance(self.minor_units, bool) or not isinstance(self.minor_units, int):
            raise TypeError(
                f"minor_units must be int, got {type(self.minor_units).__name__}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'minor_units': self.minor_units,
            'currency': self.currency.value
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['MonetaryAmount']:
        if data is None:
            return None
        return cls(
            minor_units=int(data['minor_units']),
            currency=CurrencyCode(data.get('currency', CurrencyCode.UNKNOWN.value))
        )


@dataclass(frozen=True)
class LineItem:
    """
    One purchased good or service.

    Attributes:
        name: Item description (non-empty, at most 120 characters)
        quantity: Number of units, at least 1
        unit_price: Price of one unit
        line_total: Price of the whole row
    """
    name: str
    quantity: int = 1
    unit_price: Optional[MonetaryAmount] = None
    line_total: Optional[MonetaryAmount] = None

    @property
    def effective_total(self) -> int:
        """Row value in minor units, falling back to price x quantity."""
        if self.line_total is not None:
            return self.line_total.minor_units
        if self.unit_price is not None:
            return self.unit_price.minor_units * self.quantity
        return 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'quantity': self.quantity,
            'unit_price': self.unit_price.to_dict() if self.unit_price else None,
            'line_total': self.line_total.to_dict() if self.line_total else None
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LineItem':
        return cls(
            name=data['name'],
            quantity=int(data.get('quantity', 1)),
            unit_price=MonetaryAmount.from_dict(data.get('unit_price')),
            line_total=MonetaryAmount.from_dict(data.get('line_total'))
        )


@dataclass(frozen=True)
class Issue:
    """A field that could not be extracted or failed a check."""
    field: str
    problem: str

    @property
    def code(self) -> str:
        """Dotted code, e.g. ``date.missing_or_unrecognized``."""
        return f"{self.field}.{self.problem}"

    def to_dict(self) -> Dict[str, str]:
        return {'field': self.field, 'problem': self.problem}


@dataclass(frozen=True)
class Correction:
    """
    A change (or annotation) made by reconciliation.

    ``from_value`` is serialized as ``from``; values are minor units
    rendered as strings.
    """
    field: str
    from_value: Optional[str]
    to: str
    reason: CorrectionReason

    def to_dict(self) -> Dict[str, Any]:
        return {
            'field': self.field,
            'from': self.from_value,
            'to': self.to,
            'reason': self.reason.value
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Correction':
        return cls(
            field=data['field'],
            from_value=data.get('from'),
            to=data['to'],
            reason=CorrectionReason(data['reason'])
        )


@dataclass(frozen=True)
class ParsedInvoice:
    """
    Structured result of parsing one document's text.

    Records are immutable. Callers that need an edited record build a new
    one (dataclasses.replace) or re-run the parser.

    Attributes:
        merchant: Merchant name or "UNKNOWN"
        date: ISO-8601 date (YYYY-MM-DD) or None
        total: Stated grand total as found in the text, or None
        items: Extracted line items
        issues: Missing-field and extraction diagnostics
        corrections: Reconciliation changes and annotations
        corrected_total: Total after reconciliation, or None
        confidence: Heuristic completeness score 0-100
        raw_text: The text the record was parsed from
        currency: Currency detected for the document

    Example:
        >>> record = parse_invoice("Acme Store\\nTotal: $5.00")
        >>> record.total.minor_units
        500
        >>> print(record.to_json())
    """
    merchant: str = MERCHANT_UNKNOWN
    date: Optional[str] = None
    total: Optional[MonetaryAmount] = None
    items: Tuple[LineItem, ...] = field(default_factory=tuple)
    issues: Tuple[Issue, ...] = field(default_factory=tuple)
    corrections: Tuple[Correction, ...] = field(default_factory=tuple)
    corrected_total: Optional[MonetaryAmount] = None
    confidence: int = 0
    raw_text: str = ""
    currency: CurrencyCode = CurrencyCode.UNKNOWN

    @property
    def status(self) -> str:
        """Return 'valid' when there is nothing to report, else 'needs_review'."""
        if not self.issues and not self.corrections:
            return "valid"
        return "needs_review"

    @property
    def items_sum(self) -> int:
        """Sum of the item rows in minor units."""
        return sum(item.effective_total for item in self.items)

    @property
    def issue_codes(self) -> Tuple[str, ...]:
        return tuple(issue.code for issue in self.issues)

    def display(self) -> Dict[str, Any]:
        """
        Human-readable view for renderers and export encoders.

        Amounts are formatted from minor units with the record's
        currency symbol; missing values render as "-".
        """
        from src.normalization.numeric_parser import format_minor_units

        def money(amount: Optional[MonetaryAmount]) -> str:
            if amount is None:
                return "-"
            return format_minor_units(amount.minor_units, amount.currency)

        return {
            'merchant': self.merchant,
            'date': self.date or "-",
            'total': money(self.corrected_total),
            'items': [
                {
                    'name': item.name,
                    'quantity': item.quantity,
                    'unit_price': money(item.unit_price),
                    'line_total': money(item.line_total)
                }
                for item in self.items
            ],
            'issues': [issue.code for issue in self.issues],
            'corrections': [
                f"{c.field}: {c.from_value or '-'} -> {c.to} ({c.reason.value})"
                for c in self.corrections
            ],
            'confidence': self.confidence,
            'status': self.status
        }

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a JSON-compatible dictionary.

        Returns:
            Dictionary representation with integer minor units.
        """
        return {
            'merchant': self.merchant,
            'date': self.date,
            'currency': self.currency.value,
            'total': self.total.to_dict() if self.total else None,
            'items': [item.to_dict() for item in self.items],
            'issues': [issue.to_dict() for issue in self.issues],
            'corrections': [c.to_dict() for c in self.corrections],
            'corrected_total': (
                self.corrected_total.to_dict() if self.corrected_total else None
            ),
            'confidence': self.confidence,
            'status': self.status,
            'raw_text': self.raw_text
        }

    def to_json(self, indent: int = 2) -> str:
        """
        Convert to JSON string.

        Args:
            indent: JSON indentation level.

        Returns:
            JSON string representation.
        """
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ParsedInvoice':
        """
        Create a ParsedInvoice from its dictionary form.

        Args:
            data: Dictionary produced by to_dict().

        Returns:
            ParsedInvoice instance.
        """
        return cls(
            merchant=data.get('merchant', MERCHANT_UNKNOWN),
            date=data.get('date'),
            total=MonetaryAmount.from_dict(data.get('total')),
            items=tuple(LineItem.from_dict(i) for i in data.get('items', [])),
            issues=tuple(
                Issue(field=i['field'], problem=i['problem'])
                for i in data.get('issues', [])
            ),
            corrections=tuple(
                Correction.from_dict(c) for c in data.get('corrections', [])
            ),
            corrected_total=MonetaryAmount.from_dict(data.get('corrected_total')),
            confidence=int(data.get('confidence', 0)),
            raw_text=data.get('raw_text', ""),
            currency=CurrencyCode(data.get('currency', CurrencyCode.UNKNOWN.value))
        )

    def __repr__(self) -> str:
        total = self.corrected_total.minor_units if self.corrected_total else None
        return (
            f"ParsedInvoice("
            f"merchant={self.merchant!r}, "
            f"date={self.date}, "
            f"total={total}, "
            f"items={len(self.items)}, "
            f"confidence={self.confidence})"
        )
