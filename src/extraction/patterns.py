"""
Shared Regular Expressions.

Pattern tables used by more than one extractor live here so the date,
total and line-item extractors agree on what a date or a summary line
looks like.

Author: ML Engineering Team
"""

import re

MONTH_NAMES = (
    'jan', 'feb', 'mar', 'apr', 'may', 'jun',
    'jul', 'aug', 'sep', 'oct', 'nov', 'dec'
)

_MONTH = (
    r'(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|June?|July?'
    r'|Aug(?:ust)?|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)'
)

# Union of every date form, alternatives named so the extractor knows
# which components it got:
#   iso       YYYY-MM-DD (also / and .)
#   numeric   D-M-YY(YY), ambiguous day/month order
#   month_dy  Month D, YYYY
#   day_month D Month YYYY
DATE_PATTERN = re.compile(
    r'(?P<iso>\b(?P<iso_y>\d{4})[-/.](?P<iso_m>\d{1,2})[-/.](?P<iso_d>\d{1,2})\b)'
    r'|(?P<numeric>\b(?P<num_a>\d{1,2})[-/.](?P<num_b>\d{1,2})[-/.](?P<num_y>\d{4}|\d{2})\b)'
    rf'|(?P<month_dy>\b(?P<mdy_m>{_MONTH})\.?\s+(?P<mdy_d>\d{{1,2}})(?:st|nd|rd|th)?,?\s+(?P<mdy_y>\d{{4}})\b)'
    rf'|(?P<day_month>\b(?P<dm_d>\d{{1,2}})(?:st|nd|rd|th)?\s+(?P<dm_m>{_MONTH})\.?,?\s+(?P<dm_y>\d{{4}})\b)',
    re.IGNORECASE
)

# Lines that carry a date label, value captured
DATE_LABEL_RE = re.compile(
    r'\b(?:date|dated)\b\s*(?:of\s+\w+\s*)?[:\-]?\s*(?P<value>.+)$',
    re.IGNORECASE
)

# Lines announcing the grand total
TOTAL_KEYWORD_RE = re.compile(
    r'grand\s*total|total|amount\s+due|balance\s+due|net\s+amount|amount\s+payable',
    re.IGNORECASE
)

# Structural words that disqualify a header line as merchant name
MERCHANT_BLACKLIST_RE = re.compile(
    r'invoice|bill|receipt|gst|tax|total|date|qty|amount|price|phone|address',
    re.IGNORECASE
)

# Characters kept in a merchant name
MERCHANT_DISALLOWED_RE = re.compile(r"[^A-Za-z0-9 &.,'()/\-]")

# Summary, payment and header rows that are never line items
SUMMARY_LINE_RE = re.compile(
    r'\b(?:sub[\s-]?total|total|grand|tax(?:es|able)?|gst(?:in)?|[csi]gst|vat|cess'
    r'|discount|round(?:ing)?[\s-]?off|change|cash|tender(?:ed)?|balance|due'
    r'|amount\s+(?:payable|paid)|net\s+amount|paid|payment|upi|invoice|bill\s+no'
    r'|receipt|date|phone|tel|mobile|thank)\b',
    re.IGNORECASE
)

PERCENT_RE = re.compile(r'-?\d+(?:[.,]\d+)?\s*%')

HAS_DIGIT_RE = re.compile(r'\d')
HAS_LETTER_RE = re.compile(r'[A-Za-z]')


def strip_dates(text: str) -> str:
    """Blank out date substrings so their digits are not read as amounts."""
    return DATE_PATTERN.sub(' ', text)


def strip_percentages(text: str) -> str:
    """Blank out percentages such as '18%' or '2.5 %'."""
    return PERCENT_RE.sub(' ', text)
