"""
Numeric Parser Module.

Converts locale-ambiguous amount tokens ("1,234.56", "1.234,56",
"Rs. 80") into an exact integer count of minor units, and formats
minor units back into display strings.

The separator heuristic is positional:
    - both "." and "," present: the one appearing last is the decimal
      point, the other is a thousands separator
    - only one kind present: it is a decimal point when exactly two
      digits follow its last occurrence, otherwise a thousands separator

Author: ML Engineering Team
"""

import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterator, List, Optional

from src.records import CurrencyCode
from .currency_detector import CURRENCY_SYMBOLS

_NON_NUMERIC_RE = re.compile(r'[^0-9,.\-]')
_NUMBER_RE = re.compile(r'-?\d+(?:\.\d+)?')
_DIGIT_RUN_RE = re.compile(r'\d*')

# Amount-like tokens inside a line; never starts or ends on a separator.
# A dash only counts as a sign when it does not follow a word character.
AMOUNT_TOKEN_RE = re.compile(r"(?:(?<!\w)-)?\d(?:[\d,.]*\d)?")

_HUNDRED = Decimal(100)


def _resolve_separators(cleaned: str) -> str:
    """Rewrite a cleaned token so that '.' is the only (decimal) separator."""
    last_dot = cleaned.rfind('.')
    last_comma = cleaned.rfind(',')

    if last_dot < 0 and last_comma < 0:
        return cleaned

    if last_dot >= 0 and last_comma >= 0:
        decimal_pos = max(last_dot, last_comma)
    else:
        position = max(last_dot, last_comma)
        digits_after = len(_DIGIT_RUN_RE.match(cleaned, position + 1).group(0))
        decimal_pos = position if digits_after == 2 else -1

    resolved = []
    for index, char in enumerate(cleaned):
        if char in ',.':
            if index == decimal_pos:
                resolved.append('.')
        else:
            resolved.append(char)
    return ''.join(resolved)


def parse_minor_units(token) -> Optional[int]:
    """
    Parse an amount token into integer minor units.

    Args:
        token: Text such as "₹1,234.56" or "1.234,56". Non-string values
              are converted with str().

    Returns:
        Minor units (value x 100, rounded half-up), or None when the
        token holds no digits.

    Example:
        >>> parse_minor_units("1.234,56")
        123456
        >>> parse_minor_units("1,234.56")
        123456
        >>> parse_minor_units("1234")
        123400
        >>> parse_minor_units("n/a") is None
        True
    """
    if token is None:
        return None

    cleaned = _NON_NUMERIC_RE.sub('', str(token))
    if not any(char.isdigit() for char in cleaned):
        return None

    match = _NUMBER_RE.search(_resolve_separators(cleaned))
    if match is None:
        return None

    scaled = Decimal(match.group(0)) * _HUNDRED
    return int(scaled.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def iter_amount_tokens(text: str) -> Iterator[str]:
    """Yield every amount-like token of a line, left to right."""
    for match in AMOUNT_TOKEN_RE.finditer(text or ""):
        yield match.group(0)


def parse_all_amounts(text: str) -> List[int]:
    """Parse every amount-like token of a line into minor units."""
    amounts = []
    for token in iter_amount_tokens(text):
        value = parse_minor_units(token)
        if value is not None:
            amounts.append(value)
    return amounts


def format_minor_units(
    minor_units: int,
    currency: Optional[CurrencyCode] = None,
    symbol: Optional[str] = None
) -> str:
    """
    Render minor units as a display string.

    The output always uses "," for thousands and "." with two decimals,
    so parse_minor_units() reads it back to the same integer.

    Args:
        minor_units: Amount in minor units.
        currency: Currency whose symbol is prefixed.
        symbol: Explicit symbol, overrides the currency's.

    Returns:
        Display string, e.g. "-₹1,234.05".

    Example:
        >>> format_minor_units(123405, CurrencyCode.INR)
        '₹1,234.05'
    """
    if symbol is None:
        symbol = CURRENCY_SYMBOLS.get(currency, '') if currency else ''

    sign = '-' if minor_units < 0 else ''
    major, minor = divmod(abs(minor_units), 100)
    return f"{sign}{symbol}{major:,}.{minor:02d}"
