"""
Date Extractor Module.

Finds the document date and normalizes it to ISO-8601 (YYYY-MM-DD).

Candidates come from the shared DATE_PATTERN union. For the numeric
D-M-Y form both the (day, month) and the (month, day) readings are
generated; a candidate is accepted only if it forms a real calendar
date inside the configured year range. When both readings are valid
the (day, month) reading wins and the match is flagged as ambiguous:
there is no locale information to decide it.

Author: ML Engineering Team
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterator, List, Optional, Tuple

from dateutil import parser as date_parser

from config import get_config
from src.utils.logger import get_logger
from .base import DocumentText, FieldStrategy, StrategyChain
from .patterns import DATE_PATTERN, DATE_LABEL_RE, MONTH_NAMES

logger = get_logger(__name__)


@dataclass(frozen=True)
class DateMatch:
    """
    A validated document date.

    Attributes:
        iso: Date as YYYY-MM-DD
        source: Text the date was read from
        ambiguous: Both day/month orderings were valid calendar dates
    """
    iso: str
    source: str
    ambiguous: bool = False


class DateRules:
    """Calendar validation shared by the date strategies."""

    def __init__(self) -> None:
        self.min_year = get_config("extraction.date.min_year", 1950)
        self.max_year = get_config("extraction.date.max_year", 2099)
        self.two_digit_pivot = get_config("extraction.date.two_digit_pivot", 50)

    def expand_year(self, year: int, digits: int) -> int:
        """Map two-digit years: >= pivot -> 19xx, else 20xx."""
        if digits > 2:
            return year
        return year + (1900 if year >= self.two_digit_pivot else 2000)

    def build(self, year: int, month: int, day: int) -> Optional[date]:
        """Return the calendar date, or None if the components do not form one."""
        if not self.min_year <= year <= self.max_year:
            return None
        try:
            return date(year, month, day)
        except ValueError:
            return None


class PatternDateStrategy(FieldStrategy[DateMatch]):
    """Scan the whole text with the date pattern union."""

    name = "pattern"

    def __init__(self, rules: Optional[DateRules] = None) -> None:
        self.rules = rules or DateRules()

    def extract(self, document: DocumentText) -> Optional[DateMatch]:
        return self.search(document.raw)

    def search(self, text: str) -> Optional[DateMatch]:
        """First validated candidate in text order."""
        for match in DATE_PATTERN.finditer(text or ""):
            candidates = self.candidates(match)
            valid = [c for c in candidates if c is not None]
            if not valid:
                logger.debug(f"Rejected date candidate '{match.group(0)}'")
                continue

            ambiguous = len(valid) > 1 and valid[0] != valid[1]
            if ambiguous:
                logger.debug(
                    f"Day/month order of '{match.group(0)}' is ambiguous; "
                    f"using {valid[0].isoformat()}"
                )
            return DateMatch(
                iso=valid[0].isoformat(),
                source=match.group(0),
                ambiguous=ambiguous
            )
        return None

    def candidates(self, match) -> List[Optional[date]]:
        rules = self.rules

        if match.group('iso'):
            return [rules.build(
                int(match.group('iso_y')),
                int(match.group('iso_m')),
                int(match.group('iso_d'))
            )]

        if match.group('numeric'):
            first = int(match.group('num_a'))
            second = int(match.group('num_b'))
            raw_year = match.group('num_y')
            year = rules.expand_year(int(raw_year), len(raw_year))
            return [
                rules.build(year, second, first),
                rules.build(year, first, second),
            ]

        if match.group('month_dy'):
            return [rules.build(
                int(match.group('mdy_y')),
                _month_number(match.group('mdy_m')),
                int(match.group('mdy_d'))
            )]

        return [rules.build(
            int(match.group('dm_y')),
            _month_number(match.group('dm_m')),
            int(match.group('dm_d'))
        )]


class LinePatternDateStrategy(PatternDateStrategy):
    """Same pattern union, applied line by line."""

    name = "line_pattern"

    def extract(self, document: DocumentText) -> Optional[DateMatch]:
        for line in document.lines:
            found = self.search(line)
            if found is not None:
                return found
        return None


class LabeledDateStrategy(FieldStrategy[DateMatch]):
    """
    Parse the value of a "Date:" line with dateutil.

    Parsing is strict: a value with words dateutil does not know is
    rejected instead of having a date assembled from its stray digits.

    The value is parsed twice against two different default dates; if
    the results differ, some component (day, month or year) came from
    the default rather than the text and the value is rejected.
    """

    name = "labeled_line"

    _DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))

    def __init__(self, rules: Optional[DateRules] = None) -> None:
        self.rules = rules or DateRules()

    def extract(self, document: DocumentText) -> Optional[DateMatch]:
        for line in document.lines:
            label = DATE_LABEL_RE.search(line)
            if label is None:
                continue

            value = label.group('value').strip()
            parsed = self._parse_complete(value)
            if parsed is not None:
                return DateMatch(iso=parsed.isoformat(), source=value)
        return None

    def _parse_complete(self, value: str) -> Optional[date]:
        results = []
        for default in self._DEFAULTS:
            try:
                results.append(
                    date_parser.parse(value, default=default, dayfirst=True)
                )
            except (ValueError, OverflowError):
                return None

        if results[0] != results[1]:
            logger.debug(f"Incomplete date in label value '{value}'")
            return None

        parsed = results[0]
        return self.rules.build(parsed.year, parsed.month, parsed.day)


def _month_number(name: str) -> int:
    return MONTH_NAMES.index(name[:3].lower()) + 1


class DateExtractor:
    """
    Document date extraction.

    Strategies, in order:
        1. pattern union over the whole text
        2. pattern union line by line
        3. dateutil parse of a labeled "Date:" line

    Example:
        >>> extractor = DateExtractor()
        >>> extractor.extract(DocumentText.build("Acme\\n2024-03-12")).iso
        '2024-03-12'
    """

    def __init__(self) -> None:
        rules = DateRules()
        self.pattern_strategy = PatternDateStrategy(rules)
        self.chain: StrategyChain[DateMatch] = StrategyChain("date", [
            self.pattern_strategy,
            LinePatternDateStrategy(rules),
            LabeledDateStrategy(rules),
        ])

    def extract(self, document: DocumentText) -> Optional[DateMatch]:
        return self.chain.extract(document)

    def iter_candidates(self, text: str) -> Iterator[Tuple[str, List[str]]]:
        """
        Yield every pattern match with all of its valid ISO readings.

        Useful when a caller wants to show the alternatives of an
        ambiguous date instead of the chosen one.
        """
        for match in DATE_PATTERN.finditer(text or ""):
            readings = []
            for candidate in self.pattern_strategy.candidates(match):
                if candidate is not None and candidate.isoformat() not in readings:
                    readings.append(candidate.isoformat())
            yield match.group(0), readings
