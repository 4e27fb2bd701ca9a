"""
Extraction Strategy Base Classes.

Each field (merchant, date, total) is extracted by an ordered chain of
small strategy objects. A strategy is a pure function of the document:
it returns a value or None, and the chain returns the first value any
strategy produced.

Author: ML Engineering Team
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, Optional, Sequence, Tuple, TypeVar

from src.records import CurrencyCode
from src.normalization import TextNormalizer, CurrencyDetector, parse_all_amounts
from src.utils.logger import get_logger
from .patterns import strip_dates

logger = get_logger(__name__)

T = TypeVar('T')


@dataclass(frozen=True)
class DocumentText:
    """
    One document's text as every extractor sees it.

    Attributes:
        raw: Text exactly as received
        lines: Normalized, trimmed, non-empty lines
        currency: Currency detected for the whole document
    """
    raw: str
    lines: Tuple[str, ...]
    currency: CurrencyCode

    @classmethod
    def build(
        cls,
        raw: str,
        normalizer: Optional[TextNormalizer] = None,
        detector: Optional[CurrencyDetector] = None
    ) -> 'DocumentText':
        """
        Normalize text and detect its currency.

        The INR default only applies when the document contains at
        least one amount outside of dates.
        """
        normalizer = normalizer or TextNormalizer()
        detector = detector or CurrencyDetector()

        lines = normalizer.to_lines(raw)
        has_amounts = any(parse_all_amounts(strip_dates(line)) for line in lines)

        return cls(
            raw=raw,
            lines=lines,
            currency=detector.detect(raw, has_amounts=has_amounts)
        )


class FieldStrategy(ABC, Generic[T]):
    """One way of finding a field's value."""

    name: str = "strategy"

    @abstractmethod
    def extract(self, document: DocumentText) -> Optional[T]:
        """Return the field value, or None if this strategy finds nothing."""


class StrategyChain(Generic[T]):
    """
    Ordered fallback over several strategies for one field.

    Example:
        >>> chain = StrategyChain("merchant", [HeaderLineStrategy(), AnyLetterLineStrategy()])
        >>> chain.extract(DocumentText.build("Acme Store\\nTotal 5"))
        'Acme Store'
    """

    def __init__(self, field: str, strategies: Sequence[FieldStrategy[T]]) -> None:
        self.field = field
        self.strategies = tuple(strategies)

    def extract(self, document: DocumentText) -> Optional[T]:
        for strategy in self.strategies:
            value = strategy.extract(document)
            if value is not None:
                logger.debug(f"{self.field}: '{strategy.name}' found {value!r}")
                return value

        logger.debug(f"{self.field}: no strategy produced a value")
        return None
