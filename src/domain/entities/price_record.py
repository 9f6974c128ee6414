"""
Domain entities for stored daily stock prices.
Zero external dependencies: pure Python dataclasses and enums only.

Date invariant:
  Every stored date is a string that starts with a fixed-width, zero-padded
  YYYY-MM-DD prefix, optionally followed by " HH:MM:SS".  All range filters
  and orderings compare these strings lexicographically, which only matches
  calendar order because of that shared prefix.
"""

from dataclasses import dataclass
from enum import Enum
from operator import attrgetter
from typing import Any, Callable

DATE_COLUMN = "Date"
COMPANY_COLUMN = "Company"
DIVIDENDS_COLUMN = "Dividends"
STOCK_SPLITS_COLUMN = "Stock Splits"
END_OF_DAY_SUFFIX = " 23:59:59"


@dataclass(frozen=True)
class PriceRecord:
    date: str
    open: float
    high: float
    low: float
    close: float
    volume: float
    company: str
    dividends: float = 0.0
    stock_splits: float = 0.0

    def __post_init__(self) -> None:
        if not self.date:
            raise ValueError("date must be a non-empty string")
        if not self.company or not self.company.strip():
            raise ValueError("company must be a non-empty string")

    @property
    def day(self) -> str:
        """Date portion of *date*, without any time suffix."""
        return date_part(self.date)

    def to_row(self) -> dict[str, Any]:
        """Return the record keyed by stored column names."""
        row = {field.value: field.read(self) for field in PriceField}
        row[DATE_COLUMN] = self.date
        row[COMPANY_COLUMN] = self.company
        row[DIVIDENDS_COLUMN] = self.dividends
        row[STOCK_SPLITS_COLUMN] = self.stock_splits
        return row


class PriceField(str, Enum):
    """The five numeric quantities a caller may query, named as stored."""

    OPEN = "Open"
    HIGH = "High"
    LOW = "Low"
    CLOSE = "Close"
    VOLUME = "Volume"

    @classmethod
    def names(cls) -> list[str]:
        return [member.value for member in cls]

    @property
    def is_volume(self) -> bool:
        return self is PriceField.VOLUME

    def read(self, record: PriceRecord) -> float:
        return _ACCESSORS[self](record)


_ACCESSORS: dict[PriceField, Callable[[PriceRecord], float]] = {
    PriceField.OPEN: attrgetter("open"),
    PriceField.HIGH: attrgetter("high"),
    PriceField.LOW: attrgetter("low"),
    PriceField.CLOSE: attrgetter("close"),
    PriceField.VOLUME: attrgetter("volume"),
}


@dataclass(frozen=True)
class StatSummary:
    count: int
    avg: float
    min: float
    max: float
    std_dev: float


@dataclass(frozen=True)
class DateRange:
    min_date: str
    max_date: str


def date_part(value: str) -> str:
    """Strip the optional time component from a stored date string."""
    return value.split(" ", 1)[0]
