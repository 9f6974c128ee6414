"""
Domain value objects describing one price query.
See src/domain/entities/price_record.py for the date-string invariant the
range bounds rely on.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from src.domain.entities.price_record import COMPANY_COLUMN, DATE_COLUMN, PriceField


@dataclass(frozen=True)
class FilterCriteria:
    """Request parameters as supplied by a caller, before validation."""

    field: Optional[str]
    company: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


@dataclass(frozen=True)
class RecordFilter:
    """Storage-agnostic predicate: company equality and inclusive date bounds.

    *date_lte* already carries the end-of-day suffix, so a bare end date
    still admits records stamped later that same day.
    """

    company: Optional[str] = None
    date_gte: Optional[str] = None
    date_lte: Optional[str] = None

    def matches(self, row: Mapping[str, Any]) -> bool:
        if self.company is not None and row.get(COMPANY_COLUMN) != self.company:
            return False
        date = row.get(DATE_COLUMN)
        if self.date_gte is not None and date < self.date_gte:
            return False
        if self.date_lte is not None and date > self.date_lte:
            return False
        return True


@dataclass(frozen=True)
class PriceQuery:
    field: PriceField
    filter: RecordFilter
    projection: tuple[str, ...]
