"""
Application service: turn caller-supplied filter parameters into a PriceQuery.
Field validation happens here, before any store is touched.

Business decisions owned here:
  - Which fields may be queried (PriceField, case-sensitive).
  - Inclusive date bounds, compared as strings exactly as given, with the end
    bound widened to the end of that day so records stamped later on the same
    date are not dropped.  Bounds that select nothing simply match no records.
"""

from typing import Optional

from src.domain.entities.price_query import FilterCriteria, PriceQuery, RecordFilter
from src.domain.entities.price_record import (
    COMPANY_COLUMN,
    DATE_COLUMN,
    END_OF_DAY_SUFFIX,
    PriceField,
    date_part,
)
from src.domain.exceptions import InvalidField, MissingParameter


def parse_field(field: Optional[str]) -> PriceField:
    """Resolve *field* to a PriceField.

    Raises:
        MissingParameter: if *field* is absent or blank.
        InvalidField:     if *field* is not one of the stored field names.
    """
    if not field:
        raise MissingParameter("field")
    try:
        return PriceField(field)
    except ValueError as exc:
        raise InvalidField(field, PriceField.names()) from exc


def build_price_query(criteria: FilterCriteria) -> PriceQuery:
    """Validate the field in *criteria* and build the filter and projection."""
    field = parse_field(criteria.field)
    end_date = _clean(criteria.end_date)

    record_filter = RecordFilter(
        company=_clean(criteria.company),
        date_gte=_clean(criteria.start_date),
        date_lte=date_part(end_date) + END_OF_DAY_SUFFIX if end_date else None,
    )
    return PriceQuery(
        field=field,
        filter=record_filter,
        projection=(DATE_COLUMN, field.value, COMPANY_COLUMN),
    )


def _clean(value: Optional[str]) -> Optional[str]:
    # An empty query parameter means "no filter"; anything else is used verbatim.
    return value or None
