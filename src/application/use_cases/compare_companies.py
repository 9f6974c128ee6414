"""
Use-case: fetch one field's series and metrics for several companies at once.
Depends only on Domain ports and entities; no infrastructure imports.

Each company is requested concurrently.  A company whose request fails is
logged and skipped; only when no company returned a series is the whole
comparison reported as NoDataFound.
"""

import asyncio
import dataclasses
import logging
import re
from dataclasses import dataclass
from typing import Optional

from src.application.services.query_builder import build_price_query
from src.domain.entities.price_query import FilterCriteria
from src.domain.entities.price_record import PriceField, date_part
from src.domain.entities.price_series import FieldMetrics, PriceSeries
from src.domain.exceptions import AnalyticsError, InvalidDateRange, InvalidSelection, NoDataFound
from src.domain.ports.analytics_api_port import IAnalyticsApi

logger = logging.getLogger(__name__)

MAX_COMPANIES = 5
PREFERRED_DEFAULTS = ("AAPL", "A")

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}( \d{2}:\d{2}:\d{2})?$")


@dataclass(frozen=True)
class CompanyComparison:
    company: str
    series: PriceSeries
    metrics: Optional[FieldMetrics]


@dataclass(frozen=True)
class ComparisonResult:
    field: PriceField
    criteria: FilterCriteria
    entries: list[CompanyComparison]

    @property
    def companies(self) -> list[str]:
        return [entry.company for entry in self.entries]

    @property
    def point_count(self) -> int:
        return sum(len(entry.series.points) for entry in self.entries)


def default_company(companies: list[str]) -> Optional[str]:
    """Pick the company a fresh dashboard starts with."""
    for preferred in PREFERRED_DEFAULTS:
        if preferred in companies:
            return preferred
    return companies[0] if companies else None


def validate_date_range(start_date: Optional[str], end_date: Optional[str]) -> None:
    """Reject malformed or inverted date bounds before a comparison is requested.

    Raises:
        InvalidDateRange: if either bound is not YYYY-MM-DD (optionally with a
            time), or the start date falls after the end date.
    """
    for label, value in (("start_date", start_date), ("end_date", end_date)):
        if value and not _DATE_PATTERN.match(value):
            raise InvalidDateRange(f"{label} must be formatted as YYYY-MM-DD, got {value!r}")
    if start_date and end_date and date_part(start_date) > date_part(end_date):
        raise InvalidDateRange("Start date must be before end date")


class CompareCompaniesUseCase:
    def __init__(self, api: IAnalyticsApi) -> None:
        self._api = api

    async def execute(self, companies: list[str], criteria: FilterCriteria) -> ComparisonResult:
        """Fetch series and metrics for every company in *companies*.

        The company in *criteria* is ignored; each entry of *companies* is
        substituted in turn.  Entries keep the order of *companies*.  Every
        request has finished before this returns or raises.

        Raises:
            InvalidSelection: if *companies* is empty or longer than MAX_COMPANIES.
            MissingParameter / InvalidField / InvalidDateRange: on bad criteria,
                before any request is sent.
            NoDataFound: if no company returned any data.
        """
        selected = list(dict.fromkeys(company for company in companies if company))
        if not selected:
            raise InvalidSelection("Please select at least one company")
        if len(selected) > MAX_COMPANIES:
            raise InvalidSelection(f"Please select maximum {MAX_COMPANIES} companies")
        validate_date_range(criteria.start_date, criteria.end_date)
        field = build_price_query(criteria).field

        results = await asyncio.gather(
            *[self._fetch(dataclasses.replace(criteria, company=company)) for company in selected],
            return_exceptions=True,
        )
        for outcome in results:
            if isinstance(outcome, BaseException):
                raise outcome
        entries = [entry for entry in results if entry is not None]
        if not entries:
            raise NoDataFound("No data found for the selected criteria")
        return ComparisonResult(field=field, criteria=criteria, entries=entries)

    async def _fetch(self, criteria: FilterCriteria) -> Optional[CompanyComparison]:
        series, metrics = await asyncio.gather(
            self._api.get_series(criteria),
            self._api.get_metrics(criteria),
            return_exceptions=True,
        )
        if isinstance(series, BaseException):
            self._skip(criteria.company, "data", series)
            return None
        if isinstance(metrics, BaseException):
            self._skip(criteria.company, "metrics", metrics)
            metrics = None
        return CompanyComparison(company=criteria.company, series=series, metrics=metrics)

    @staticmethod
    def _skip(company: Optional[str], what: str, exc: BaseException) -> None:
        if not isinstance(exc, AnalyticsError):
            raise exc
        logger.warning("Error fetching %s for %s: %s", what, company, exc)
