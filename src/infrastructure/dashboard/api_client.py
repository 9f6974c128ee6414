"""
Infrastructure adapter: analytics HTTP API (httpx) → IAnalyticsApi.

All httpx details are confined here.  Non-2xx responses and transport errors
are raised as UpstreamError carrying the server's {"error": ...} message, so
callers can skip a failed company without knowing about HTTP.
"""

import logging
from typing import Any, Optional

import httpx

from src.domain.entities.price_query import FilterCriteria
from src.domain.entities.price_record import DateRange, PriceField, StatSummary
from src.domain.entities.price_series import FieldMetrics, PriceSeries, SeriesPoint
from src.domain.exceptions import UpstreamError
from src.domain.ports.analytics_api_port import IAnalyticsApi

logger = logging.getLogger(__name__)


class HttpxAnalyticsApiClient(IAnalyticsApi):
    """Async client for the /api routes served by fastapi_app."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "HttpxAnalyticsApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # IAnalyticsApi interface
    # ------------------------------------------------------------------

    async def list_companies(self) -> list[str]:
        payload = await self._get("/companies")
        return list(payload.get("companies", []))

    async def get_series(self, criteria: FilterCriteria) -> PriceSeries:
        field = PriceField(criteria.field)
        rows = await self._get("/measurements", params=self._params(criteria))
        points = [
            SeriesPoint(timestamp=row["timestamp"], company=row["company"], value=row[field.value])
            for row in rows
        ]
        return PriceSeries(field=field, points=points)

    async def get_metrics(self, criteria: FilterCriteria) -> FieldMetrics:
        payload = await self._get("/measurements/metrics", params=self._params(criteria))
        return FieldMetrics(
            field=PriceField(payload["field"]),
            summary=StatSummary(
                count=payload["count"],
                avg=payload["avg"],
                min=payload["min"],
                max=payload["max"],
                std_dev=payload["stdDev"],
            ),
        )

    async def get_date_range(self) -> DateRange:
        payload = await self._get("/date-range")
        return DateRange(min_date=payload["minDate"], max_date=payload["maxDate"])

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _params(criteria: FilterCriteria) -> dict[str, str]:
        params = {
            "field": criteria.field,
            "company": criteria.company,
            "start_date": criteria.start_date,
            "end_date": criteria.end_date,
        }
        return {key: value for key, value in params.items() if value}

    async def _get(self, path: str, params: Optional[dict[str, str]] = None) -> Any:
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Request to {path} failed: {exc}") from exc

        if response.is_error:
            raise UpstreamError(self._error_message(response), status_code=response.status_code)
        return response.json()

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            return str(response.json().get("error") or response.reason_phrase)
        except (ValueError, AttributeError):
            return response.reason_phrase or f"HTTP {response.status_code}"
