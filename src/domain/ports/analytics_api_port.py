"""
Port (interface) for a remote analytics API, as seen by dashboard clients.
Infrastructure adapters (e.g. HttpxAnalyticsApiClient) must implement this
interface and raise UpstreamError for any failed call.
"""

from abc import ABC, abstractmethod

from src.domain.entities.price_query import FilterCriteria
from src.domain.entities.price_record import DateRange
from src.domain.entities.price_series import FieldMetrics, PriceSeries


class IAnalyticsApi(ABC):
    @abstractmethod
    async def list_companies(self) -> list[str]: ...

    @abstractmethod
    async def get_series(self, criteria: FilterCriteria) -> PriceSeries: ...

    @abstractmethod
    async def get_metrics(self, criteria: FilterCriteria) -> FieldMetrics: ...

    @abstractmethod
    async def get_date_range(self) -> DateRange: ...
