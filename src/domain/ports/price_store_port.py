"""
Port (interface) for price record stores.
Infrastructure adapters (e.g. SQLAlchemyPriceRecordStore) must implement this
interface and translate their own errors into StoreFailure.

Rows are returned as plain mappings keyed by stored column names
(Date, Open, High, Low, Close, Volume, Company, ...), limited to the
requested projection.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional

from src.domain.entities.price_query import RecordFilter
from src.domain.entities.price_record import PriceRecord

ASCENDING = 1
DESCENDING = -1

Sort = tuple[str, int]


class IPriceRecordStore(ABC):
    @abstractmethod
    async def find_distinct(self, column: str) -> list[Any]:
        """Return the sorted distinct values of *column* across all records."""
        ...

    @abstractmethod
    async def find(
        self,
        price_filter: RecordFilter,
        projection: tuple[str, ...],
        sort: Optional[Sort] = None,
    ) -> list[dict[str, Any]]:
        """Return every row matching *price_filter*, projected and optionally sorted."""
        ...

    @abstractmethod
    async def find_one(
        self,
        sort: Sort,
        projection: tuple[str, ...],
    ) -> Optional[dict[str, Any]]:
        """Return the first row under *sort* across the whole dataset, or None."""
        ...

    @abstractmethod
    async def insert_many(self, records: Iterable[PriceRecord]) -> int:
        """Persist *records* and return how many were written."""
        ...

    async def close(self) -> None:
        """Release connections held by the adapter. No-op unless overridden."""
        return None
