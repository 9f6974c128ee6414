"""
Infrastructure adapter: process-local list of PriceRecord → IPriceRecordStore.
Useful for demos and tests; evaluates RecordFilter.matches directly.
"""

from typing import Any, Iterable, Optional

from src.domain.entities.price_query import RecordFilter
from src.domain.entities.price_record import PriceRecord
from src.domain.ports.price_store_port import DESCENDING, IPriceRecordStore, Sort


class InMemoryPriceRecordStore(IPriceRecordStore):
    def __init__(self, records: Iterable[PriceRecord] = ()) -> None:
        self._rows: list[dict[str, Any]] = [record.to_row() for record in records]

    async def find_distinct(self, column: str) -> list[Any]:
        return sorted({row[column] for row in self._rows})

    async def find(
        self,
        price_filter: RecordFilter,
        projection: tuple[str, ...],
        sort: Optional[Sort] = None,
    ) -> list[dict[str, Any]]:
        rows = [row for row in self._rows if price_filter.matches(row)]
        if sort is not None:
            rows = self._sorted(rows, sort)
        return [{name: row[name] for name in projection} for row in rows]

    async def find_one(
        self,
        sort: Sort,
        projection: tuple[str, ...],
    ) -> Optional[dict[str, Any]]:
        if not self._rows:
            return None
        first = self._sorted(self._rows, sort)[0]
        return {name: first[name] for name in projection}

    async def insert_many(self, records: Iterable[PriceRecord]) -> int:
        rows = [record.to_row() for record in records]
        self._rows.extend(rows)
        return len(rows)

    @staticmethod
    def _sorted(rows: list[dict[str, Any]], sort: Sort) -> list[dict[str, Any]]:
        column, direction = sort
        return sorted(rows, key=lambda row: row[column], reverse=direction == DESCENDING)
