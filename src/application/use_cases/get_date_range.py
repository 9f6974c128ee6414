"""
Use-case: earliest and latest stored dates across the whole dataset.
Depends only on Domain ports and entities; no infrastructure imports.
"""

import asyncio

from src.domain.entities.price_record import DATE_COLUMN, DateRange, date_part
from src.domain.exceptions import NoDataFound
from src.domain.ports.price_store_port import ASCENDING, DESCENDING, IPriceRecordStore


class GetDateRangeUseCase:
    def __init__(self, store: IPriceRecordStore) -> None:
        self._store = store

    async def execute(self) -> DateRange:
        """Return the date portion of the first and last records by date.

        Raises:
            NoDataFound: if the store holds no records.
            StoreFailure: propagated from the IPriceRecordStore.
        """
        earliest, latest = await asyncio.gather(
            self._store.find_one((DATE_COLUMN, ASCENDING), (DATE_COLUMN,)),
            self._store.find_one((DATE_COLUMN, DESCENDING), (DATE_COLUMN,)),
        )
        if not earliest or not latest:
            raise NoDataFound("No data found")
        return DateRange(
            min_date=date_part(earliest[DATE_COLUMN]),
            max_date=date_part(latest[DATE_COLUMN]),
        )
