"""
Use-case: retrieve one field of the stored prices as a date-ordered series.
Depends only on Domain ports and entities; no infrastructure imports.
"""

from src.application.services.query_builder import build_price_query
from src.domain.entities.price_query import FilterCriteria
from src.domain.entities.price_record import COMPANY_COLUMN, DATE_COLUMN
from src.domain.entities.price_series import PriceSeries, SeriesPoint
from src.domain.exceptions import NoDataFound
from src.domain.ports.price_store_port import ASCENDING, IPriceRecordStore


class GetPriceSeriesUseCase:
    def __init__(self, store: IPriceRecordStore) -> None:
        self._store = store

    async def execute(self, criteria: FilterCriteria) -> PriceSeries:
        """Fetch the matching records for *criteria*, sorted ascending by date.

        Raises:
            MissingParameter / InvalidField: on bad criteria,
                before the store is queried.
            NoDataFound: if no stored record matches.
            StoreFailure: propagated from the IPriceRecordStore.
        """
        query = build_price_query(criteria)
        rows = await self._store.find(
            query.filter,
            query.projection,
            sort=(DATE_COLUMN, ASCENDING),
        )
        if not rows:
            raise NoDataFound()

        column = query.field.value
        points = [
            SeriesPoint(
                timestamp=row[DATE_COLUMN],
                company=row[COMPANY_COLUMN],
                value=row[column],
            )
            for row in sorted(rows, key=lambda row: row[DATE_COLUMN])
        ]
        return PriceSeries(field=query.field, points=points)
