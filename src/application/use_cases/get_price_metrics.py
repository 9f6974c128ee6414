"""
Use-case: summary statistics for one field over a filtered set of records.
Depends only on Domain ports and entities; no infrastructure imports.
"""

from src.application.services.query_builder import build_price_query
from src.application.services.statistics import compute_stats
from src.domain.entities.price_query import FilterCriteria
from src.domain.entities.price_series import FieldMetrics
from src.domain.exceptions import NoDataFound
from src.domain.ports.price_store_port import IPriceRecordStore


class GetPriceMetricsUseCase:
    def __init__(self, store: IPriceRecordStore) -> None:
        self._store = store

    async def execute(self, criteria: FilterCriteria) -> FieldMetrics:
        """Compute count / avg / min / max / population std-dev for *criteria*.

        Raises:
            MissingParameter / InvalidField: on bad criteria.
            NoDataFound: if no stored record matches.
            StoreFailure: propagated from the IPriceRecordStore.
        """
        query = build_price_query(criteria)
        column = query.field.value
        rows = await self._store.find(query.filter, (column,))
        if not rows:
            raise NoDataFound()

        values = [float(row[column]) for row in rows]
        return FieldMetrics(field=query.field, summary=compute_stats(values))
