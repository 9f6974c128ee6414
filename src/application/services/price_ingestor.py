"""
Application service: seed a record store from a historical price source.

Infrastructure adapters (IPriceRecordSource, IPriceRecordStore) are injected;
no imports from pandas, yfinance, sqlalchemy, or any other external library
appear here.
"""

import logging

from src.domain.entities.price_record import PriceRecord
from src.domain.ports.price_source_port import IPriceRecordSource
from src.domain.ports.price_store_port import IPriceRecordStore

logger = logging.getLogger(__name__)


class IngestPriceRecordsService:
    def __init__(self, source: IPriceRecordSource, store: IPriceRecordStore) -> None:
        self._source = source
        self._store = store

    async def ingest(self, sources: list[str]) -> int:
        """Load every source in turn and persist all records in one batch.

        Args:
            sources: Paths or ticker symbols understood by the injected source.

        Returns:
            Total number of records written.
        """
        all_records: list[PriceRecord] = []
        for source in sources:
            records = self._source.load(source)
            logger.info("Loaded %d records from %s", len(records), source)
            all_records.extend(records)

        if not all_records:
            return 0
        return await self._store.insert_many(all_records)
