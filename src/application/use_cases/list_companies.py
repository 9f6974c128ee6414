"""
Use-case: list every instrument identifier present in the store.
Depends only on Domain ports and entities; no infrastructure imports.
"""

from src.domain.entities.price_record import COMPANY_COLUMN
from src.domain.ports.price_store_port import IPriceRecordStore


class ListCompaniesUseCase:
    def __init__(self, store: IPriceRecordStore) -> None:
        self._store = store

    async def execute(self) -> list[str]:
        """Return the distinct company values, sorted lexicographically."""
        companies = await self._store.find_distinct(COMPANY_COLUMN)
        return sorted({str(company) for company in companies if company})
