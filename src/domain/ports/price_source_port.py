"""
Port (interface) for sources of historical price records used to seed a store.
Infrastructure adapters (e.g. CSVPriceRecordSource, YFinancePriceRecordSource)
must implement this interface.
"""

from abc import ABC, abstractmethod

from src.domain.entities.price_record import PriceRecord


class IPriceRecordSource(ABC):
    @abstractmethod
    def load(self, source: str) -> list[PriceRecord]:
        """Load every price record available from *source* (a path or a ticker)."""
        ...
