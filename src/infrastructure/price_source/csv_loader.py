"""
Infrastructure adapter: CSV export (path) → IPriceRecordSource.
CSV parsing is done with pandas; dates are read as text so the stored
strings keep their original zero-padded form.
"""

import pandas as pd

from src.domain.entities.price_record import DATE_COLUMN, PriceRecord
from src.domain.ports.price_source_port import IPriceRecordSource
from src.infrastructure.price_source.dataframe import frame_to_records


class CSVPriceRecordSource(IPriceRecordSource):
    """Reads Date, Open, High, Low, Close, Volume, Dividends, Stock Splits, Company."""

    def __init__(self, company: str | None = None) -> None:
        self._company = company

    def load(self, source: str) -> list[PriceRecord]:
        frame = pd.read_csv(source, dtype={DATE_COLUMN: str})
        return frame_to_records(frame, company=self._company)
