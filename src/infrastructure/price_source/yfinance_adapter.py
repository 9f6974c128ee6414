"""
Infrastructure adapter: yfinance → IPriceRecordSource.
All yfinance-specific details (Ticker, history()) are confined here; the rest
of the codebase depends only on IPriceRecordSource.
"""

from typing import Optional

import yfinance as yf

from src.domain.entities.price_record import DATE_COLUMN, PriceRecord
from src.domain.ports.price_source_port import IPriceRecordSource
from src.infrastructure.price_source.dataframe import frame_to_records


class YFinancePriceRecordSource(IPriceRecordSource):
    """Fetches daily price history from Yahoo Finance via the yfinance library."""

    def __init__(
        self,
        period: str = "5y",
        interval: str = "1d",
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> None:
        self._period = period
        self._interval = interval
        self._start_date = start_date
        self._end_date = end_date

    def load(self, source: str) -> list[PriceRecord]:
        symbol = source.upper().strip()
        ticker = yf.Ticker(symbol)
        history = (
            ticker.history(start=self._start_date, end=self._end_date, interval=self._interval)
            if self._start_date
            else ticker.history(period=self._period, interval=self._interval)
        )

        if history.empty:
            raise ValueError(f"No historical data available for symbol: {symbol!r}")

        frame = history.reset_index()
        frame = frame.rename(columns={frame.columns[0]: DATE_COLUMN})
        return frame_to_records(frame, company=symbol)
