"""
pandas DataFrame → PriceRecord conversion shared by the price source adapters.
Expects the column layout of a Yahoo Finance history export.
"""

from typing import Optional

import pandas as pd

from src.domain.entities.price_record import (
    COMPANY_COLUMN,
    DATE_COLUMN,
    DIVIDENDS_COLUMN,
    STOCK_SPLITS_COLUMN,
    PriceField,
    PriceRecord,
)

REQUIRED_COLUMNS = [DATE_COLUMN, *PriceField.names()]

# Stored dates keep at most "YYYY-MM-DD HH:MM:SS"; timezone offsets are cut.
_STORED_DATE_WIDTH = 19


def normalize_date(value) -> str:
    if isinstance(value, pd.Timestamp):
        text = value.strftime("%Y-%m-%d %H:%M:%S")
    else:
        text = str(value).strip()
    text = text[:_STORED_DATE_WIDTH]
    if text.endswith(" 00:00:00"):
        text = text[:10]
    return text


def frame_to_records(frame: pd.DataFrame, company: Optional[str] = None) -> list[PriceRecord]:
    """Convert *frame* into PriceRecords.

    Rows missing any required field are dropped.  When *company* is given it
    overrides (or supplies) the Company column.

    Raises:
        ValueError: if a required column is absent, or no company is known.
    """
    missing = [column for column in REQUIRED_COLUMNS if column not in frame.columns]
    if missing:
        raise ValueError(f"Missing required columns: {', '.join(missing)}")
    if company is None and COMPANY_COLUMN not in frame.columns:
        raise ValueError("No Company column and no company given")

    frame = frame.dropna(subset=REQUIRED_COLUMNS)
    records = []
    for row in frame.to_dict(orient="records"):
        records.append(
            PriceRecord(
                date=normalize_date(row[DATE_COLUMN]),
                open=float(row[PriceField.OPEN.value]),
                high=float(row[PriceField.HIGH.value]),
                low=float(row[PriceField.LOW.value]),
                close=float(row[PriceField.CLOSE.value]),
                volume=float(row[PriceField.VOLUME.value]),
                dividends=_optional_float(row.get(DIVIDENDS_COLUMN)),
                stock_splits=_optional_float(row.get(STOCK_SPLITS_COLUMN)),
                company=str(company or row[COMPANY_COLUMN]).strip(),
            )
        )
    return records


def _optional_float(value) -> float:
    if value is None or pd.isna(value):
        return 0.0
    return float(value)
