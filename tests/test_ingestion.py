import pandas as pd
import pytest

from src.application.services.price_ingestor import IngestPriceRecordsService
from src.domain.entities.price_record import PriceRecord
from src.domain.ports.price_source_port import IPriceRecordSource
from src.infrastructure.price_source.csv_loader import CSVPriceRecordSource
from src.infrastructure.price_source.dataframe import frame_to_records, normalize_date
from src.infrastructure.price_store.memory_store import InMemoryPriceRecordStore
from src.infrastructure.price_store.sqlalchemy_store import SQLAlchemyPriceRecordStore

CSV_TEXT = """Date,Open,High,Low,Close,Volume,Dividends,Stock Splits,Company
2018-11-29 00:00:00-05:00,43.83,43.86,42.64,43.09,167080000,0.0,0.0,AAPL
2018-11-30 00:00:00-05:00,43.02,43.06,42.36,42.87,158126000,0.0,0.0,AAPL
2018-11-29,68.34,68.76,67.45,67.82,1900000,,,A
2018-12-03,,70.10,69.12,69.77,2150000,0.15,0.0,A
"""


class FakeSource(IPriceRecordSource):
    def __init__(self, batches: dict[str, list[PriceRecord]]) -> None:
        self._batches = batches

    def load(self, source: str) -> list[PriceRecord]:
        return self._batches[source]


@pytest.fixture
def csv_path(tmp_path):
    path = tmp_path / "stocks.csv"
    path.write_text(CSV_TEXT)
    return str(path)


def test_csv_source_reads_records(csv_path):
    records = CSVPriceRecordSource().load(csv_path)

    # the row with a blank Open is dropped
    assert len(records) == 3
    first = records[0]
    assert first.date == "2018-11-29"
    assert first.company == "AAPL"
    assert first.close == 43.09
    assert first.volume == 167_080_000
    assert records[2].dividends == 0.0
    assert records[2].company == "A"


def test_csv_company_override(csv_path):
    records = CSVPriceRecordSource(company="XYZ").load(csv_path)
    assert {record.company for record in records} == {"XYZ"}


def test_missing_columns_rejected():
    frame = pd.DataFrame({"Date": ["2020-01-02"], "Close": [1.0], "Company": ["AAPL"]})
    with pytest.raises(ValueError, match="Open"):
        frame_to_records(frame)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2020-01-02", "2020-01-02"),
        ("2020-01-02 00:00:00", "2020-01-02"),
        ("2020-01-02 15:30:00-05:00", "2020-01-02 15:30:00"),
        (pd.Timestamp("2020-01-02 09:30:00"), "2020-01-02 09:30:00"),
    ],
)
def test_normalize_date(raw, expected):
    assert normalize_date(raw) == expected


async def test_ingest_service_stores_every_source(records):
    store = InMemoryPriceRecordStore()
    source = FakeSource({"first": records[:3], "second": records[3:]})

    total = await IngestPriceRecordsService(source, store).ingest(["first", "second"])

    assert total == len(records)
    assert await store.find_distinct("Company") == ["AAPL", "GOOG", "MSFT"]


async def test_ingest_from_csv_into_sql_store(csv_path, tmp_path):
    store = SQLAlchemyPriceRecordStore.from_url(f"sqlite:///{tmp_path / 'seed.db'}")
    try:
        total = await IngestPriceRecordsService(CSVPriceRecordSource(), store).ingest([csv_path])
        assert total == 3
        assert await store.find_distinct("Company") == ["A", "AAPL"]
    finally:
        await store.close()


def test_record_requires_company():
    with pytest.raises(ValueError):
        PriceRecord(date="2020-01-02", open=1, high=1, low=1, close=1, volume=1, company=" ")
