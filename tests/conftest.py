import pytest

from src.domain.entities.price_record import PriceRecord
from src.infrastructure.price_store.memory_store import InMemoryPriceRecordStore
from src.infrastructure.price_store.sqlalchemy_store import SQLAlchemyPriceRecordStore


def make_record(date: str, company: str, close: float, volume: float = 1_000_000.0) -> PriceRecord:
    return PriceRecord(
        date=date,
        open=close - 1,
        high=close + 2,
        low=close - 2,
        close=close,
        volume=volume,
        company=company,
    )


# Deliberately out of date order, with a repeated company and a timestamped row.
SAMPLE_RECORDS = [
    make_record("2020-01-03", "MSFT", 160.0, 21_000_000),
    make_record("2020-01-02", "AAPL", 75.0, 135_000_000),
    make_record("2020-01-31 10:00:00", "AAPL", 77.0, 115_000_000),
    make_record("2020-01-03", "AAPL", 74.0, 146_000_000),
    make_record("2020-02-01 00:00:01", "AAPL", 80.0, 100_000_000),
    make_record("2020-01-02", "MSFT", 158.0, 22_000_000),
    make_record("2019-12-31", "GOOG", 1337.0, 960_000),
]


@pytest.fixture
def records() -> list[PriceRecord]:
    return list(SAMPLE_RECORDS)


@pytest.fixture
def memory_store(records) -> InMemoryPriceRecordStore:
    return InMemoryPriceRecordStore(records)


@pytest.fixture
async def sql_store(tmp_path, records):
    store = SQLAlchemyPriceRecordStore.from_url(f"sqlite:///{tmp_path / 'stocks.db'}")
    await store.insert_many(records)
    yield store
    await store.close()
