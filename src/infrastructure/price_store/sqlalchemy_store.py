"""
Infrastructure adapter: SQLAlchemy Core table → IPriceRecordStore.

All SQLAlchemy details are confined here.  Queries run on a synchronous
engine inside the event loop's default executor, so the async port never
blocks the loop.  SQLAlchemyError is translated into StoreFailure; the
original exception stays chained for the logs.
"""

import asyncio
import logging
from functools import partial
from typing import Any, Callable, Iterable, Optional, TypeVar

from sqlalchemy import (
    Column,
    Float,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    create_engine,
    distinct,
    insert,
    select,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from src.domain.entities.price_query import RecordFilter
from src.domain.entities.price_record import (
    COMPANY_COLUMN,
    DATE_COLUMN,
    DIVIDENDS_COLUMN,
    STOCK_SPLITS_COLUMN,
    PriceField,
    PriceRecord,
)
from src.domain.exceptions import StoreFailure
from src.domain.ports.price_store_port import ASCENDING, IPriceRecordStore, Sort

logger = logging.getLogger(__name__)

T = TypeVar("T")


def build_stocks_table(metadata: MetaData, name: str = "stocks") -> Table:
    """Declare the price table using the column names of the CSV export."""
    return Table(
        name,
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column(DATE_COLUMN, String(19), nullable=False),
        *[Column(field.value, Float, nullable=False) for field in PriceField],
        Column(DIVIDENDS_COLUMN, Float, nullable=False, default=0.0),
        Column(STOCK_SPLITS_COLUMN, Float, nullable=False, default=0.0),
        Column(COMPANY_COLUMN, String(64), nullable=False),
        Index(f"ix_{name}_date_company", DATE_COLUMN, COMPANY_COLUMN),
    )


class SQLAlchemyPriceRecordStore(IPriceRecordStore):
    """Price records kept in any database SQLAlchemy can reach (SQLite by default)."""

    def __init__(self, engine: Engine, table_name: str = "stocks") -> None:
        self._engine = engine
        self._metadata = MetaData()
        self._table = build_stocks_table(self._metadata, table_name)

    @classmethod
    def from_url(cls, url: str, table_name: str = "stocks") -> "SQLAlchemyPriceRecordStore":
        """Create an engine for *url* and make sure the table exists.

        SQLite connections are shared across executor threads, and an
        in-memory database keeps a single connection so every query sees
        the same data.
        """
        kwargs: dict[str, Any] = {"pool_pre_ping": True}
        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if url in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool
        store = cls(create_engine(url, **kwargs), table_name)
        store.create_schema()
        return store

    def create_schema(self) -> None:
        try:
            self._metadata.create_all(self._engine)
        except SQLAlchemyError as exc:
            raise StoreFailure("Failed to initialise the price table") from exc

    # ------------------------------------------------------------------
    # IPriceRecordStore interface
    # ------------------------------------------------------------------

    async def find_distinct(self, column: str) -> list[Any]:
        return await self._run(partial(self._find_distinct, column))

    async def find(
        self,
        price_filter: RecordFilter,
        projection: tuple[str, ...],
        sort: Optional[Sort] = None,
    ) -> list[dict[str, Any]]:
        return await self._run(partial(self._find, price_filter, projection, sort))

    async def find_one(
        self,
        sort: Sort,
        projection: tuple[str, ...],
    ) -> Optional[dict[str, Any]]:
        return await self._run(partial(self._find_one, sort, projection))

    async def insert_many(self, records: Iterable[PriceRecord]) -> int:
        return await self._run(partial(self._insert_many, list(records)))

    async def close(self) -> None:
        self._engine.dispose()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _run(self, operation: Callable[[], T]) -> T:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, operation)
        except SQLAlchemyError as exc:
            raise StoreFailure(f"Price store query failed: {exc.__class__.__name__}") from exc

    def _find_distinct(self, column: str) -> list[Any]:
        col = self._table.c[column]
        stmt = select(distinct(col)).order_by(col)
        with self._engine.connect() as conn:
            return list(conn.execute(stmt).scalars().all())

    def _find(
        self,
        price_filter: RecordFilter,
        projection: tuple[str, ...],
        sort: Optional[Sort],
    ) -> list[dict[str, Any]]:
        table = self._table
        stmt = select(*[table.c[name] for name in projection])
        if price_filter.company is not None:
            stmt = stmt.where(table.c[COMPANY_COLUMN] == price_filter.company)
        if price_filter.date_gte is not None:
            stmt = stmt.where(table.c[DATE_COLUMN] >= price_filter.date_gte)
        if price_filter.date_lte is not None:
            stmt = stmt.where(table.c[DATE_COLUMN] <= price_filter.date_lte)
        if sort is not None:
            stmt = stmt.order_by(self._order_by(sort))
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [dict(row) for row in rows]

    def _find_one(self, sort: Sort, projection: tuple[str, ...]) -> Optional[dict[str, Any]]:
        stmt = (
            select(*[self._table.c[name] for name in projection])
            .order_by(self._order_by(sort))
            .limit(1)
        )
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        return dict(row) if row is not None else None

    def _insert_many(self, records: list[PriceRecord]) -> int:
        if not records:
            return 0
        with self._engine.begin() as conn:
            conn.execute(insert(self._table), [record.to_row() for record in records])
        logger.info("Inserted %d price records into %s", len(records), self._table.name)
        return len(records)

    def _order_by(self, sort: Sort):
        column, direction = sort
        col = self._table.c[column]
        return col.asc() if direction == ASCENDING else col.desc()
