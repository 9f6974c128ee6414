"""
CLI entry point for seeding the price store.

This script is the Composition Root for the ingestion use-case: it wires a
price source adapter (CSVPriceRecordSource or YFinancePriceRecordSource) and
the SQLAlchemy store to IngestPriceRecordsService and triggers the load.

Run once locally before starting the API:

    python -m src.infrastructure.price_store.ingest --csv data/stocks.csv
    python -m src.infrastructure.price_store.ingest --ticker AAPL --ticker MSFT --period 5y
"""

import argparse
import asyncio
import logging

from dotenv import load_dotenv

from src.application.services.price_ingestor import IngestPriceRecordsService
from src.domain.ports.price_source_port import IPriceRecordSource
from src.infrastructure.config.settings import Settings, configure_logging
from src.infrastructure.price_source.csv_loader import CSVPriceRecordSource
from src.infrastructure.price_source.yfinance_adapter import YFinancePriceRecordSource
from src.infrastructure.price_store.sqlalchemy_store import SQLAlchemyPriceRecordStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Load historical stock prices into the store.")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--csv", action="append", help="Path to a CSV export (repeatable)")
    group.add_argument("--ticker", action="append", help="Ticker to fetch from Yahoo Finance (repeatable)")
    parser.add_argument("--company", help="Company to assign when the CSV has no Company column")
    parser.add_argument("--period", default="5y", help="yfinance period, ignored with --start-date")
    parser.add_argument("--start-date", help="YYYY-MM-DD start for --ticker")
    parser.add_argument("--end-date", help="YYYY-MM-DD end for --ticker")
    parser.add_argument("--database-url", help="Overrides STOCKS_DATABASE_URL")
    return parser


async def run(args: argparse.Namespace, settings: Settings) -> int:
    source: IPriceRecordSource
    if args.csv:
        source, sources = CSVPriceRecordSource(company=args.company), args.csv
    else:
        source = YFinancePriceRecordSource(
            period=args.period,
            start_date=args.start_date,
            end_date=args.end_date,
        )
        sources = args.ticker

    store = SQLAlchemyPriceRecordStore.from_url(
        args.database_url or settings.database_url,
        table_name=settings.table_name,
    )
    try:
        service = IngestPriceRecordsService(source=source, store=store)
        return await service.ingest(sources)
    finally:
        await store.close()


def main() -> None:
    load_dotenv()
    settings = Settings()
    configure_logging(settings.log_level)
    args = build_parser().parse_args()
    total = asyncio.run(run(args, settings))
    logger.info("Ingestion complete: %d records stored.", total)


if __name__ == "__main__":
    main()
