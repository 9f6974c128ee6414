"""
CLI dashboard: compare companies over one price field and write a chart.

Composition Root for the client side: wires HttpxAnalyticsApiClient into
CompareCompaniesUseCase, prints the metrics and saves the plotly chart.

    python -m src.infrastructure.dashboard.cli --field Close --company AAPL --company MSFT \\
        --start-date 2020-01-01 --end-date 2020-12-31 --output chart.html
"""

import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv

from src.application.use_cases.compare_companies import CompareCompaniesUseCase, default_company
from src.domain.entities.price_query import FilterCriteria
from src.domain.entities.price_record import PriceField
from src.domain.exceptions import AnalyticsError
from src.infrastructure.config.settings import Settings, configure_logging
from src.infrastructure.dashboard.api_client import HttpxAnalyticsApiClient
from src.infrastructure.dashboard.chart import PriceChart
from src.infrastructure.dashboard.formatting import summarize

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compare stock price series across companies.")
    parser.add_argument("--field", default=PriceField.CLOSE.value, choices=PriceField.names())
    parser.add_argument("--company", action="append", default=[], help="Company to include (repeatable)")
    parser.add_argument("--start-date", help="Inclusive YYYY-MM-DD lower bound")
    parser.add_argument("--end-date", help="Inclusive YYYY-MM-DD upper bound")
    parser.add_argument("--output", default="chart.html", help="Where to write the HTML chart")
    parser.add_argument("--api-url", help="Overrides ANALYTICS_API_URL")
    return parser


async def run(args: argparse.Namespace, settings: Settings) -> str:
    async with HttpxAnalyticsApiClient(args.api_url or settings.api_url) as client:
        companies = args.company
        if not companies:
            fallback = default_company(await client.list_companies())
            companies = [fallback] if fallback else []

        criteria = FilterCriteria(
            field=args.field,
            start_date=args.start_date,
            end_date=args.end_date,
        )
        result = await CompareCompaniesUseCase(client).execute(companies, criteria)

    chart = PriceChart()
    chart.render(result)
    chart.write_html(args.output)
    chart.dispose()
    return summarize(result, args.start_date, args.end_date)


def main() -> None:
    load_dotenv()
    settings = Settings()
    configure_logging(settings.log_level)
    args = build_parser().parse_args()
    try:
        report = asyncio.run(run(args, settings))
    except AnalyticsError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    print(report)
    print(f"\nChart saved to {args.output}")


if __name__ == "__main__":
    main()
