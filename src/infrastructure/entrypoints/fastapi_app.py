"""
FastAPI entry point: the HTTP surface of the analytics service.

This module is the Composition Root for web runs: create_app() receives an
IPriceRecordStore (or builds the SQLAlchemy one from Settings on startup) and
each route hands it to the matching application use-case.  Domain errors are
mapped to status codes by exception handlers; store failures are logged here
and never detailed to the caller.

Run locally:
    uvicorn src.infrastructure.entrypoints.fastapi_app:app --reload --port 8000
    python -m src.infrastructure.entrypoints.fastapi_app
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

load_dotenv()

from src.application.use_cases.get_date_range import GetDateRangeUseCase
from src.application.use_cases.get_price_metrics import GetPriceMetricsUseCase
from src.application.use_cases.get_price_series import GetPriceSeriesUseCase
from src.application.use_cases.list_companies import ListCompaniesUseCase
from src.domain.entities.price_query import FilterCriteria
from src.domain.exceptions import AnalyticsError, NoDataFound, StoreFailure
from src.domain.ports.price_store_port import IPriceRecordStore
from src.infrastructure.config.settings import Settings, configure_logging
from src.infrastructure.price_store.sqlalchemy_store import SQLAlchemyPriceRecordStore

logger = logging.getLogger(__name__)

_FAILURE_MESSAGES = {
    "/api/companies": "Failed to fetch companies",
    "/api/measurements": "Failed to fetch measurements",
    "/api/measurements/metrics": "Failed to calculate metrics",
    "/api/date-range": "Failed to fetch date range",
}


class CompaniesResponse(BaseModel):
    companies: list[str]


class MetricsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    field: str
    count: int
    avg: float
    min: float
    max: float
    std_dev: float = Field(alias="stdDev")


class DateRangeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    min_date: str = Field(alias="minDate")
    max_date: str = Field(alias="maxDate")


def get_store(request: Request) -> IPriceRecordStore:
    """FastAPI dependency: the store wired into this application instance."""
    return request.app.state.store


def criteria_params(
    field: Optional[str] = None,
    company: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> FilterCriteria:
    """FastAPI dependency: collect the filter query parameters.

    Every parameter is optional at the HTTP level so that a missing *field*
    surfaces as MissingParameter (400) rather than a schema error.
    """
    return FilterCriteria(field=field, company=company, start_date=start_date, end_date=end_date)


def create_app(
    store: Optional[IPriceRecordStore] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the FastAPI application around *store*.

    When *store* is None the SQLAlchemy store is created from *settings* at
    startup; either way the store is closed on shutdown.
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.store is None:
            app.state.store = SQLAlchemyPriceRecordStore.from_url(
                settings.database_url,
                table_name=settings.table_name,
            )
        try:
            yield
        finally:
            await app.state.store.close()

    app = FastAPI(title="Stock Price Analytics API", version="1.0.0", lifespan=lifespan)
    app.state.store = store
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.exception_handler(StoreFailure)
    async def store_failure_handler(request: Request, exc: StoreFailure) -> JSONResponse:
        logger.error("Store failure on %s: %s", request.url.path, exc, exc_info=exc)
        message = _FAILURE_MESSAGES.get(request.url.path, "Internal server error")
        return JSONResponse(status_code=500, content={"error": message})

    @app.exception_handler(NoDataFound)
    async def no_data_handler(request: Request, exc: NoDataFound) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": str(exc)})

    @app.exception_handler(AnalyticsError)
    async def client_error_handler(request: Request, exc: AnalyticsError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.get("/api/companies", response_model=CompaniesResponse)
    async def list_companies(store: IPriceRecordStore = Depends(get_store)):
        companies = await ListCompaniesUseCase(store).execute()
        return CompaniesResponse(companies=companies)

    @app.get("/api/measurements")
    async def get_measurements(
        criteria: FilterCriteria = Depends(criteria_params),
        store: IPriceRecordStore = Depends(get_store),
    ) -> list[dict[str, Any]]:
        series = await GetPriceSeriesUseCase(store).execute(criteria)
        return series.as_rows()

    @app.get(
        "/api/measurements/metrics",
        response_model=MetricsResponse,
        response_model_by_alias=True,
    )
    async def get_metrics(
        criteria: FilterCriteria = Depends(criteria_params),
        store: IPriceRecordStore = Depends(get_store),
    ):
        metrics = await GetPriceMetricsUseCase(store).execute(criteria)
        return MetricsResponse(**metrics.as_dict())

    @app.get("/api/date-range", response_model=DateRangeResponse, response_model_by_alias=True)
    async def get_date_range(store: IPriceRecordStore = Depends(get_store)):
        date_range = await GetDateRangeUseCase(store).execute()
        return DateRangeResponse(min_date=date_range.min_date, max_date=date_range.max_date)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()


def main() -> None:
    import uvicorn

    settings = Settings()
    configure_logging(settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level)


if __name__ == "__main__":
    main()
