import httpx
import pytest

from src.domain.exceptions import StoreFailure
from src.infrastructure.entrypoints.fastapi_app import create_app
from src.infrastructure.price_store.memory_store import InMemoryPriceRecordStore


class FailingStore(InMemoryPriceRecordStore):
    async def find_distinct(self, column):
        raise StoreFailure("connection refused by db-host:5432")

    async def find(self, price_filter, projection, sort=None):
        raise StoreFailure("connection refused by db-host:5432")

    async def find_one(self, sort, projection):
        raise StoreFailure("connection refused by db-host:5432")


def _client(store) -> httpx.AsyncClient:
    transport = httpx.ASGITransport(app=create_app(store))
    return httpx.AsyncClient(transport=transport, base_url="http://testserver")


@pytest.fixture
async def client(memory_store):
    async with _client(memory_store) as http:
        yield http


async def test_companies(client):
    response = await client.get("/api/companies")
    assert response.status_code == 200
    assert response.json() == {"companies": ["AAPL", "GOOG", "MSFT"]}


async def test_measurements(client):
    response = await client.get(
        "/api/measurements",
        params={"field": "Close", "company": "AAPL", "start_date": "2020-01-01", "end_date": "2020-01-31"},
    )
    assert response.status_code == 200
    assert response.json() == [
        {"timestamp": "2020-01-02", "company": "AAPL", "Close": 75.0},
        {"timestamp": "2020-01-03", "company": "AAPL", "Close": 74.0},
        {"timestamp": "2020-01-31 10:00:00", "company": "AAPL", "Close": 77.0},
    ]


async def test_metrics(client):
    response = await client.get(
        "/api/measurements/metrics", params={"field": "Close", "company": "MSFT"}
    )
    assert response.status_code == 200
    assert response.json() == {
        "field": "Close",
        "count": 2,
        "avg": 159.0,
        "min": 158.0,
        "max": 160.0,
        "stdDev": 1.0,
    }


async def test_date_range(client):
    response = await client.get("/api/date-range")
    assert response.status_code == 200
    assert response.json() == {"minDate": "2019-12-31", "maxDate": "2020-02-01"}


@pytest.mark.parametrize("path", ["/api/measurements", "/api/measurements/metrics"])
async def test_missing_field_is_bad_request(client, path):
    response = await client.get(path, params={"company": "AAPL"})
    assert response.status_code == 400
    assert response.json() == {"error": "Field parameter is required"}


@pytest.mark.parametrize("path", ["/api/measurements", "/api/measurements/metrics"])
async def test_lowercase_field_is_bad_request(client, path):
    response = await client.get(path, params={"field": "close"})
    assert response.status_code == 400
    assert response.json() == {
        "error": "Invalid field. Must be one of: Open, High, Low, Close, Volume"
    }


async def test_inverted_dates_are_not_found(client):
    response = await client.get(
        "/api/measurements",
        params={"field": "Close", "start_date": "2020-03-01", "end_date": "2020-01-01"},
    )
    assert response.status_code == 404
    assert response.json() == {"error": "No data found for the specified criteria"}


async def test_partial_start_date_is_used_as_given(client):
    response = await client.get(
        "/api/measurements/metrics",
        params={"field": "Close", "company": "MSFT", "start_date": "2020"},
    )
    assert response.status_code == 200


async def test_padded_company_is_not_found(client):
    response = await client.get("/api/measurements", params={"field": "Close", "company": " AAPL"})
    assert response.status_code == 404


@pytest.mark.parametrize("path", ["/api/measurements", "/api/measurements/metrics"])
async def test_no_match_is_not_found(client, path):
    response = await client.get(path, params={"field": "Close", "company": "TSLA"})
    assert response.status_code == 404
    assert response.json() == {"error": "No data found for the specified criteria"}


async def test_date_range_on_empty_store():
    async with _client(InMemoryPriceRecordStore()) as http:
        response = await http.get("/api/date-range")
    assert response.status_code == 404
    assert response.json() == {"error": "No data found"}


@pytest.mark.parametrize(
    "path, message",
    [
        ("/api/companies", "Failed to fetch companies"),
        ("/api/measurements?field=Close", "Failed to fetch measurements"),
        ("/api/measurements/metrics?field=Close", "Failed to calculate metrics"),
        ("/api/date-range", "Failed to fetch date range"),
    ],
)
async def test_store_failure_is_server_error_without_details(path, message):
    async with _client(FailingStore()) as http:
        response = await http.get(path)
    assert response.status_code == 500
    assert response.json() == {"error": message}
    assert "db-host" not in response.text


async def test_health(client):
    response = await client.get("/health")
    assert response.json() == {"status": "ok"}
