"""Unit tests for the API client wrappers."""

import json
from datetime import datetime, timezone

import httpx
import pytest

from recordbook.client.api_client import ApiClient, ApiError, LocationApi, RecordsApi


# ── Helpers ──


def _client(handler) -> ApiClient:
    http_client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler),
        base_url="http://test/api",
    )
    return ApiClient(http_client=http_client)


def _fixed(status_code: int, payload) -> ApiClient:
    return _client(lambda request: httpx.Response(status_code, json=payload))


# ── Tests ──


@pytest.mark.asyncio
async def test_get_all_sends_query_params():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"records": [], "totalRecords": 0})

    api = RecordsApi(_client(handler))
    result = await api.get_all(page=2, limit=16, search="goa", sortBy="city", sortOrder="desc")

    assert result == {"records": [], "totalRecords": 0}
    params = seen[0].url.params
    assert seen[0].url.path == "/api/records"
    assert (params["page"], params["limit"], params["search"]) == ("2", "16", "goa")
    assert (params["sortBy"], params["sortOrder"]) == ("city", "desc")


@pytest.mark.asyncio
async def test_create_serializes_dates():
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(201, json={"id": "abc"})

    api = RecordsApi(_client(handler))
    await api.create({"name": "Asha", "recordDate": datetime(2024, 3, 15, tzinfo=timezone.utc)})

    assert bodies[0] == {"name": "Asha", "recordDate": "2024-03-15T00:00:00+00:00"}


@pytest.mark.asyncio
async def test_validation_failure_becomes_api_error_with_details():
    api = RecordsApi(
        _fixed(
            400,
            {
                "error": "Validation failed",
                "message": "Invalid record data",
                "details": {"zipcode": "Zipcode must be exactly 6 digits"},
            },
        )
    )
    with pytest.raises(ApiError) as exc_info:
        await api.create({"zipcode": "12345"})

    error = exc_info.value
    assert error.status_code == 400
    assert error.error == "Bad Request"
    assert error.message == "Invalid record data"
    assert error.details == {"zipcode": "Zipcode must be exactly 6 digits"}


@pytest.mark.asyncio
async def test_not_found_uses_server_message():
    api = LocationApi(
        _fixed(404, {"error": "State not found", "message": "No districts found for the specified state"})
    )
    with pytest.raises(ApiError) as exc_info:
        await api.get_districts("Narnia")

    assert exc_info.value.error == "Not Found"
    assert exc_info.value.message == "No districts found for the specified state"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status_code, error, message",
    [
        (401, "Unauthorized", "Authentication required"),
        (403, "Forbidden", "Access denied"),
        (500, "Server Error", "Internal server error occurred"),
        (503, "API Error", "An unexpected error occurred"),
    ],
)
async def test_status_mapping(status_code, error, message):
    api = RecordsApi(_fixed(status_code, {"detail": "nope"}))
    with pytest.raises(ApiError) as exc_info:
        await api.get_count()
    assert (exc_info.value.error, exc_info.value.message) == (error, message)


@pytest.mark.asyncio
async def test_network_failure_becomes_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    api = RecordsApi(_client(handler))
    with pytest.raises(ApiError) as exc_info:
        await api.get_by_id("abc")

    assert exc_info.value.error == "Network Error"
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_date_range_params():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    api = RecordsApi(_client(handler))
    await api.get_by_date_range(datetime(2024, 1, 1), datetime(2024, 1, 31))

    assert seen[0].url.path == "/api/records/date-range"
    assert seen[0].url.params["startDate"] == "2024-01-01T00:00:00"
    assert seen[0].url.params["endDate"] == "2024-01-31T00:00:00"


@pytest.mark.asyncio
async def test_path_values_are_encoded_as_one_segment():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    client = _client(handler)
    await RecordsApi(client).get_by_city("Daman/Diu")
    await RecordsApi(client).get_by_district("Who?")
    await LocationApi(client).get_districts("Tamil Nadu")

    assert seen[0].url.raw_path == b"/api/records/city/Daman%2FDiu"
    assert seen[1].url.raw_path == b"/api/records/district/Who%3F"
    assert seen[1].url.query == b""
    assert seen[2].url.raw_path == b"/api/location/districts/Tamil%20Nadu"
