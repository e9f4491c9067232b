"""HTTP client for the Record Book API.

Wraps ``httpx.AsyncClient`` and normalises every failure into an
:class:`ApiError` whose ``message`` is suitable for showing to a user.
"""

import logging
from datetime import datetime
from urllib.parse import quote
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000/api"
DEFAULT_TIMEOUT = 10.0


class ApiError(Exception):
    """A failed API call, shaped for display."""

    def __init__(
        self,
        error: str,
        message: str,
        details: Any = None,
        status_code: int | None = None,
    ):
        self.error = error
        self.message = message
        self.details = details
        self.status_code = status_code
        super().__init__(message)


def _response_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


def to_api_error(exc: Exception) -> ApiError:
    """Map an httpx failure to an ApiError following the API's status conventions."""
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        data = _response_json(exc.response)
        body = data if isinstance(data, dict) else {}

        if status == 400:
            return ApiError("Bad Request", body.get("message") or "Invalid data provided",
                            body.get("details") or data, status)
        if status == 401:
            return ApiError("Unauthorized", "Authentication required", data, status)
        if status == 403:
            return ApiError("Forbidden", "Access denied", data, status)
        if status == 404:
            return ApiError("Not Found", body.get("message") or "Resource not found", data, status)
        if status == 422:
            return ApiError("Validation Error", "Data validation failed",
                            body.get("details") or data, status)
        if status == 500:
            return ApiError("Server Error", "Internal server error occurred", data, status)
        return ApiError("API Error", body.get("message") or "An unexpected error occurred", data, status)

    if isinstance(exc, httpx.RequestError):
        return ApiError(
            "Network Error",
            "No response received from server",
            "Check your internet connection and try again",
        )
    return ApiError("Request Error", str(exc) or "Failed to make request", exc)


class ApiClient:
    """Thin JSON-over-HTTP wrapper with logging and error normalisation."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._http_client = http_client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            follow_redirects=True,
        )

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        logger.debug("API request: %s %s %s", method, url, params or json or "")
        try:
            response = await self._http_client.request(method, url, params=params, json=json)
            response.raise_for_status()
        except (httpx.HTTPStatusError, httpx.RequestError) as exc:
            error = to_api_error(exc)
            logger.debug("API error: %s %s -> %s (%s)", method, url, error.error, error.status_code)
            raise error from exc
        logger.debug("API response: %s %s", response.status_code, url)
        return _response_json(response)

    async def aclose(self) -> None:
        await self._http_client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def _serialize(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v.isoformat() if isinstance(v, datetime) else v for k, v in data.items()}


def _segment(value: str) -> str:
    """Encode a value for use as a single URL path segment."""
    return quote(str(value), safe="")


class RecordsApi:
    """Record endpoints."""

    def __init__(self, client: ApiClient):
        self._client = client

    async def get_all(self, **params: Any) -> dict[str, Any]:
        """One page: accepts page, limit, search, sortBy, sortOrder."""
        return await self._client.request("GET", "/records", params=params)

    async def get_by_id(self, record_id: str) -> dict[str, Any]:
        return await self._client.request("GET", f"/records/{_segment(record_id)}")

    async def create(self, record: dict[str, Any]) -> dict[str, Any]:
        return await self._client.request("POST", "/records", json=_serialize(record))

    async def update(self, record_id: str, record: dict[str, Any]) -> dict[str, Any]:
        return await self._client.request("PUT", f"/records/{_segment(record_id)}", json=_serialize(record))

    async def delete(self, record_id: str) -> dict[str, Any]:
        return await self._client.request("DELETE", f"/records/{_segment(record_id)}")

    async def get_count(self) -> dict[str, Any]:
        return await self._client.request("GET", "/records/count/total")

    async def get_by_state(self, state: str) -> list[dict[str, Any]]:
        return await self._client.request("GET", f"/records/state/{_segment(state)}")

    async def get_by_district(self, district: str) -> list[dict[str, Any]]:
        return await self._client.request("GET", f"/records/district/{_segment(district)}")

    async def get_by_city(self, city: str) -> list[dict[str, Any]]:
        return await self._client.request("GET", f"/records/city/{_segment(city)}")

    async def get_by_zipcode(self, zipcode: str) -> list[dict[str, Any]]:
        return await self._client.request("GET", f"/records/zipcode/{_segment(zipcode)}")

    async def get_by_date_range(self, start: datetime, end: datetime) -> list[dict[str, Any]]:
        return await self._client.request(
            "GET",
            "/records/date-range",
            params={"startDate": start.isoformat(), "endDate": end.isoformat()},
        )


class LocationApi:
    """State/district lookup endpoints."""

    def __init__(self, client: ApiClient):
        self._client = client

    async def get_states(self) -> list[str]:
        return await self._client.request("GET", "/location/states")

    async def get_districts(self, state: str) -> list[str]:
        return await self._client.request("GET", f"/location/districts/{_segment(state)}")

    async def get_all(self) -> dict[str, list[str]]:
        return await self._client.request("GET", "/location/all")
