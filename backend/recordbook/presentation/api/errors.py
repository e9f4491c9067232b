"""HTTP error mapping — tagged service results and exceptions to JSON responses.

Every error body has the shape ``{"error": ..., "message": ...}``; validation
failures add ``"details"`` holding the field-error map.
"""

import logging
import time
import traceback
from typing import TypeVar

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from recordbook.config import get_settings
from recordbook.domain.results import InternalError, NotFound, Ok, ValidationFailed
from recordbook.infrastructure.logging.log_config import log_access

logger = logging.getLogger(__name__)

T = TypeVar("T")


def error_body(error: str, message: str, details: dict[str, str] | None = None) -> dict:
    body: dict = {"error": error, "message": message}
    if details is not None:
        body["details"] = details
    return body


def unwrap(
    result: Ok[T] | ValidationFailed | NotFound | InternalError,
    *,
    not_found_error: str = "Record not found",
) -> T:
    """Return the value of an Ok result, or raise the matching HTTPException."""
    if isinstance(result, Ok):
        return result.value
    if isinstance(result, ValidationFailed):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_body("Validation failed", "Invalid record data", result.field_errors),
        )
    if isinstance(result, NotFound):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=error_body(not_found_error, result.message),
        )
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=error_body("Internal server error", result.message),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTPExceptions, including the router's own 404/405 responses."""
    if isinstance(exc.detail, dict):
        content = exc.detail
    elif exc.status_code == status.HTTP_404_NOT_FOUND:
        content = error_body(
            "Route not found",
            f"The requested route {request.url.path} does not exist",
        )
    else:
        content = error_body(str(exc.detail), str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies or query parameters become a 400 with a field-error map."""
    details: dict[str, str] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        field = loc[-1] if len(loc) > 1 else (loc[0] if loc else "request")
        details.setdefault(field, error.get("msg", "Invalid value"))
    logger.info("Rejected %s %s: %s", request.method, request.url.path, details)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation failed", "Invalid request data", details),
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request and turns unhandled exceptions into a generic 500."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            content = error_body("Internal server error", "Something went wrong on the server")
            if get_settings().is_development:
                content["stack"] = "".join(
                    traceback.format_exception(type(exc), exc, exc.__traceback__)
                )
            response = JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=content,
            )
        elapsed_ms = (time.perf_counter() - started) * 1000
        log_access(request.method, request.url.path, response.status_code, elapsed_ms)
        return response


def setup_error_handling(app: FastAPI) -> None:
    """Install the error handlers and the request logging middleware on ``app``."""
    app.add_middleware(RequestLoggingMiddleware)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
