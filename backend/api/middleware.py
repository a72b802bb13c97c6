"""API middleware for request correlation, logging, timing and error bodies.

Every error leaving the API has the same shape, ``{"error", "message"}``,
whichever layer produced it.
"""

import time
from collections.abc import Callable
from http import HTTPStatus

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.config import settings
from ..core.constants import UNEXPECTED_ERROR
from ..core.correlation import resolve_request_id, set_request_id
from ..core.exceptions import INTERNAL_ERROR, StarterAPIException
from ..utils.logging import get_logger

logger = get_logger(__name__)

# Paths that skip request logging
_SKIP_LOGGING_PATHS = frozenset(["/health", "/favicon.ico"])


def error_body(status_code: int, message: str) -> dict[str, str]:
    """Shared error-response body for ``status_code``."""
    try:
        label = HTTPStatus(status_code).phrase
    except ValueError:
        label = INTERNAL_ERROR
    return {"error": label, "message": message}


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a request ID to the request, the log context and the response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = resolve_request_id(request.headers.get("X-Request-ID"))
        request.state.request_id = request_id
        set_request_id(request_id)

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """Add request timing and log slow requests."""

    def __init__(self, app, slow_threshold: float | None = None):
        super().__init__(app)
        self._slow_threshold = (
            settings.SLOW_REQUEST_THRESHOLD if slow_threshold is None else slow_threshold
        )

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)

        process_time = time.perf_counter() - start_time
        response.headers["X-Process-Time"] = f"{process_time:.4f}"

        if process_time > self._slow_threshold:
            logger.warning(
                "Slow request: %s %s took %.2fs",
                request.method,
                request.url.path,
                process_time,
            )
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every API request and any non-2xx response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if path in _SKIP_LOGGING_PATHS:
            return await call_next(request)

        method = request.method
        client = request.client
        logger.info(
            "Request: %s %s from %s",
            method,
            path,
            client.host if client else "unknown",
        )

        response = await call_next(request)

        status = response.status_code
        if status >= 400:
            logger.warning("Response: %s %s status=%d", method, path, status)
        else:
            logger.debug("Response: %s %s status=%d", method, path, status)
        return response


def exception_handler(request: Request, exc: StarterAPIException) -> JSONResponse:
    """Handle failures raised by Access Objects and route handlers."""
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        "%s: %s (status=%d) for %s %s",
        type(exc).__name__,
        exc.detail,
        exc.status_code,
        request.method,
        request.url.path,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> Response:
    """Unknown paths, wrong methods and other framework-level HTTP errors."""
    headers = getattr(exc, "headers", None)
    if exc.status_code == 204 or exc.status_code == 304:
        return Response(status_code=exc.status_code, headers=headers)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, str(exc.detail)),
        headers=headers,
    )


def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(
        "Unhandled exception for %s %s: %s", request.method, request.url.path, str(exc)
    )
    return JSONResponse(status_code=500, content=error_body(500, UNEXPECTED_ERROR))


__all__ = [
    "RequestIDMiddleware",
    "RequestLoggingMiddleware",
    "RequestTimingMiddleware",
    "error_body",
    "exception_handler",
    "generic_exception_handler",
    "http_exception_handler",
]
