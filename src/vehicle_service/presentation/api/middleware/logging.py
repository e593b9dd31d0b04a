"""Request logging middleware.

Binds a correlation ID to every request (taken from the X-Correlation-ID
header when the caller sends one), echoes it back on the response and
writes one line when the request arrives and one when it completes.
"""

import logging
import time
from typing import Any, Callable, Dict, Iterable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ....infrastructure.logging import (
    bind_correlation_id,
    get_logger,
    new_correlation_id,
    reset_correlation_id
)

logger = get_logger(__name__)

CORRELATION_ID_HEADER = "X-Correlation-ID"

REDACTED_HEADERS = frozenset({"authorization", "cookie", "proxy-authorization", "x-api-key"})

# Probes and docs would drown out vehicle traffic
QUIET_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json"})


class RequestResponseLoggingMiddleware(BaseHTTPMiddleware):
    """Log each vehicle API request with its correlation ID and duration."""

    def __init__(self, app: ASGIApp, quiet_paths: Optional[Iterable[str]] = None):
        super().__init__(app)
        self.quiet_paths = frozenset(quiet_paths) if quiet_paths is not None else QUIET_PATHS

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(CORRELATION_ID_HEADER) or new_correlation_id()
        token = bind_correlation_id(correlation_id)
        quiet = request.url.path in self.quiet_paths
        fields = _request_fields(request)
        started = time.perf_counter()

        try:
            if not quiet:
                logger.info(
                    f"{request.method} {request.url.path} received",
                    extra={**fields, "headers": _redact(request.headers.items())}
                )

            try:
                response = await call_next(request)
            except Exception:
                logger.exception(
                    f"{request.method} {request.url.path} raised",
                    extra={**fields, "duration_ms": _elapsed_ms(started)}
                )
                raise

            response.headers[CORRELATION_ID_HEADER] = correlation_id
            if not quiet or response.status_code >= 500:
                logger.log(
                    _level_for(response.status_code),
                    f"{request.method} {request.url.path} -> {response.status_code}",
                    extra={
                        **fields,
                        "status_code": response.status_code,
                        "duration_ms": _elapsed_ms(started)
                    }
                )
            return response
        finally:
            reset_correlation_id(token)


def _request_fields(request: Request) -> Dict[str, Any]:
    return {
        "method": request.method,
        "path": request.url.path,
        "client": request.client.host if request.client else None,
    }


def _redact(headers: Iterable) -> Dict[str, str]:
    return {
        name: "[REDACTED]" if name.lower() in REDACTED_HEADERS else value
        for name, value in headers
    }


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO
