"""
HTTP middleware: correlation binding and access logging.

CorrelationMiddleware accepts an inbound X-Correlation-ID (or mints one),
exposes it to every log record emitted while the request runs and echoes it
on the response. RequestLoggingMiddleware writes one line when a request
arrives and one when it completes; health checks are demoted to DEBUG so
polling does not drown the conversation traffic.

Dependencies: fastapi, starlette, samastha_ai.observability.correlation
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from samastha_ai.observability.correlation import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
QUIET_PATH_SUFFIXES = ("/health", "/health/db")


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log for REST traffic."""

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        label = f"{request.method} {path}"
        level = logging.DEBUG if path.endswith(QUIET_PATH_SUFFIXES) else logging.INFO
        fields = {"method": request.method, "path": path}
        started = time.perf_counter()

        logger.log(
            level,
            f"{__name__}:dispatch - {label}",
            extra={**fields, "client_host": getattr(request.client, "host", None)},
        )
        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{__name__}:dispatch - {label} raised",
                extra={
                    **fields,
                    "process_time_ms": _elapsed_ms(started),
                    "error_type": type(e).__name__,
                    "error_msg": str(e),
                },
            )
            raise

        logger.log(
            level,
            f"{__name__}:dispatch - {label} -> {response.status_code}",
            extra={**fields, "status_code": response.status_code, "process_time_ms": _elapsed_ms(started)},
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Binds a correlation ID for the lifetime of each request."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
