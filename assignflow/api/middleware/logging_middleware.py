"""Request logging with correlation id propagation.

The caller's ``X-Correlation-ID`` is reused when present, otherwise one
is generated. It is bound for the whole request, so service log entries
carry it, and echoed back on the response.
"""

import time
from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from assignflow.infrastructure.observability.correlation import correlation_scope

CORRELATION_HEADER = "X-Correlation-ID"


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Binds a correlation id per request and logs its outcome."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        with correlation_scope(request.headers.get(CORRELATION_HEADER)) as correlation_id:
            log = structlog.get_logger().bind(
                component="http",
                correlation_id=correlation_id,
                method=request.method,
                path=request.url.path,
            )
            started = time.perf_counter()
            try:
                response = await call_next(request)
            except Exception as exc:
                log.exception(
                    "request_failed",
                    error_type=type(exc).__name__,
                    duration_ms=_elapsed_ms(started),
                )
                raise

            log.info(
                "request_handled",
                status_code=response.status_code,
                duration_ms=_elapsed_ms(started),
            )
            response.headers[CORRELATION_HEADER] = correlation_id
            return response
