"""
Aid Board Backend - Access Logging Middleware
==============================================

What:  One line per HTTP request on the "aidboard.access" logger.
How:   Times call_next and logs method, path, final status, duration and
       client address; the request ID comes from RequestIDLogFilter. Bodies
       are never logged: service requests carry names, phone numbers and
       addresses.

Levels:
    5xx or an exception escaping the app → ERROR
    4xx                                  → WARNING
    otherwise                            → INFO
    Paths in QUIET_PATHS (the health check) are not logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("aidboard.access")

QUIET_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request with its final status and duration."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        client = request.client.host if request.client else "unknown"
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.error(
                "%s %s failed after %.1fms from %s",
                request.method, request.url.path, elapsed_ms, client,
            )
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.log(
            level_for_status(response.status_code),
            "%s %s -> %d in %.1fms from %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            client,
            extra={
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
                "client_ip": client,
            },
        )
        return response
