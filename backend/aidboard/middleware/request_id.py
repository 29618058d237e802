"""
Aid Board Backend - Request Correlation
========================================

What:  Gives each HTTP request a short correlation ID, returns it in the
       X-Request-ID response header and stamps it on every log record
       emitted while the request is handled.
How:   RequestIDMiddleware stores the ID in a ContextVar; RequestIDLogFilter
       (installed on the root handler by setup_logging) copies it onto each
       LogRecord as ``record.request_id``, so the format string can print
       it for service and access log lines alike.

Incoming IDs:
    A client-supplied X-Request-ID is reused when it is short and printable
    (at most 64 characters, no whitespace). Anything else is replaced by the
    first 8 hex digits of a uuid4, so a caller cannot inject line breaks or
    oversized values into the logs.
"""

import logging
import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Printed for records logged outside any request (startup, shutdown).
NO_REQUEST_ID = "-"

_VALID_REQUEST_ID = re.compile(r"^[\x21-\x7e]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(header_value: Optional[str]) -> str:
    """The client's ID when it is safe to log, otherwise a fresh one."""
    if header_value and _VALID_REQUEST_ID.match(header_value):
        return header_value
    return new_request_id()


class RequestIDLogFilter(logging.Filter):
    """Adds ``request_id`` to every record passing through the handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = request_id_var.get() or NO_REQUEST_ID
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Binds the correlation ID for the duration of one request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        # Not reset afterwards: the outermost error handler runs after this
        # middleware returns and still reports the ID.
        request_id_var.set(request_id)
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
