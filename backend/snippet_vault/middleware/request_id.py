"""
Snippet Vault Backend - Request ID Middleware
==============================================

What:  Tags every request with a short correlation ID.
How:   Reuses the client's X-Request-ID header when it is a short token,
       otherwise generates one; stores it in a ContextVar and echoes it back
       in the response header.
Who:   Read by the access logger and by the exception handlers, which put the
       same ID in error bodies and in the 500 response header.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Client IDs end up in log lines, so only plain tokens are accepted
_CLIENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{1,64}$")


def resolve_request_id(header_value: str) -> str:
    """The client's ID if it is a plain token, else a fresh 8-char hex ID."""
    if header_value and _CLIENT_ID_PATTERN.match(header_value):
        return header_value
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns a request ID and returns it in the X-Request-ID header."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get("X-Request-ID", ""))
        request_id_var.set(rid)

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
