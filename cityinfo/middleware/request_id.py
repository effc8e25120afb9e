"""
CityInfo API - Request ID Middleware
=====================================

What:  Gives every request a correlation ID and echoes it in X-Request-ID.
How:   A client-supplied X-Request-ID is reused when it is a short token of
       letters, digits, '-', '_' or '.'; anything else (too long, spaces,
       control characters) is replaced, since the value ends up in log lines
       and response headers. Generated IDs are the first 8 hex digits of a
       UUID4.

The ID lives in `request_id_var` (coroutine-local) and request.state. It is
not reset after the response: the 500 handler runs outside this middleware
and still needs it.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

_CLIENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def resolve_request_id(client_value: Optional[str]) -> str:
    """The client's ID when it is safe to log, otherwise a fresh one."""
    if client_value and _CLIENT_ID_PATTERN.match(client_value):
        return client_value
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
