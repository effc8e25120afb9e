"""
CityInfo API - Access Log Middleware
=====================================

What:  One access line per request on the "cityinfo.access" logger.

Line format:
    GET /api/cities/{city_id}/pointsofinterest 200 3.1ms [1f2e3d4c]

The path is the matched route template, not the raw URL, so lines for the
same endpoint group together whatever ids were requested. Requests that
matched no route (404s for unknown URLs) fall back to the raw path.

Level by status: 5xx ERROR, 4xx WARNING, otherwise INFO. Health checks are
not logged. Bodies and headers never are.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from cityinfo.middleware.request_id import request_id_var

logger = logging.getLogger("cityinfo.access")

SKIPPED_PATHS = frozenset({"/health"})


def route_template(request: Request) -> str:
    # The router stores the matched route on the shared scope while handling
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def level_for_status(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SKIPPED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        template = route_template(request)
        rid = request_id_var.get("")
        logger.log(
            level_for_status(response.status_code),
            "%s %s %d %.1fms [%s]",
            request.method,
            template,
            response.status_code,
            elapsed_ms,
            rid,
            extra={
                "request_id": rid,
                "method": request.method,
                "route": template,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
            },
        )
        return response
