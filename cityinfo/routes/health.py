"""
CityInfo API - Health Check Route
==================================

What:  Health check endpoint for monitoring and load balancer checks.
How:   Pings the configured entity store through the repository and reports
       the result with version and uptime.
Who:   Called by container health checks, load balancers, monitoring.

Status levels:
    - healthy:   the entity store answered
    - unhealthy: the store is unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Depends, Request, Response, status

from cityinfo import __version__
from cityinfo.dependencies import get_city_info_repository
from cityinfo.repositories.base import CityInfoRepository
from cityinfo.schemas.base import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={503: {"description": "Entity store unreachable", "model": HealthResponse}},
)
async def health_check(
    request: Request,
    response: Response,
    repository: CityInfoRepository = Depends(get_city_info_repository),
) -> HealthResponse:
    store_status = "connected"
    overall = "healthy"

    try:
        await repository.ping()
    except Exception as e:
        # A failed ping is the answer, not an error of this endpoint
        store_status = "disconnected"
        overall = "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("Health check: entity store unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        store_backend=request.app.state.settings.store_backend,
        store=store_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
