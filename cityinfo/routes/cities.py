"""
CityInfo API - City Route Handlers
===================================

What:  GET /api/cities (list) and GET /api/cities/{id} (detail).
How:   Extracts path/query parameters, delegates to CityService, returns JSON.
"""

import logging
from typing import List, Union

from fastapi import APIRouter, Depends, Query

from cityinfo.dependencies import get_city_info_repository
from cityinfo.repositories.base import CityInfoRepository
from cityinfo.schemas.base import ErrorResponse, ValidationErrorResponse
from cityinfo.schemas.city import CityDto, CityWithoutPointsOfInterestDto
from cityinfo.services.city_service import city_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cities", tags=["Cities"])


@router.get(
    "",
    response_model=List[CityWithoutPointsOfInterestDto],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List cities",
    description="Returns every city without its points of interest.",
)
async def list_cities(
    repository: CityInfoRepository = Depends(get_city_info_repository),
) -> List[CityWithoutPointsOfInterestDto]:
    return await city_service.list_cities(repository)


@router.get(
    "/{city_id}",
    # The body has one of two shapes, so the returned model is serialized
    # as-is instead of being coerced into a single response model
    response_model=None,
    responses={
        200: {
            "description": "The city; pointsOfInterest is present only when requested",
            "model": CityDto,
        },
        400: {"description": "Malformed parameter", "model": ValidationErrorResponse},
        404: {"description": "City not found (empty body)"},
    },
    summary="Get a city by ID",
)
async def get_city(
    city_id: int,
    include_points_of_interest: bool = Query(
        default=False,
        alias="includePointsOfInterest",
        description="Embed the city's points of interest in the response",
    ),
    repository: CityInfoRepository = Depends(get_city_info_repository),
) -> Union[CityDto, CityWithoutPointsOfInterestDto]:
    """
    Get one city.

    Example:
        GET /api/cities/3?includePointsOfInterest=true
        → {"id": 3, "name": "Paris", ..., "numberOfPointsOfInterest": 2,
           "pointsOfInterest": [...]}
        GET /api/cities/3
        → {"id": 3, "name": "Paris", "description": "..."}
    """
    return await city_service.get_city(repository, city_id, include_points_of_interest)
