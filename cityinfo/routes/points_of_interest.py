"""
CityInfo API - Point of Interest Route Handlers
================================================

What:  CRUD for /api/cities/{cityId}/pointsofinterest.
How:   Routes translate HTTP to service calls and pick the success status;
       400/404 come from exceptions raised by PointOfInterestService and
       mapped by the global handlers in main.py.

Route Inventory:
    GET     /api/cities/{city_id}/pointsofinterest          200
    GET     /api/cities/{city_id}/pointsofinterest/{id}     200
    POST    /api/cities/{city_id}/pointsofinterest          201 + Location
    PUT     /api/cities/{city_id}/pointsofinterest/{id}     204
    PATCH   /api/cities/{city_id}/pointsofinterest/{id}     204
    DELETE  /api/cities/{city_id}/pointsofinterest/{id}     204 + mail
"""

import logging
from typing import List

from fastapi import APIRouter, BackgroundTasks, Body, Depends, Request, Response, status

from cityinfo.dependencies import get_city_info_repository, get_mail_service
from cityinfo.repositories.base import CityInfoRepository
from cityinfo.schemas.base import ValidationErrorResponse
from cityinfo.schemas.point_of_interest import (
    PatchOperation,
    PointOfInterestDto,
    PointOfInterestForCreation,
    PointOfInterestForUpdate,
)
from cityinfo.services.mail_service import MailService
from cityinfo.services.point_of_interest_service import (
    deletion_mail,
    point_of_interest_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cities/{city_id}/pointsofinterest", tags=["Points of Interest"])

NOT_FOUND = {404: {"description": "City or point of interest not found (empty body)"}}
BAD_REQUEST = {400: {"description": "Validation failed", "model": ValidationErrorResponse}}


@router.get(
    "",
    response_model=List[PointOfInterestDto],
    responses={**NOT_FOUND},
    summary="List the points of interest of a city",
)
async def list_points_of_interest(
    city_id: int,
    repository: CityInfoRepository = Depends(get_city_info_repository),
) -> List[PointOfInterestDto]:
    return await point_of_interest_service.list_points_of_interest(repository, city_id)


@router.get(
    "/{point_of_interest_id}",
    name="get_point_of_interest",
    response_model=PointOfInterestDto,
    responses={**NOT_FOUND},
    summary="Get a point of interest",
)
async def get_point_of_interest(
    city_id: int,
    point_of_interest_id: int,
    repository: CityInfoRepository = Depends(get_city_info_repository),
) -> PointOfInterestDto:
    return await point_of_interest_service.get_point_of_interest(
        repository, city_id, point_of_interest_id
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=PointOfInterestDto,
    responses={**BAD_REQUEST, **NOT_FOUND},
    summary="Create a point of interest",
    description=(
        "Adds a point of interest to the city. The identifier is assigned by the "
        "store. The Location header points at the new resource."
    ),
)
async def create_point_of_interest(
    city_id: int,
    request: Request,
    response: Response,
    point_of_interest: PointOfInterestForCreation,
    repository: CityInfoRepository = Depends(get_city_info_repository),
) -> PointOfInterestDto:
    created = await point_of_interest_service.create_point_of_interest(
        repository, city_id, point_of_interest
    )
    response.headers["Location"] = str(
        request.url_for(
            "get_point_of_interest",
            city_id=city_id,
            point_of_interest_id=created.id,
        )
    )
    return created


@router.put(
    "/{point_of_interest_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**BAD_REQUEST, **NOT_FOUND},
    summary="Replace a point of interest",
)
async def update_point_of_interest(
    city_id: int,
    point_of_interest_id: int,
    point_of_interest: PointOfInterestForUpdate,
    repository: CityInfoRepository = Depends(get_city_info_repository),
) -> Response:
    await point_of_interest_service.update_point_of_interest(
        repository, city_id, point_of_interest_id, point_of_interest
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{point_of_interest_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**BAD_REQUEST, **NOT_FOUND},
    summary="Partially update a point of interest",
    description=(
        "Applies a JSON Patch document, e.g. "
        '[{"op": "replace", "path": "/name", "value": "New name"}], '
        "then validates the result as a full update."
    ),
)
async def patch_point_of_interest(
    city_id: int,
    point_of_interest_id: int,
    operations: List[PatchOperation] = Body(...),
    repository: CityInfoRepository = Depends(get_city_info_repository),
) -> Response:
    await point_of_interest_service.patch_point_of_interest(
        repository, city_id, point_of_interest_id, operations
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{point_of_interest_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**NOT_FOUND},
    summary="Delete a point of interest",
    description="Deletes the point of interest and notifies the administrator by mail.",
)
async def delete_point_of_interest(
    city_id: int,
    point_of_interest_id: int,
    background_tasks: BackgroundTasks,
    repository: CityInfoRepository = Depends(get_city_info_repository),
    mail_service: MailService = Depends(get_mail_service),
) -> Response:
    deleted = await point_of_interest_service.delete_point_of_interest(
        repository, city_id, point_of_interest_id
    )
    # Fire-and-forget: runs after the response is sent; failures only reach the log
    subject, message = deletion_mail(deleted)
    background_tasks.add_task(mail_service.send, subject, message)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
