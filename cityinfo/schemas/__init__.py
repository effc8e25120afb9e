from cityinfo.schemas.base import (
    CamelModel,
    ErrorResponse,
    HealthResponse,
    ValidationErrorResponse,
)
from cityinfo.schemas.city import CityDto, CityWithoutPointsOfInterestDto
from cityinfo.schemas.point_of_interest import (
    PatchOperation,
    PointOfInterestDto,
    PointOfInterestForCreation,
    PointOfInterestForUpdate,
)

__all__ = [
    "CamelModel",
    "CityDto",
    "CityWithoutPointsOfInterestDto",
    "ErrorResponse",
    "HealthResponse",
    "PatchOperation",
    "PointOfInterestDto",
    "PointOfInterestForCreation",
    "PointOfInterestForUpdate",
    "ValidationErrorResponse",
]
