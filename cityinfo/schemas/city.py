"""
CityInfo API - City Schemas
============================

What:  Response models for the cities resource.
Why:   GET /api/cities/{id} has two shapes depending on
       includePointsOfInterest; they are separate models so the summary shape
       has no pointsOfInterest member at all (not an empty or null one).
"""

from typing import List, Optional

from pydantic import Field, computed_field

from cityinfo.schemas.base import CamelModel
from cityinfo.schemas.point_of_interest import PointOfInterestDto


class CityWithoutPointsOfInterestDto(CamelModel):
    """Summary shape: used by the city list and by GET without children."""
    id: int = Field(description="City identifier")
    name: str = Field(description="City name")
    description: Optional[str] = Field(default=None, description="Short description")


class CityDto(CityWithoutPointsOfInterestDto):
    """Full shape, including the nested points of interest."""
    points_of_interest: List[PointOfInterestDto] = Field(default_factory=list)

    @computed_field(alias="numberOfPointsOfInterest")
    @property
    def number_of_points_of_interest(self) -> int:
        return len(self.points_of_interest)
