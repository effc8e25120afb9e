"""
CityInfo API - City Service
============================

What:  Read-only operations on cities.
Who:   Called by the routes in routes/cities.py.
"""

import logging
from typing import List, Union

from cityinfo.exceptions import NotFoundError
from cityinfo.mapping import (
    to_city_dto,
    to_city_without_points_of_interest_dto,
    to_city_without_points_of_interest_dtos,
)
from cityinfo.repositories.base import CityInfoRepository
from cityinfo.schemas.city import CityDto, CityWithoutPointsOfInterestDto

logger = logging.getLogger(__name__)


class CityService:
    """Stateless; the repository is passed in for every call."""

    async def list_cities(
        self, repository: CityInfoRepository
    ) -> List[CityWithoutPointsOfInterestDto]:
        cities = await repository.get_cities()
        return to_city_without_points_of_interest_dtos(cities)

    async def get_city(
        self,
        repository: CityInfoRepository,
        city_id: int,
        include_points_of_interest: bool = False,
    ) -> Union[CityDto, CityWithoutPointsOfInterestDto]:
        """
        Fetch one city in the shape the caller asked for.

        Returns:
            CityDto when include_points_of_interest is True, otherwise
            CityWithoutPointsOfInterestDto (no pointsOfInterest member).

        Raises:
            NotFoundError: no city with this id.
        """
        city = await repository.get_city(city_id, include_points_of_interest)
        if city is None:
            logger.info("City %s was not found", city_id)
            raise NotFoundError(resource="city", resource_id=city_id)

        if include_points_of_interest:
            return to_city_dto(city)
        return to_city_without_points_of_interest_dto(city)


city_service = CityService()
