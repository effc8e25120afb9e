"""
CityInfo API - Database Repository
===================================

What:  CityInfoRepository backed by async SQLAlchemy.
Who:   Created per request by the repository dependency with that request's
       AsyncSession.

Query plans:
    city_exists:      SELECT id FROM cities WHERE id = :id            (PK lookup)
    get_city(+POIs):  SELECT city, then SELECT ... WHERE city_id IN (:id)
                      (selectinload, one extra round trip instead of a join)
    POI lookups:      WHERE city_id = :city_id [AND id = :id]
                      (idx_points_of_interest_city_id / PK)

Writes:
    add_point_of_interest flushes so the database-generated id is available
    for the 201 response; update and delete are issued as explicit statements
    / session operations. save() is the only commit point.
"""

import logging
from typing import List, Optional

from sqlalchemy import select, text, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from cityinfo.models import City, PointOfInterest
from cityinfo.repositories.base import CityInfoRepository, UpdatePointOfInterestCommand

logger = logging.getLogger(__name__)


class SqlAlchemyCityInfoRepository(CityInfoRepository):
    """Relational entity store (canonical)."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def city_exists(self, city_id: int) -> bool:
        result = await self._session.execute(select(City.id).where(City.id == city_id))
        return result.scalar_one_or_none() is not None

    async def get_cities(self) -> List[City]:
        result = await self._session.execute(select(City).order_by(City.name))
        return list(result.scalars().all())

    async def get_city(
        self, city_id: int, include_points_of_interest: bool = False
    ) -> Optional[City]:
        query = select(City).where(City.id == city_id)
        if include_points_of_interest:
            query = query.options(selectinload(City.points_of_interest))
        result = await self._session.execute(query)
        return result.scalar_one_or_none()

    async def get_points_of_interest_for_city(self, city_id: int) -> List[PointOfInterest]:
        result = await self._session.execute(
            select(PointOfInterest)
            .where(PointOfInterest.city_id == city_id)
            .order_by(PointOfInterest.id)
        )
        return list(result.scalars().all())

    async def get_point_of_interest(
        self, city_id: int, point_of_interest_id: int
    ) -> Optional[PointOfInterest]:
        result = await self._session.execute(
            select(PointOfInterest).where(
                PointOfInterest.city_id == city_id,
                PointOfInterest.id == point_of_interest_id,
            )
        )
        return result.scalar_one_or_none()

    async def add_point_of_interest(self, city_id: int, point_of_interest: PointOfInterest) -> None:
        point_of_interest.city_id = city_id
        self._session.add(point_of_interest)
        # Flush assigns the database-generated id without committing
        await self._session.flush()
        logger.debug("Staged point of interest %s for city %s", point_of_interest.id, city_id)

    async def update_point_of_interest(self, command: UpdatePointOfInterestCommand) -> None:
        await self._session.execute(
            update(PointOfInterest)
            .where(
                PointOfInterest.city_id == command.city_id,
                PointOfInterest.id == command.point_of_interest_id,
            )
            .values(name=command.name, description=command.description)
        )

    async def delete_point_of_interest(self, point_of_interest: PointOfInterest) -> None:
        await self._session.delete(point_of_interest)

    async def save(self) -> None:
        await self._session.commit()

    async def ping(self) -> bool:
        await self._session.execute(text("SELECT 1"))
        return True
