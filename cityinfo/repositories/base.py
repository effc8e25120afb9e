"""
CityInfo API - Abstract Repository Interface
=============================================

What:  The query/mutate contract every entity store implements.
Why:   Request handlers depend on this interface only, so the database store
       and the in-memory store are interchangeable behind dependency injection.
How:   Concrete repositories inherit from CityInfoRepository:
       - SqlAlchemyCityInfoRepository (sql.py): canonical, persisted store
       - InMemoryCityInfoRepository (memory.py): explicit in-process store

Mutation model:
    Reads hand back entities; writes never rely on the caller mutating those
    entities. Updates are described by an UpdatePointOfInterestCommand and
    applied through update_point_of_interest(). Nothing is durable until
    save() is called.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from cityinfo.models import City, PointOfInterest


@dataclass(frozen=True)
class UpdatePointOfInterestCommand:
    """Full replacement of a point of interest's editable fields."""

    city_id: int
    point_of_interest_id: int
    name: str
    description: Optional[str] = None


class CityInfoRepository(ABC):
    """
    Abstract facade over the city / point-of-interest store.

    Contract:
        - Lookups return None (or an empty list) for missing records; they
          never raise for "not found". Services decide what a miss means.
        - add_point_of_interest() populates entity.id before returning.
        - Each method is atomic at the store's granularity; there is no
          transaction spanning several calls beyond the pending work that
          save() commits.
    """

    @abstractmethod
    async def city_exists(self, city_id: int) -> bool:
        ...

    @abstractmethod
    async def get_cities(self) -> List[City]:
        """All cities, without their points of interest."""
        ...

    @abstractmethod
    async def get_city(
        self, city_id: int, include_points_of_interest: bool = False
    ) -> Optional[City]:
        """
        Fetch one city.

        Args:
            include_points_of_interest: Load the children as well. When False,
                callers must not touch city.points_of_interest.
        """
        ...

    @abstractmethod
    async def get_points_of_interest_for_city(self, city_id: int) -> List[PointOfInterest]:
        ...

    @abstractmethod
    async def get_point_of_interest(
        self, city_id: int, point_of_interest_id: int
    ) -> Optional[PointOfInterest]:
        """Fetch a point of interest, scoped to its owning city."""
        ...

    @abstractmethod
    async def add_point_of_interest(self, city_id: int, point_of_interest: PointOfInterest) -> None:
        """Attach a new point of interest to a city; the store assigns its id."""
        ...

    @abstractmethod
    async def update_point_of_interest(self, command: UpdatePointOfInterestCommand) -> None:
        ...

    @abstractmethod
    async def delete_point_of_interest(self, point_of_interest: PointOfInterest) -> None:
        ...

    @abstractmethod
    async def save(self) -> None:
        """Commit pending mutations."""
        ...

    async def ping(self) -> bool:
        """Lightweight connectivity check used by GET /health."""
        return True
