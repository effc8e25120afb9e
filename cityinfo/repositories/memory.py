"""
CityInfo API - In-Memory Entity Store
======================================

What:  An explicit, process-local store of City entities plus the repository
       that reads and writes it.
Why:   Running the API without a database (development, demos, tests) must
       not mean hidden module-level state. The store is an ordinary object:
       create_app() builds one, keeps it on app.state, and the repository
       dependency hands it to each request.
How:   Entities are unattached SQLAlchemy model instances, so both stores
       return the same types and the mapper does not care where they came
       from.

Identifier generation:
    A single itertools.count seeded above the highest existing id. next() on
    it is atomic under the event loop, so two concurrent creates can never
    compute the same id, and ids are never reused after a delete.
"""

import itertools
from typing import Iterable, List, Optional

from cityinfo.models import City, PointOfInterest
from cityinfo.repositories.base import CityInfoRepository, UpdatePointOfInterestCommand
from cityinfo.seed import build_seed_cities


class InMemoryCityStore:
    """Holds cities and hands out point-of-interest ids."""

    def __init__(self, cities: Optional[Iterable[City]] = None):
        self.cities: List[City] = list(cities or [])
        highest = max(
            (poi.id for city in self.cities for poi in city.points_of_interest),
            default=0,
        )
        self._point_of_interest_ids = itertools.count(highest + 1)

    @classmethod
    def with_seed_data(cls) -> "InMemoryCityStore":
        return cls(build_seed_cities())

    def next_point_of_interest_id(self) -> int:
        return next(self._point_of_interest_ids)

    def find_city(self, city_id: int) -> Optional[City]:
        return next((c for c in self.cities if c.id == city_id), None)


class InMemoryCityInfoRepository(CityInfoRepository):
    """Repository over an InMemoryCityStore; save() has nothing to commit."""

    def __init__(self, store: InMemoryCityStore):
        self._store = store

    async def city_exists(self, city_id: int) -> bool:
        return self._store.find_city(city_id) is not None

    async def get_cities(self) -> List[City]:
        return sorted(self._store.cities, key=lambda c: c.name)

    async def get_city(
        self, city_id: int, include_points_of_interest: bool = False
    ) -> Optional[City]:
        return self._store.find_city(city_id)

    async def get_points_of_interest_for_city(self, city_id: int) -> List[PointOfInterest]:
        city = self._store.find_city(city_id)
        if city is None:
            return []
        return list(city.points_of_interest)

    async def get_point_of_interest(
        self, city_id: int, point_of_interest_id: int
    ) -> Optional[PointOfInterest]:
        city = self._store.find_city(city_id)
        if city is None:
            return None
        return next(
            (p for p in city.points_of_interest if p.id == point_of_interest_id),
            None,
        )

    async def add_point_of_interest(self, city_id: int, point_of_interest: PointOfInterest) -> None:
        city = self._store.find_city(city_id)
        if city is None:
            raise LookupError(f"City {city_id} does not exist")
        point_of_interest.id = self._store.next_point_of_interest_id()
        point_of_interest.city_id = city_id
        city.points_of_interest.append(point_of_interest)

    async def update_point_of_interest(self, command: UpdatePointOfInterestCommand) -> None:
        point_of_interest = await self.get_point_of_interest(
            command.city_id, command.point_of_interest_id
        )
        if point_of_interest is None:
            raise LookupError(
                f"Point of interest {command.point_of_interest_id} "
                f"does not exist in city {command.city_id}"
            )
        point_of_interest.name = command.name
        point_of_interest.description = command.description

    async def delete_point_of_interest(self, point_of_interest: PointOfInterest) -> None:
        for city in self._store.cities:
            if point_of_interest in city.points_of_interest:
                city.points_of_interest.remove(point_of_interest)
                return

    async def save(self) -> None:
        pass
