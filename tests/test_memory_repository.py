"""
CityInfo API - In-Memory Repository Tests
==========================================

What:  Tests for InMemoryCityStore and InMemoryCityInfoRepository.

What we test:
    ✅ Seeded store contents and lookups
    ✅ Identifiers strictly increase, also after a delete
    ✅ Update commands and deletes change the store
"""

import pytest

from cityinfo.models import PointOfInterest
from cityinfo.repositories.base import UpdatePointOfInterestCommand
from cityinfo.repositories.memory import InMemoryCityInfoRepository, InMemoryCityStore


@pytest.fixture
def repository(memory_store):
    return InMemoryCityInfoRepository(memory_store)


class TestInMemoryCityStore:

    def test_next_id_starts_above_seeded_ids(self, memory_store):
        assert memory_store.next_point_of_interest_id() == 7

    def test_empty_store_starts_at_one(self):
        assert InMemoryCityStore().next_point_of_interest_id() == 1

    def test_find_city(self, memory_store):
        assert memory_store.find_city(3).name == "Paris"
        assert memory_store.find_city(42) is None

    def test_stores_are_independent(self):
        first = InMemoryCityStore.with_seed_data()
        second = InMemoryCityStore.with_seed_data()
        first.cities[0].points_of_interest.clear()
        assert len(second.cities[0].points_of_interest) == 2


class TestInMemoryRepositoryReads:

    @pytest.mark.asyncio
    async def test_cities_are_ordered_by_name(self, repository):
        cities = await repository.get_cities()
        assert [c.name for c in cities] == ["Antwerp", "New York City", "Paris"]

    @pytest.mark.asyncio
    async def test_city_exists(self, repository):
        assert await repository.city_exists(1) is True
        assert await repository.city_exists(99) is False

    @pytest.mark.asyncio
    async def test_point_of_interest_lookup_is_scoped_to_city(self, repository):
        assert (await repository.get_point_of_interest(3, 5)).name == "Eiffel Tower"
        # Point of interest 5 belongs to Paris, not New York City
        assert await repository.get_point_of_interest(1, 5) is None

    @pytest.mark.asyncio
    async def test_points_of_interest_for_missing_city(self, repository):
        assert await repository.get_points_of_interest_for_city(99) == []


class TestInMemoryRepositoryWrites:

    @pytest.mark.asyncio
    async def test_add_assigns_increasing_ids(self, repository):
        first = PointOfInterest(name="Atomium", description=None)
        second = PointOfInterest(name="MAS", description=None)
        await repository.add_point_of_interest(2, first)
        await repository.add_point_of_interest(2, second)
        assert first.id == 7
        assert second.id == 8
        assert first.city_id == 2

    @pytest.mark.asyncio
    async def test_ids_are_not_reused_after_delete(self, repository):
        added = PointOfInterest(name="Atomium", description=None)
        await repository.add_point_of_interest(2, added)
        await repository.delete_point_of_interest(added)

        again = PointOfInterest(name="MAS", description=None)
        await repository.add_point_of_interest(2, again)
        assert again.id > added.id

    @pytest.mark.asyncio
    async def test_add_to_missing_city_raises(self, repository):
        with pytest.raises(LookupError):
            await repository.add_point_of_interest(99, PointOfInterest(name="Nowhere"))

    @pytest.mark.asyncio
    async def test_update_command_replaces_fields(self, repository):
        await repository.update_point_of_interest(
            UpdatePointOfInterestCommand(
                city_id=1, point_of_interest_id=1, name="Bryant Park", description=None
            )
        )
        updated = await repository.get_point_of_interest(1, 1)
        assert updated.name == "Bryant Park"
        assert updated.description is None

    @pytest.mark.asyncio
    async def test_delete_removes_from_city(self, repository):
        entity = await repository.get_point_of_interest(1, 2)
        await repository.delete_point_of_interest(entity)
        await repository.save()
        assert await repository.get_point_of_interest(1, 2) is None
        assert len(await repository.get_points_of_interest_for_city(1)) == 1
