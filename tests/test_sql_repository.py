"""
CityInfo API - Database Repository Tests
=========================================

What:  Tests for SqlAlchemyCityInfoRepository on a temporary SQLite database.
How:   sql_engine creates the schema and loads the seed cities; writes are
       checked from a second session, so only what save() committed is seen.
"""

import pytest
from sqlalchemy import select

from cityinfo.models import PointOfInterest
from cityinfo.repositories.base import UpdatePointOfInterestCommand
from cityinfo.repositories.sql import SqlAlchemyCityInfoRepository
from cityinfo.seed import seed_database


class TestSqlRepositoryReads:

    @pytest.mark.asyncio
    async def test_cities_are_ordered_by_name(self, sql_session):
        repository = SqlAlchemyCityInfoRepository(sql_session)
        cities = await repository.get_cities()
        assert [c.name for c in cities] == ["Antwerp", "New York City", "Paris"]

    @pytest.mark.asyncio
    async def test_get_city_with_points_of_interest(self, sql_session):
        repository = SqlAlchemyCityInfoRepository(sql_session)
        paris = await repository.get_city(3, include_points_of_interest=True)
        assert paris.name == "Paris"
        assert [p.name for p in paris.points_of_interest] == ["Eiffel Tower", "The Louvre"]

    @pytest.mark.asyncio
    async def test_missing_city(self, sql_session):
        repository = SqlAlchemyCityInfoRepository(sql_session)
        assert await repository.get_city(99) is None
        assert await repository.city_exists(99) is False
        assert await repository.get_points_of_interest_for_city(99) == []

    @pytest.mark.asyncio
    async def test_point_of_interest_lookup_is_scoped_to_city(self, sql_session):
        repository = SqlAlchemyCityInfoRepository(sql_session)
        eiffel = (await repository.get_points_of_interest_for_city(3))[0]
        assert (await repository.get_point_of_interest(3, eiffel.id)).name == "Eiffel Tower"
        assert await repository.get_point_of_interest(1, eiffel.id) is None

    @pytest.mark.asyncio
    async def test_ping(self, sql_session):
        assert await SqlAlchemyCityInfoRepository(sql_session).ping() is True

    @pytest.mark.asyncio
    async def test_seed_is_skipped_when_data_exists(self, sql_session):
        assert await seed_database(sql_session) is False


class TestSqlRepositoryWrites:

    @pytest.mark.asyncio
    async def test_add_assigns_id_before_save(self, sql_session):
        repository = SqlAlchemyCityInfoRepository(sql_session)
        entity = PointOfInterest(name="Atomium", description="Built for Expo 58.")
        await repository.add_point_of_interest(2, entity)
        assert entity.id is not None
        assert entity.city_id == 2

    @pytest.mark.asyncio
    async def test_nothing_is_durable_without_save(self, sql_session_factory):
        async with sql_session_factory() as session:
            repository = SqlAlchemyCityInfoRepository(session)
            await repository.add_point_of_interest(2, PointOfInterest(name="Atomium"))
            # Closing without save() discards the insert

        async with sql_session_factory() as session:
            names = [p.name for p in await SqlAlchemyCityInfoRepository(session).get_points_of_interest_for_city(2)]
        assert "Atomium" not in names

    @pytest.mark.asyncio
    async def test_update_command_is_saved(self, sql_session_factory):
        async with sql_session_factory() as session:
            repository = SqlAlchemyCityInfoRepository(session)
            central_park = (await repository.get_points_of_interest_for_city(1))[0]
            await repository.update_point_of_interest(
                UpdatePointOfInterestCommand(
                    city_id=1,
                    point_of_interest_id=central_park.id,
                    name="Bryant Park",
                    description=None,
                )
            )
            await repository.save()

        async with sql_session_factory() as session:
            reloaded = await SqlAlchemyCityInfoRepository(session).get_point_of_interest(1, central_park.id)
        assert reloaded.name == "Bryant Park"
        assert reloaded.description is None

    @pytest.mark.asyncio
    async def test_delete_is_saved_and_ids_are_not_reused(self, sql_session_factory):
        async with sql_session_factory() as session:
            repository = SqlAlchemyCityInfoRepository(session)
            added = PointOfInterest(name="Atomium")
            await repository.add_point_of_interest(2, added)
            await repository.save()
            await repository.delete_point_of_interest(added)
            await repository.save()

        async with sql_session_factory() as session:
            repository = SqlAlchemyCityInfoRepository(session)
            assert await repository.get_point_of_interest(2, added.id) is None

            again = PointOfInterest(name="MAS")
            await repository.add_point_of_interest(2, again)
            await repository.save()

        assert again.id > added.id

        async with sql_session_factory() as session:
            result = await session.execute(select(PointOfInterest.name).where(PointOfInterest.city_id == 2))
            assert "MAS" in result.scalars().all()
