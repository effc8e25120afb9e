"""
CityInfo API - Mapping Unit Tests
==================================

What:  Tests for the entity <-> DTO conversion functions.
How:   Builds unattached model instances; no store involved.

What we test:
    ✅ City summary shape has no pointsOfInterest member
    ✅ Full city shape counts its points of interest
    ✅ Creation DTO -> entity leaves the id unset
    ✅ Entity -> update DTO -> command preserves name and description
"""

from cityinfo.mapping import (
    to_city_dto,
    to_city_without_points_of_interest_dto,
    to_point_of_interest_dto,
    to_point_of_interest_entity,
    to_point_of_interest_for_update,
    to_update_command,
)
from cityinfo.models import City, PointOfInterest
from cityinfo.schemas.point_of_interest import PointOfInterestForCreation


def _paris() -> City:
    return City(
        id=3,
        name="Paris",
        description="The one with that big tower.",
        points_of_interest=[
            PointOfInterest(id=5, name="Eiffel Tower", description="Iron lattice tower."),
            PointOfInterest(id=6, name="The Louvre", description="The world's largest museum."),
        ],
    )


class TestCityMapping:

    def test_summary_has_no_points_of_interest_member(self):
        dto = to_city_without_points_of_interest_dto(_paris())
        body = dto.model_dump(by_alias=True)
        assert body == {"id": 3, "name": "Paris", "description": "The one with that big tower."}
        assert "pointsOfInterest" not in body

    def test_full_city_counts_points_of_interest(self):
        body = to_city_dto(_paris()).model_dump(by_alias=True)
        assert body["numberOfPointsOfInterest"] == 2
        assert [p["name"] for p in body["pointsOfInterest"]] == ["Eiffel Tower", "The Louvre"]

    def test_full_city_without_children(self):
        city = City(id=9, name="Ghent", description=None, points_of_interest=[])
        body = to_city_dto(city).model_dump(by_alias=True)
        assert body["pointsOfInterest"] == []
        assert body["numberOfPointsOfInterest"] == 0


class TestPointOfInterestMapping:

    def test_entity_to_dto(self):
        entity = PointOfInterest(id=7, name="Atomium", description=None)
        dto = to_point_of_interest_dto(entity)
        assert (dto.id, dto.name, dto.description) == (7, "Atomium", None)

    def test_creation_dto_to_entity_leaves_id_to_store(self):
        entity = to_point_of_interest_entity(
            PointOfInterestForCreation(name="Atomium", description="Built for Expo 58.")
        )
        assert entity.id is None
        assert entity.name == "Atomium"
        assert entity.description == "Built for Expo 58."

    def test_entity_to_update_command_preserves_fields(self):
        entity = PointOfInterest(id=5, city_id=3, name="Eiffel Tower", description="Iron lattice tower.")
        command = to_update_command(3, 5, to_point_of_interest_for_update(entity))
        assert command.city_id == 3
        assert command.point_of_interest_id == 5
        assert command.name == entity.name
        assert command.description == entity.description

    def test_mapping_does_not_mutate_entity(self):
        entity = PointOfInterest(id=5, name="Eiffel Tower", description="Iron lattice tower.")
        to_point_of_interest_dto(entity)
        to_point_of_interest_for_update(entity)
        assert entity.name == "Eiffel Tower"
        assert entity.description == "Iron lattice tower."

    def test_entity_dto_entity_round_trip_preserves_fields(self):
        entity = PointOfInterest(id=5, name="Eiffel Tower", description="Iron lattice tower.")
        rebuilt = to_point_of_interest_entity(to_point_of_interest_for_update(entity))
        assert (rebuilt.name, rebuilt.description) == (entity.name, entity.description)
