"""
CityInfo API - Entity <-> DTO Mapping
======================================

What:  Field-by-field conversion between storage entities (SQLAlchemy models)
       and API representations (Pydantic schemas), in both directions.
Why:   Keeps services and routes from hand-copying attributes, and keeps the
       ORM model out of the wire contract.
How:   Plain functions. No validation, no I/O, no mutation of their inputs;
       the same input always yields an equal output.

Directions:
    PointOfInterest            -> PointOfInterestDto
    City                       -> CityDto / CityWithoutPointsOfInterestDto
    creation / update DTO      -> PointOfInterest (new, unsaved entity)
    PointOfInterest            -> PointOfInterestForUpdate (PATCH starting point)
    PointOfInterestForUpdate   -> UpdatePointOfInterestCommand
"""

from typing import Iterable, List, Union

from cityinfo.models import City, PointOfInterest
from cityinfo.repositories.base import UpdatePointOfInterestCommand
from cityinfo.schemas.city import CityDto, CityWithoutPointsOfInterestDto
from cityinfo.schemas.point_of_interest import (
    PointOfInterestDto,
    PointOfInterestForCreation,
    PointOfInterestForUpdate,
)


def to_point_of_interest_dto(entity: PointOfInterest) -> PointOfInterestDto:
    return PointOfInterestDto(
        id=entity.id,
        name=entity.name,
        description=entity.description,
    )


def to_point_of_interest_dtos(entities: Iterable[PointOfInterest]) -> List[PointOfInterestDto]:
    return [to_point_of_interest_dto(e) for e in entities]


def to_city_dto(entity: City) -> CityDto:
    """Full city; entity.points_of_interest must be loaded."""
    return CityDto(
        id=entity.id,
        name=entity.name,
        description=entity.description,
        points_of_interest=to_point_of_interest_dtos(entity.points_of_interest),
    )


def to_city_without_points_of_interest_dto(entity: City) -> CityWithoutPointsOfInterestDto:
    # Never touches entity.points_of_interest, so it is safe on a city
    # loaded without its children
    return CityWithoutPointsOfInterestDto(
        id=entity.id,
        name=entity.name,
        description=entity.description,
    )


def to_city_without_points_of_interest_dtos(
    entities: Iterable[City],
) -> List[CityWithoutPointsOfInterestDto]:
    return [to_city_without_points_of_interest_dto(e) for e in entities]


def to_point_of_interest_entity(
    dto: Union[PointOfInterestForCreation, PointOfInterestForUpdate],
) -> PointOfInterest:
    """New, unattached entity. The id is left for the store to assign."""
    return PointOfInterest(name=dto.name, description=dto.description)


def to_point_of_interest_for_update(entity: PointOfInterest) -> PointOfInterestForUpdate:
    # model_construct: this is a copy of stored data, not client input, so it
    # is not re-validated here (the patched result is)
    return PointOfInterestForUpdate.model_construct(
        name=entity.name,
        description=entity.description,
    )


def to_update_command(
    city_id: int,
    point_of_interest_id: int,
    dto: PointOfInterestForUpdate,
) -> UpdatePointOfInterestCommand:
    return UpdatePointOfInterestCommand(
        city_id=city_id,
        point_of_interest_id=point_of_interest_id,
        name=dto.name,
        description=dto.description,
    )
