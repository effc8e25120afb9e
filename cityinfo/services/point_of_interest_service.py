"""
CityInfo API - Point of Interest Service
=========================================

What:  Business rules for the nested points-of-interest resource.
Why:   Routes stay HTTP-only; everything that decides between 400, 404 and
       success lives here and can be tested without a web server.
Who:   Called by routes/points_of_interest.py.

Request flow (every write):
    ┌──────────┐   ┌─────────────┐   ┌────────────┐   ┌────────┐   ┌──────┐
    │ Validate │──▶│ City exists │──▶│ POI exists │──▶│ Mutate │──▶│ Save │
    └──────────┘   └─────────────┘   └────────────┘   └────────┘   └──────┘

    - Body shape/length rules are enforced by FastAPI before we are called;
      the name/description rule is checked first thing here.
    - A missing city is reported before any point-of-interest lookup.
    - PATCH validates after applying the document, since the document can
      break rules the stored data satisfied.
"""

import logging
from typing import List, Sequence, Tuple, Union

from pydantic import ValidationError as PydanticValidationError

from cityinfo.exceptions import NotFoundError, ValidationError
from cityinfo.mapping import (
    to_point_of_interest_dto,
    to_point_of_interest_dtos,
    to_point_of_interest_entity,
    to_point_of_interest_for_update,
    to_update_command,
)
from cityinfo.models import PointOfInterest
from cityinfo.patching import apply_patch
from cityinfo.repositories.base import CityInfoRepository
from cityinfo.schemas.point_of_interest import (
    PatchOperation,
    PointOfInterestDto,
    PointOfInterestForCreation,
    PointOfInterestForUpdate,
)

logger = logging.getLogger(__name__)

DESCRIPTION_EQUALS_NAME_MESSAGE = "The provided description should be different from the name."
DELETION_MAIL_SUBJECT = "Point of interest deleted."


def ensure_description_differs_from_name(
    dto: Union[PointOfInterestForCreation, PointOfInterestForUpdate],
) -> None:
    """Exact, case-sensitive comparison."""
    if dto.description == dto.name:
        raise ValidationError.for_field("description", DESCRIPTION_EQUALS_NAME_MESSAGE)


def deletion_mail(point_of_interest: PointOfInterestDto) -> Tuple[str, str]:
    """Subject and body of the mail sent after a delete."""
    return (
        DELETION_MAIL_SUBJECT,
        f"Point of interest {point_of_interest.name} with id "
        f"{point_of_interest.id} was deleted.",
    )


class PointOfInterestService:
    """Stateless; the repository is passed in for every call."""

    async def _require_city(self, repository: CityInfoRepository, city_id: int) -> None:
        if not await repository.city_exists(city_id):
            logger.info("City %s was not found", city_id)
            raise NotFoundError(resource="city", resource_id=city_id)

    async def _require_point_of_interest(
        self,
        repository: CityInfoRepository,
        city_id: int,
        point_of_interest_id: int,
    ) -> PointOfInterest:
        await self._require_city(repository, city_id)
        entity = await repository.get_point_of_interest(city_id, point_of_interest_id)
        if entity is None:
            logger.info(
                "Point of interest %s was not found in city %s",
                point_of_interest_id,
                city_id,
            )
            raise NotFoundError(resource="point of interest", resource_id=point_of_interest_id)
        return entity

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list_points_of_interest(
        self, repository: CityInfoRepository, city_id: int
    ) -> List[PointOfInterestDto]:
        await self._require_city(repository, city_id)
        entities = await repository.get_points_of_interest_for_city(city_id)
        return to_point_of_interest_dtos(entities)

    async def get_point_of_interest(
        self,
        repository: CityInfoRepository,
        city_id: int,
        point_of_interest_id: int,
    ) -> PointOfInterestDto:
        entity = await self._require_point_of_interest(repository, city_id, point_of_interest_id)
        return to_point_of_interest_dto(entity)

    # ── Writes ────────────────────────────────────────────────────────────

    async def create_point_of_interest(
        self,
        repository: CityInfoRepository,
        city_id: int,
        dto: PointOfInterestForCreation,
    ) -> PointOfInterestDto:
        """
        Add a point of interest to a city.

        Returns:
            The stored representation, including the store-assigned id.

        Raises:
            ValidationError: name equals description.
            NotFoundError: the city does not exist.
        """
        ensure_description_differs_from_name(dto)
        await self._require_city(repository, city_id)

        entity = to_point_of_interest_entity(dto)
        await repository.add_point_of_interest(city_id, entity)
        await repository.save()

        logger.info("Created point of interest %s in city %s", entity.id, city_id)
        return to_point_of_interest_dto(entity)

    async def update_point_of_interest(
        self,
        repository: CityInfoRepository,
        city_id: int,
        point_of_interest_id: int,
        dto: PointOfInterestForUpdate,
    ) -> None:
        """Full replacement (PUT)."""
        ensure_description_differs_from_name(dto)
        await self._require_point_of_interest(repository, city_id, point_of_interest_id)

        await repository.update_point_of_interest(
            to_update_command(city_id, point_of_interest_id, dto)
        )
        await repository.save()
        logger.info("Updated point of interest %s in city %s", point_of_interest_id, city_id)

    async def patch_point_of_interest(
        self,
        repository: CityInfoRepository,
        city_id: int,
        point_of_interest_id: int,
        operations: Sequence[PatchOperation],
    ) -> None:
        """
        Partial update (PATCH).

        Steps:
            1. Existence checks (city, then point of interest)
            2. Map the stored entity to its update representation
            3. Apply the patch document to that representation
            4. Validate the result: field rules, then name != description
            5. Persist it as an explicit update command

        Raises:
            ValidationError: the document is malformed or the patched
                representation breaks a rule. Nothing is persisted.
            NotFoundError: city or point of interest does not exist.
        """
        entity = await self._require_point_of_interest(repository, city_id, point_of_interest_id)

        document = to_point_of_interest_for_update(entity).model_dump(by_alias=True)
        patched_document = apply_patch(document, operations)

        try:
            patched = PointOfInterestForUpdate.model_validate(patched_document)
        except PydanticValidationError as exc:
            raise ValidationError.from_pydantic_errors(exc.errors()) from exc
        ensure_description_differs_from_name(patched)

        await repository.update_point_of_interest(
            to_update_command(city_id, point_of_interest_id, patched)
        )
        await repository.save()
        logger.info("Patched point of interest %s in city %s", point_of_interest_id, city_id)

    async def delete_point_of_interest(
        self,
        repository: CityInfoRepository,
        city_id: int,
        point_of_interest_id: int,
    ) -> PointOfInterestDto:
        """
        Remove a point of interest.

        Returns:
            The representation of the deleted record, for the notification.
        """
        entity = await self._require_point_of_interest(repository, city_id, point_of_interest_id)
        deleted = to_point_of_interest_dto(entity)

        await repository.delete_point_of_interest(entity)
        await repository.save()

        logger.info("Deleted point of interest %s from city %s", point_of_interest_id, city_id)
        return deleted


point_of_interest_service = PointOfInterestService()
