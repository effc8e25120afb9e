"""
CityInfo API - Point of Interest Schemas
=========================================

What:  Pydantic models for reading, creating, updating and patching points of
       interest.
Why:   Request bodies are validated here before any handler code runs, and the
       response shape is decoupled from the ORM model.

Field rules (shared by creation and update):
    name:         required, 1-50 characters, not only whitespace
    description:  optional, at most 200 characters

The "description must differ from name" rule is NOT expressed here: it is a
per-request business rule checked by the service, after a PATCH document has
been applied as well as on POST/PUT.
"""

from typing import Any, Literal, Optional

from pydantic import Field, field_validator

from cityinfo.schemas.base import CamelModel

NAME_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 200


class PointOfInterestDto(CamelModel):
    """Representation returned by the API."""
    id: int = Field(description="Point of interest identifier")
    name: str = Field(description="Display name")
    description: Optional[str] = Field(default=None, description="Short description")


class PointOfInterestForManipulation(CamelModel):
    """Fields and rules shared by the creation and update bodies."""
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        # Stored as sent; only a name of nothing but whitespace is refused
        if not v.strip():
            raise ValueError("You should provide a name value.")
        return v


class PointOfInterestForCreation(PointOfInterestForManipulation):
    """Body of POST /api/cities/{cityId}/pointsofinterest."""


class PointOfInterestForUpdate(PointOfInterestForManipulation):
    """
    Body of PUT, and the document a PATCH is applied to.

    PUT replaces every field: an omitted description becomes null.
    """


class PatchOperation(CamelModel):
    """
    One operation of a partial update document (JSON Patch, RFC 6902).

    Example body of PATCH /api/cities/1/pointsofinterest/1:
        [
            {"op": "replace", "path": "/name", "value": "Central Park Zoo"},
            {"op": "remove", "path": "/description"}
        ]
    """
    op: Literal["add", "remove", "replace", "move", "copy", "test"]
    path: str = Field(description="JSON pointer to the target member, e.g. /name")
    value: Any = Field(default=None, description="Value for add, replace and test")
    from_: Optional[str] = Field(
        default=None,
        alias="from",
        description="Source pointer for move and copy",
    )
