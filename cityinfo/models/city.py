"""
CityInfo API - City SQLAlchemy Model
=====================================

What:  ORM model representing the `cities` table.
Who:   Used by the repositories (both the database and the in-memory store hold
       City instances) and by Alembic for schema management.

Table Design:
    - Integer primary key: ids are part of the public URLs (/api/cities/1)
    - name: VARCHAR(50), matches the API's maximum name length
    - description: VARCHAR(200), optional
    - points_of_interest: owned children, deleted with the city
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cityinfo.database import Base

if TYPE_CHECKING:
    from cityinfo.models.point_of_interest import PointOfInterest


class City(Base):
    """
    A city and its points of interest.

    Loading:
        points_of_interest is NOT loaded by default. The database repository
        eager-loads it (selectinload) only when the caller asks for children;
        touching it on an unloaded async instance raises.
    """

    __tablename__ = "cities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Display name of the city",
    )

    description: Mapped[str | None] = mapped_column(
        String(200),
        nullable=True,
        default=None,
        comment="Short description of the city",
    )

    # ── Children ──────────────────────────────────────────────────────────
    # delete-orphan: a point of interest never outlives its city
    points_of_interest: Mapped[List["PointOfInterest"]] = relationship(
        back_populates="city",
        cascade="all, delete-orphan",
        order_by="PointOfInterest.id",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<City(id={self.id}, name='{self.name}')>"
