"""
CityInfo API - PointOfInterest SQLAlchemy Model
================================================

What:  ORM model representing the `points_of_interest` table.
Why:   Each row belongs to exactly one city; ids are unique across the table.

Identifier Strategy:
    Ids are generated by the database, never computed as max(id) + 1 in Python.
    sqlite_autoincrement makes SQLite behave like a PostgreSQL sequence: an id
    is never handed out twice, even after the highest row is deleted.
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cityinfo.database import Base

if TYPE_CHECKING:
    from cityinfo.models.city import City


class PointOfInterest(Base):
    """A sight, building or venue that belongs to a city."""

    __tablename__ = "points_of_interest"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # ON DELETE CASCADE: deleting the city row removes its points of interest
    city_id: Mapped[int] = mapped_column(
        ForeignKey("cities.id", ondelete="CASCADE"),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(String(50), nullable=False)

    description: Mapped[str | None] = mapped_column(
        String(200),
        nullable=True,
        default=None,
    )

    city: Mapped["City"] = relationship(back_populates="points_of_interest")

    # city_id index: every lookup is scoped by city (/api/cities/{cityId}/...)
    __table_args__ = (
        Index("idx_points_of_interest_city_id", "city_id"),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return (
            f"<PointOfInterest(id={self.id}, city_id={self.city_id}, "
            f"name='{self.name}')>"
        )
