"""Create cities and points_of_interest tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Initial schema: cities and their points of interest.
How:   Integer identity keys; points_of_interest.city_id cascades on delete.
       sqlite_autoincrement keeps SQLite from reusing the highest id after a
       delete (PostgreSQL sequences never reuse ids anyway).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "cities",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(50), nullable=False, comment="Display name of the city"),
        sa.Column(
            "description",
            sa.String(200),
            nullable=True,
            comment="Short description of the city",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "points_of_interest",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("city_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("description", sa.String(200), nullable=True),
        sa.ForeignKeyConstraint(["city_id"], ["cities.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )

    op.create_index(
        "idx_points_of_interest_city_id",
        "points_of_interest",
        ["city_id"],
    )


def downgrade() -> None:
    """Destructive: drops every city and point of interest."""
    op.drop_index("idx_points_of_interest_city_id", table_name="points_of_interest")
    op.drop_table("points_of_interest")
    op.drop_table("cities")
