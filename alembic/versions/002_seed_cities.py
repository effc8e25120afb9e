"""Seed demo cities and points of interest

Revision ID: 002
Revises: 001
Create Date: 2026-10-19 00:00:01.000000+00:00

What:  Inserts the three demo cities and their six points of interest.
How:   Rows are inlined (not imported from cityinfo.seed) so this revision
       stays reproducible when application code changes. Explicit ids do not
       advance PostgreSQL identity sequences, so they are moved past the
       seeded ids afterwards.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


cities_table = sa.table(
    "cities",
    sa.column("id", sa.Integer),
    sa.column("name", sa.String),
    sa.column("description", sa.String),
)

points_of_interest_table = sa.table(
    "points_of_interest",
    sa.column("id", sa.Integer),
    sa.column("city_id", sa.Integer),
    sa.column("name", sa.String),
    sa.column("description", sa.String),
)

CITIES = [
    {"id": 1, "name": "New York City", "description": "The one with that big park."},
    {"id": 2, "name": "Antwerp", "description": "The one with the cathedral that was never really finished."},
    {"id": 3, "name": "Paris", "description": "The one with that big tower."},
]

POINTS_OF_INTEREST = [
    {"id": 1, "city_id": 1, "name": "Central Park",
     "description": "The most visited urban park in the United States."},
    {"id": 2, "city_id": 1, "name": "Empire State Building",
     "description": "A 102-story skyscraper located in Midtown Manhattan."},
    {"id": 3, "city_id": 2, "name": "Cathedral of Our Lady",
     "description": "A Gothic style cathedral, conceived by architects Jan and Pieter Appelmans."},
    {"id": 4, "city_id": 2, "name": "Antwerp Central Station",
     "description": "The finest example of railway architecture in Belgium."},
    {"id": 5, "city_id": 3, "name": "Eiffel Tower",
     "description": "A wrought iron lattice tower on the Champ de Mars, named after engineer Gustave Eiffel."},
    {"id": 6, "city_id": 3, "name": "The Louvre",
     "description": "The world's largest museum."},
]


def upgrade() -> None:
    op.bulk_insert(cities_table, CITIES)
    op.bulk_insert(points_of_interest_table, POINTS_OF_INTEREST)

    if op.get_bind().dialect.name == "postgresql":
        for table in ("cities", "points_of_interest"):
            op.execute(
                f"SELECT setval(pg_get_serial_sequence('{table}', 'id'), "
                f"(SELECT MAX(id) FROM {table}))"
            )


def downgrade() -> None:
    op.execute(
        points_of_interest_table.delete().where(
            points_of_interest_table.c.id.in_([p["id"] for p in POINTS_OF_INTEREST])
        )
    )
    op.execute(
        cities_table.delete().where(cities_table.c.id.in_([c["id"] for c in CITIES]))
    )
