"""
CityInfo API - Seed Data
=========================

What:  The demo cities the API ships with, and helpers that load them into
       either entity store.
Who:   InMemoryCityStore (initial contents), the startup schema bootstrap
       (empty database only), and tests.

The Alembic data migration (002) carries its own copy of these rows so that
migrations never depend on application code that may change later.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cityinfo.models import City, PointOfInterest

logger = logging.getLogger(__name__)


SEED_CITIES: List[Dict[str, Any]] = [
    {
        "id": 1,
        "name": "New York City",
        "description": "The one with that big park.",
        "points_of_interest": [
            {
                "id": 1,
                "name": "Central Park",
                "description": "The most visited urban park in the United States.",
            },
            {
                "id": 2,
                "name": "Empire State Building",
                "description": "A 102-story skyscraper located in Midtown Manhattan.",
            },
        ],
    },
    {
        "id": 2,
        "name": "Antwerp",
        "description": "The one with the cathedral that was never really finished.",
        "points_of_interest": [
            {
                "id": 3,
                "name": "Cathedral of Our Lady",
                "description": "A Gothic style cathedral, conceived by architects Jan and Pieter Appelmans.",
            },
            {
                "id": 4,
                "name": "Antwerp Central Station",
                "description": "The finest example of railway architecture in Belgium.",
            },
        ],
    },
    {
        "id": 3,
        "name": "Paris",
        "description": "The one with that big tower.",
        "points_of_interest": [
            {
                "id": 5,
                "name": "Eiffel Tower",
                "description": "A wrought iron lattice tower on the Champ de Mars, named after engineer Gustave Eiffel.",
            },
            {
                "id": 6,
                "name": "The Louvre",
                "description": "The world's largest museum.",
            },
        ],
    },
]


def build_seed_cities(with_ids: bool = True) -> List[City]:
    """
    Build fresh, unattached City entities from SEED_CITIES.

    Args:
        with_ids: Keep the seed identifiers. The in-memory store needs them;
                  a database insert should leave id generation to the database.
    """
    cities = []
    for city_data in SEED_CITIES:
        points = [
            PointOfInterest(
                id=poi["id"] if with_ids else None,
                name=poi["name"],
                description=poi["description"],
            )
            for poi in city_data["points_of_interest"]
        ]
        cities.append(
            City(
                id=city_data["id"] if with_ids else None,
                name=city_data["name"],
                description=city_data["description"],
                points_of_interest=points,
            )
        )
    return cities


async def seed_database(session: AsyncSession) -> bool:
    """
    Insert the seed cities if the cities table is empty.

    Returns:
        True if rows were inserted, False if the table already had data.
    """
    existing = await session.execute(select(func.count(City.id)))
    if existing.scalar():
        logger.info("Database already contains cities; skipping seed data")
        return False

    session.add_all(build_seed_cities(with_ids=False))
    await session.commit()
    logger.info("Seeded database with %d cities", len(SEED_CITIES))
    return True
