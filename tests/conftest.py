"""
CityInfo API - Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh for each test):
    ├── memory_store:      InMemoryCityStore seeded with the demo cities
    ├── mail_outbox:       RecordingMailService capturing sent mails
    ├── memory_app:        FastAPI app on the in-memory store
    ├── test_client:       HTTPX AsyncClient against memory_app
    ├── sql_engine:        Temporary SQLite database, schema created and seeded
    ├── sql_session:       AsyncSession on sql_engine (repository tests)
    └── sql_client:        HTTPX AsyncClient against an app on sql_engine
"""

import os
import tempfile

# Override settings for testing BEFORE any app imports, so the module-level
# engine never points at a real server database
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="cityinfo_test_"), "unused.db"
)
os.environ["STORE_BACKEND"] = "memory"
os.environ["MAIL_SERVICE"] = "local"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

from typing import List, Tuple  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

from cityinfo.config import Settings  # noqa: E402
from cityinfo.database import create_schema  # noqa: E402
from cityinfo.main import create_app  # noqa: E402
from cityinfo.repositories.memory import InMemoryCityStore  # noqa: E402
from cityinfo.seed import seed_database  # noqa: E402
from cityinfo.services.mail_service import MailService  # noqa: E402


class RecordingMailService(MailService):
    """Keeps sent mails in memory instead of delivering them."""

    def __init__(self):
        super().__init__(mail_from="noreply@cityinfo.test", mail_to="admin@cityinfo.test")
        self.sent: List[Tuple[str, str]] = []

    async def send(self, subject: str, message: str) -> None:
        self.sent.append((subject, message))


# ══════════════════════════════════════════════════════════════════════════
# Unit Test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def memory_store():
    """A fresh in-memory store with New York City, Antwerp and Paris."""
    return InMemoryCityStore.with_seed_data()


@pytest.fixture
def mail_outbox():
    return RecordingMailService()


@pytest.fixture
def mock_repository():
    """
    Provides a mock CityInfoRepository.

    What:    AsyncMock methods for every repository operation.
    Usage:
        mock_repository.city_exists.return_value = False
        with pytest.raises(NotFoundError): ...
    """
    async def assign_id(city_id, entity):
        entity.id = 100

    repository = MagicMock()
    repository.city_exists = AsyncMock(return_value=True)
    repository.get_cities = AsyncMock(return_value=[])
    repository.get_city = AsyncMock(return_value=None)
    repository.get_points_of_interest_for_city = AsyncMock(return_value=[])
    repository.get_point_of_interest = AsyncMock(return_value=None)
    repository.add_point_of_interest = AsyncMock(side_effect=assign_id)
    repository.update_point_of_interest = AsyncMock()
    repository.delete_point_of_interest = AsyncMock()
    repository.save = AsyncMock()
    return repository


# ══════════════════════════════════════════════════════════════════════════
# API Fixtures (in-memory store)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def memory_app(memory_store, mail_outbox):
    """
    FastAPI app backed by `memory_store`.

    ASGITransport does not run the lifespan, so everything the routes need
    must already be on app.state after create_app().
    """
    app = create_app(Settings(store_backend="memory", mail_service="local"))
    app.state.city_store = memory_store
    app.state.mail_service = mail_outbox
    return app


@pytest_asyncio.fixture
async def test_client(memory_app):
    """
    HTTPX AsyncClient routed straight into the app (no server).

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=memory_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures (temporary SQLite file per test)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def sql_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'cityinfo.db'}")
    await create_schema(engine)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        await seed_database(session)
    yield engine
    await engine.dispose()


@pytest.fixture
def sql_session_factory(sql_engine):
    return async_sessionmaker(sql_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def sql_session(sql_session_factory):
    async with sql_session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def sql_client(sql_session_factory, mail_outbox):
    """HTTPX AsyncClient against an app that uses the database repository."""
    app = create_app(Settings(store_backend="database", mail_service="local"))
    app.state.session_factory = sql_session_factory
    app.state.mail_service = mail_outbox
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
