"""
CityInfo API - Database Session Management
===========================================

What:  Async SQLAlchemy engine, session factory, declarative base and the
       per-request session dependency.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine with connection pooling and provides a session
       dependency that rolls back on error and always closes the session.
Who:   Used by the repository dependency (see dependencies.py), the startup
       schema bootstrap and Alembic.
When:  Engine is created at module import; sessions are created per-request.

Transactions:
    The session dependency does NOT commit. Writes become durable only when
    the repository's save() is called by a request handler, so every commit
    point is visible in the handler code.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from cityinfo.config import Settings, settings


def build_engine(app_settings: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured database URL.

    SQLite (aiosqlite) does not take the queue pool arguments, so they are only
    passed for server databases such as PostgreSQL.
    """
    engine_kwargs = {"echo": app_settings.log_level == "DEBUG"}
    if not app_settings.is_sqlite:
        engine_kwargs.update(
            pool_size=app_settings.db_pool_size,
            max_overflow=app_settings.db_max_overflow,
            pool_pre_ping=app_settings.db_pool_pre_ping,
            pool_recycle=3600,  # Recycle after 1 hour to prevent stale connections
        )
    return create_async_engine(app_settings.database_url, **engine_kwargs)


# ── Engine Configuration ──────────────────────────────────────────────────
engine = build_engine(settings)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: entities stay readable after save() so handlers can
# map them to DTOs without triggering lazy loads outside the session
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object that Alembic reads for migrations.
    """
    pass


# ── Session Scope ─────────────────────────────────────────────────────────
@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession] = async_session_factory,
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a database session for the lifetime of one request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the caller (the repository performs queries)
        3. On error: rolls back the transaction (discards pending changes)
        4. Always: closes the session (returns connection to pool)

    Example usage in a dependency:
        async with session_scope() as session:
            yield SqlAlchemyCityInfoRepository(session)
    """
    async with factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise  # Re-raise so the global error handler can respond
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_schema(bind: AsyncEngine = engine) -> None:
    """Create all tables that do not exist yet (development bootstrap)."""
    # Models must be imported so their tables are registered on Base.metadata
    import cityinfo.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Gracefully closes all connections in the pool on shutdown."""
    await engine.dispose()
