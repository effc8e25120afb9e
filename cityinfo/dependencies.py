"""
CityInfo API - Request Dependencies
====================================

What:  FastAPI dependencies that give each request its repository and mail
       service.
Why:   Handlers never reach for a store or a session themselves; which store
       backs the API is decided once, in create_app(), and injected here.
How:   - STORE_BACKEND=memory: create_app() puts an InMemoryCityStore on
         app.state.city_store; every request wraps that same store.
       - STORE_BACKEND=database: every request gets its own AsyncSession
         (see database.session_scope) wrapped in the SQLAlchemy repository.
         app.state.session_factory, when set, replaces the module-level
         factory (tests point it at a temporary SQLite database).

Usage in a route:
    @router.get("/cities")
    async def list_cities(repository: CityInfoRepository = Depends(get_city_info_repository)):
        ...
"""

from typing import AsyncGenerator

from fastapi import Request

from cityinfo.database import async_session_factory, session_scope
from cityinfo.repositories.base import CityInfoRepository
from cityinfo.repositories.memory import InMemoryCityInfoRepository
from cityinfo.repositories.sql import SqlAlchemyCityInfoRepository
from cityinfo.services.mail_service import MailService


async def get_city_info_repository(
    request: Request,
) -> AsyncGenerator[CityInfoRepository, None]:
    store = getattr(request.app.state, "city_store", None)
    if store is not None:
        yield InMemoryCityInfoRepository(store)
        return

    factory = getattr(request.app.state, "session_factory", async_session_factory)
    async with session_scope(factory) as session:
        yield SqlAlchemyCityInfoRepository(session)


def get_mail_service(request: Request) -> MailService:
    return request.app.state.mail_service
