"""
CityInfo API - FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes configuration, middleware registration, route mounting,
       dependency wiring and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn cityinfo.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────┐ ┌──────┐ ┌──────┐         │
    │  │ Req ID   │→│ Logging │→│ GZip │→│ CORS │         │
    │  └──────────┘ └─────────┘ └──────┘ └──────┘         │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────┐ ┌───────────────────────┐ ┌───────┐ │
    │  │ /api/cities│ │ .../pointsofinterest  │ │/health│ │
    │  └────────────┘ └───────────────────────┘ └───────┘ │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Other→500    │   │
    │  └──────────────────────────────────────────────┘   │
    │                                                     │
    │  app.state: city_store (memory backend only),       │
    │             mail_service                            │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cityinfo import __version__
from cityinfo.config import Settings, settings
from cityinfo.database import (
    async_session_factory,
    create_schema,
    dispose_engine,
    session_scope,
)
from cityinfo.exceptions import NotFoundError, ValidationError
from cityinfo.middleware.logging import RequestLoggingMiddleware
from cityinfo.middleware.request_id import RequestIDMiddleware, request_id_var
from cityinfo.repositories.memory import InMemoryCityStore
from cityinfo.routes import cities, health, points_of_interest
from cityinfo.seed import seed_database
from cityinfo.services.mail_service import create_mail_service

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = settings.log_level) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, on stdout
    (containers capture stdout).
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # These log every operation at DEBUG/INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Validate configuration (logged, not fatal: /health still answers)
        3. Database backend with AUTO_CREATE_SCHEMA: create tables, seed if empty
           (through app.state.session_factory when set, like every request)
    Shutdown:
        1. Dispose database engine (close all pooled connections)
    """
    app_settings: Settings = app.state.settings

    setup_logging(app_settings.log_level)
    logger.info("=" * 60)
    logger.info("CityInfo API %s starting up (store backend: %s)", __version__, app_settings.store_backend)

    try:
        app_settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    if app_settings.store_backend == "database" and app_settings.auto_create_schema:
        factory = getattr(app.state, "session_factory", async_session_factory)
        await create_schema(factory.kw["bind"])
        async with session_scope(factory) as session:
            await seed_database(session)

    logger.info("Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("CityInfo API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _validation_response(exc: ValidationError) -> JSONResponse:
    rid = request_id_var.get("")
    logger.warning("[%s] Validation error: %s", rid, exc.errors)
    return JSONResponse(
        status_code=400,
        content={
            "error": "validation_error",
            "message": exc.message,
            "errors": exc.errors,
            "request_id": rid,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP responses.

    Handler hierarchy:
        RequestValidationError → 400 (FastAPI's body/param validation, same
                                      body shape as our ValidationError)
        ValidationError        → 400 with field-level errors
        NotFoundError          → 404, empty body
        HTTPException          → raised by the framework itself (unparseable
                                 body, unknown route, wrong method): 400 as
                                 a validation error, 404 empty, others JSON
        Exception (fallback)   → 500, generic message; stack trace logged only.
                                 Runs outside the middleware chain, so it
                                 sets X-Request-ID itself.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        return _validation_response(ValidationError.from_pydantic_errors(exc.errors()))

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        return _validation_response(exc)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        logger.info("[%s] %s", request_id_var.get(""), exc.message)
        return Response(status_code=404)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return Response(status_code=404)
        if exc.status_code == 400:
            return _validation_response(ValidationError.for_field("body", str(exc.detail)))
        rid = request_id_var.get("")
        logger.info("[%s] HTTP %d: %s", rid, exc.status_code, exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "http_error", "message": str(exc.detail), "request_id": rid},
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
            headers={"X-Request-ID": rid} if rid else None,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Overrides the module-level settings (tests build apps
                      with STORE_BACKEND=memory this way).

    Dependency wiring:
        app.state.city_store   InMemoryCityStore, memory backend only. Its
                               absence makes the repository dependency open a
                               database session instead.
        app.state.mail_service The MailService chosen by MAIL_SERVICE.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="CityInfo API",
        description="Cities and their points of interest.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.mail_service = create_mail_service(app_settings)
    if app_settings.store_backend == "memory":
        app.state.city_store = InMemoryCityStore.with_seed_data()

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added runs first)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Location"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(cities.router)
    app.include_router(points_of_interest.router)
    app.include_router(health.router)

    return app


# uvicorn expects `cityinfo.main:app` to be importable
app = create_app()
