"""FastAPI application factory."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from forgekit_api.config import Settings, get_settings
from forgekit_api.identity import JWTIdentityProvider
from forgekit_api.logging_config import configure_logging
from forgekit_api.middleware import register_exception_handlers
from forgekit_api.routes import admin_data, dynamic, health, modules, projects
from forgekit_core import __version__
from forgekit_core.registry import BUILTIN_MODULES
from forgekit_db import (
    MinIOBlobStore,
    create_tables,
    get_async_engine,
    get_async_session,
    get_async_sessionmaker,
    seed_modules,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup/shutdown events."""
    settings: Settings = app.state.settings

    # Startup
    engine = get_async_engine(settings.database_url, echo=settings.database_echo)
    app.state.engine = engine
    app.state.sessionmaker = get_async_sessionmaker(engine)

    if settings.create_tables_on_startup:
        await create_tables(engine)
    if settings.seed_modules_on_startup:
        async with get_async_session(app.state.sessionmaker) as session:
            await seed_modules(session, BUILTIN_MODULES)

    logger.info("api_started", env=settings.app_env)

    yield

    # Shutdown
    await engine.dispose()
    logger.info("api_stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = get_settings()

    configure_logging(settings)

    app = FastAPI(
        title="Forgekit API",
        description="Backend for no-code websites: per-project data APIs built from modules",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.identity_provider = JWTIdentityProvider(settings.jwt_secret, settings.jwt_algorithm)
    app.state.blob_store = MinIOBlobStore(
        endpoint=settings.minio_endpoint,
        access_key=settings.minio_access_key,
        secret_key=settings.minio_secret_key,
        bucket=settings.uploads_bucket,
        public_url=settings.uploads_public_url,
        secure=settings.minio_secure,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Register routes
    app.include_router(health.router, tags=["Health"])
    app.include_router(projects.router)
    app.include_router(modules.router)
    app.include_router(admin_data.router)
    app.include_router(dynamic.router)

    return app


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "forgekit_api:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
