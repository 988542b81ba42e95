"""FastAPI dependencies for settings, database sessions and service clients.

Long-lived resources are created by the application factory and lifespan
and kept on ``app.state``; dependencies only hand them out.
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from forgekit_api.config import Settings
from forgekit_api.identity import IdentityProvider
from forgekit_db import MinIOBlobStore


# ============================================================
# Settings
# ============================================================


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


AppSettings = Annotated[Settings, Depends(get_app_settings)]


# ============================================================
# Database Session
# ============================================================


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    Automatically handles commit/rollback and cleanup.

    Usage:
        @router.get("/items")
        async def get_items(db: DbSession):
            result = await db.execute(select(Item))
            return result.scalars().all()
    """
    session = request.app.state.sessionmaker()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


# Type alias for dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db_session)]


# ============================================================
# Service Clients
# ============================================================


def get_blob_store(request: Request) -> MinIOBlobStore:
    """Blob store used for uploads."""
    return request.app.state.blob_store


def get_identity_provider(request: Request) -> IdentityProvider:
    """Verifier for owner bearer credentials."""
    return request.app.state.identity_provider


# Type aliases for dependency injection
BlobStore = Annotated[MinIOBlobStore, Depends(get_blob_store)]
Identity = Annotated[IdentityProvider, Depends(get_identity_provider)]


# ============================================================
# Utility Functions for Health Checks
# ============================================================


async def check_database_health(engine: AsyncEngine | None) -> bool:
    """Check if the database is accessible."""
    if engine is None:
        return False
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
