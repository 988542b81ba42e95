"""Database connection management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from forgekit_db.models import Base


def get_async_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async database engine.

    The caller owns the engine and must dispose it on shutdown.

    Args:
        database_url: Connection URL (``postgresql+asyncpg://`` in
            production, ``sqlite+aiosqlite://`` in tests)
        echo: Whether to log SQL statements

    Returns:
        AsyncEngine instance
    """
    if database_url.startswith("sqlite"):
        return create_async_engine(database_url, echo=echo)
    return create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


def get_async_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create an async session factory.

    Args:
        engine: AsyncEngine to bind sessions to

    Returns:
        async_sessionmaker configured for the engine
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


@asynccontextmanager
async def get_async_session(
    sessionmaker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Context manager for database sessions.

    Automatically handles commit/rollback and cleanup.

    Args:
        sessionmaker: async_sessionmaker to create session from

    Yields:
        AsyncSession for database operations
    """
    session = sessionmaker()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def create_tables(engine: AsyncEngine) -> None:
    """Create all tables and indexes that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
