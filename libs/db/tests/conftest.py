"""
Shared fixtures for the storage layer tests.

Each test gets a fresh in-memory SQLite database (aiosqlite) with all
tables created.
"""

from uuid import uuid4

import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from forgekit_core.models.module import ModuleDefinition
from forgekit_db import Base, ProjectRepository, get_async_sessionmaker, seed_modules

NOTES_MODULE = ModuleDefinition(
    name="Notes",
    slug="notes",
    description="Plain notes",
    schema={"title": {"type": "string", "required": True}},
)

LINKS_MODULE = ModuleDefinition(
    name="Links",
    slug="links",
    description="Bookmarks",
    schema={"href": {"type": "url", "required": True}},
)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine):
    sessionmaker = get_async_sessionmaker(engine)
    async with sessionmaker() as session:
        yield session


@pytest_asyncio.fixture
async def modules(session):
    """The notes and links modules, keyed by slug."""
    seeded = await seed_modules(session, [NOTES_MODULE, LINKS_MODULE])
    return {module.slug: module for module in seeded}


@pytest_asyncio.fixture
async def project(session):
    return await ProjectRepository(session).create_project(uuid4(), "Project A")


@pytest_asyncio.fixture
async def other_project(session):
    return await ProjectRepository(session).create_project(uuid4(), "Project B")
