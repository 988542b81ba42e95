"""
Shared fixtures for API tests.

Uses an in-memory SQLite database (aiosqlite) with fresh tables per test,
an in-memory blob store in place of MinIO, and owner credentials signed
with the test JWT secret. The app lifespan does not run under
``ASGITransport``, so fixtures put the engine and sessionmaker on
``app.state`` themselves.
"""

from collections.abc import Iterable
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from forgekit_api.app import create_app
from forgekit_api.config import Settings
from forgekit_api.dependencies import get_blob_store
from forgekit_api.identity import JWTIdentityProvider
from forgekit_core.models.module import ModuleDefinition
from forgekit_core.registry import get_builtin_module
from forgekit_db import (
    Base,
    ProjectModuleRepository,
    ProjectRepository,
    StoredBlob,
    get_async_sessionmaker,
    seed_modules,
)
from forgekit_db.models import ModuleModel, ProjectModel

TEST_JWT_SECRET = "test-secret"

# Products as used in the public API scenarios: only name and price required.
PRODUCTS_MODULE = ModuleDefinition(
    name="Product Catalog",
    slug="products",
    description="Products with prices",
    icon="Package",
    schema={
        "name": {"type": "string", "required": True},
        "price": {"type": "number", "required": True},
        "inStock": {"type": "boolean", "default": True},
    },
)


class FakeBlobStore:
    """In-memory stand-in for MinIOBlobStore."""

    def __init__(self, healthy: bool = True):
        self.bucket = "uploads"
        self.healthy = healthy
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.upload_calls = 0

    async def upload(
        self,
        key: str,
        data: bytes,
        content_type: str = "application/octet-stream",
    ) -> StoredBlob:
        self.upload_calls += 1
        self.objects[key] = (data, content_type)
        return StoredBlob(
            bucket=self.bucket,
            key=key,
            size=len(data),
            url=f"http://blobs.test/{self.bucket}/{key}",
            content_type=content_type,
        )

    async def health_check(self) -> bool:
        return self.healthy


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> Settings:
    return Settings(
        debug=False,
        database_url="sqlite+aiosqlite://",
        create_tables_on_startup=False,
        seed_modules_on_startup=False,
        public_base_url="http://api.test",
        jwt_secret=TEST_JWT_SECRET,
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


@pytest.fixture
def sessionmaker(engine):
    return get_async_sessionmaker(engine)


@pytest.fixture
def blob_store() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture
def app(settings, engine, sessionmaker, blob_store):
    app = create_app(settings)
    app.state.engine = engine
    app.state.sessionmaker = sessionmaker
    app.state.blob_store = blob_store
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


# ---------------------------------------------------------------------------
# Owners
# ---------------------------------------------------------------------------


def bearer(user_id: UUID) -> dict[str, str]:
    token = JWTIdentityProvider(TEST_JWT_SECRET).issue(user_id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def owner_id() -> UUID:
    return uuid4()


@pytest.fixture
def auth_headers(owner_id) -> dict[str, str]:
    return bearer(owner_id)


@pytest.fixture
def other_auth_headers() -> dict[str, str]:
    return bearer(uuid4())


@pytest.fixture
def make_auth_headers():
    """Factory signing owner credentials for any user id."""
    return bearer


# ---------------------------------------------------------------------------
# Seed data
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def modules(sessionmaker) -> dict[str, UUID]:
    """Seed products, blog and orders; returns module ids keyed by slug."""
    definitions = [PRODUCTS_MODULE, get_builtin_module("blog"), get_builtin_module("orders")]
    async with sessionmaker() as session:
        seeded = await seed_modules(session, definitions)
        await session.commit()
    return {module.slug: module.id for module in seeded}


@pytest.fixture
def make_project(sessionmaker):
    """Factory storing a project with the given modules enabled."""

    async def _make_project(
        owner_id: UUID,
        name: str = "Shop",
        enable: Iterable[UUID] = (),
    ) -> ProjectModel:
        async with sessionmaker() as session:
            project = await ProjectRepository(session).create_project(owner_id, name)
            project_modules = ProjectModuleRepository(session, project.id)
            for module_id in enable:
                await project_modules.enable(await session.get(ModuleModel, module_id))
            await session.commit()
        return project

    return _make_project


@pytest_asyncio.fixture
async def project(make_project, owner_id, modules):
    """A project owned by ``owner_id`` with products and blog enabled."""
    return await make_project(owner_id, "Shop", [modules["products"], modules["blog"]])


@pytest_asyncio.fixture
async def other_project(make_project, modules):
    """A project of another owner with products enabled."""
    return await make_project(uuid4(), "Other shop", [modules["products"]])
