"""Forgekit DB - Database models, repositories and storage clients."""

from forgekit_db.connection import (
    create_tables,
    get_async_engine,
    get_async_session,
    get_async_sessionmaker,
)
from forgekit_db.models import Base
from forgekit_db.clients import MinIOBlobStore, StoredBlob
from forgekit_db.repositories import (
    BaseRepository,
    ProjectScopedRepository,
    ProjectRepository,
    ModuleRepository,
    ProjectModuleRepository,
    RecordRepository,
    generate_api_token,
)
from forgekit_db.seed import seed_modules

__version__ = "0.1.0"

__all__ = [
    # Base and connection
    "Base",
    "create_tables",
    "get_async_engine",
    "get_async_session",
    "get_async_sessionmaker",
    # Clients
    "MinIOBlobStore",
    "StoredBlob",
    # Repositories
    "BaseRepository",
    "ProjectScopedRepository",
    "ProjectRepository",
    "ModuleRepository",
    "ProjectModuleRepository",
    "RecordRepository",
    "generate_api_token",
    # Seeding
    "seed_modules",
]
