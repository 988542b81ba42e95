"""Database repositories for Forgekit."""

from forgekit_db.repositories.base import (
    BaseRepository,
    ProjectScopedRepository,
)
from forgekit_db.repositories.project import (
    ProjectRepository,
    generate_api_token,
)
from forgekit_db.repositories.module import (
    ModuleRepository,
    ProjectModuleRepository,
)
from forgekit_db.repositories.record import RecordRepository

__all__ = [
    # Base
    "BaseRepository",
    "ProjectScopedRepository",
    # Project
    "ProjectRepository",
    "generate_api_token",
    # Module
    "ModuleRepository",
    "ProjectModuleRepository",
    # Record
    "RecordRepository",
]
