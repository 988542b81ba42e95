"""SQLAlchemy ORM models."""

from forgekit_db.models.base import Base, JSONType, TimestampMixin, UUIDMixin
from forgekit_db.models.project import ProjectModel
from forgekit_db.models.module import ModuleModel, ProjectModuleModel
from forgekit_db.models.record import DynamicDataModel

__all__ = [
    # Base
    "Base",
    "JSONType",
    "UUIDMixin",
    "TimestampMixin",
    # Project
    "ProjectModel",
    # Module
    "ModuleModel",
    "ProjectModuleModel",
    # Record
    "DynamicDataModel",
]
