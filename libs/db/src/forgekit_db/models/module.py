"""Module and ProjectModule SQLAlchemy models."""

from uuid import UUID

from sqlalchemy import ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from forgekit_core.models.module import ModuleSchema, parse_schema
from forgekit_db.models.base import Base, JSONType, TimestampMixin, UUIDMixin


class ModuleModel(Base, UUIDMixin, TimestampMixin):
    """Module is a global, named record schema."""

    __tablename__ = "modules"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(63), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    icon: Mapped[str] = mapped_column(String(63), default="Box", nullable=False)

    # Field name -> field spec, stored as raw JSON
    schema: Mapped[dict] = mapped_column(JSONType, nullable=False)

    __table_args__ = (
        Index("ix_modules_name", "name", unique=True),
        Index("ix_modules_slug", "slug", unique=True),
    )

    def field_specs(self) -> ModuleSchema:
        """Stored schema parsed into typed field specs."""
        return parse_schema(self.schema)


class ProjectModuleModel(Base, UUIDMixin, TimestampMixin):
    """Enablement of a module for a project, with per-project configuration."""

    __tablename__ = "project_modules"

    project_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    module_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("modules.id", ondelete="CASCADE"),
        nullable=False,
    )
    configuration: Mapped[dict] = mapped_column(JSONType, default=dict, nullable=False)

    module: Mapped["ModuleModel"] = relationship("ModuleModel")

    __table_args__ = (
        Index("ix_project_modules_project", "project_id"),
        Index("ix_project_modules_module", "module_id"),
        Index("ix_project_modules_unique", "project_id", "module_id", unique=True),
    )
