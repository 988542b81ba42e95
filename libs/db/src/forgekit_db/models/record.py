"""DynamicData SQLAlchemy model."""

from uuid import UUID

from sqlalchemy import ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from forgekit_db.models.base import Base, JSONType, TimestampMixin, UUIDMixin


class DynamicDataModel(Base, UUIDMixin, TimestampMixin):
    """
    A free-form JSON record owned by a project.

    ``module_id`` is NULL for owner-managed admin data, which is keyed by a
    ``dataType`` tag inside ``data`` instead of a module schema.
    """

    __tablename__ = "dynamic_data"

    project_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    module_id: Mapped[UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("modules.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    data: Mapped[dict] = mapped_column(JSONType, nullable=False)

    __table_args__ = (Index("ix_dynamic_data_project_module", "project_id", "module_id"),)
