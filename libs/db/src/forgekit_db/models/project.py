"""Project SQLAlchemy model."""

from uuid import UUID

from sqlalchemy import Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from forgekit_db.models.base import Base, TimestampMixin, UUIDMixin


class ProjectModel(Base, UUIDMixin, TimestampMixin):
    """Project is the tenant boundary: it owns its token, enablements and records."""

    __tablename__ = "projects"

    # User id issued by the identity provider
    owner_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)

    api_token: Mapped[str] = mapped_column(String(64), nullable=False)

    __table_args__ = (Index("ix_projects_api_token", "api_token", unique=True),)

    def base_url(self, public_base_url: str) -> str:
        """Root URL of this project's public data API."""
        return f"{public_base_url.rstrip('/')}/api/v1/{self.api_token}"
