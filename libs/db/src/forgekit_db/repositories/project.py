"""Project repository."""

import secrets
from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, select

from forgekit_core.errors import ConflictError
from forgekit_db.models import DynamicDataModel, ProjectModel, ProjectModuleModel
from forgekit_db.repositories.base import BaseRepository

DEFAULT_TOKEN_LENGTH = 32


def generate_api_token(length: int = DEFAULT_TOKEN_LENGTH) -> str:
    """Random URL-safe token of exactly ``length`` characters."""
    return secrets.token_urlsafe(length)[:length]


class ProjectRepository(BaseRepository[ProjectModel]):
    """Repository for project operations."""

    model_class = ProjectModel

    async def get_by_token(self, api_token: str) -> ProjectModel | None:
        """Get a project by its exact API token."""
        stmt = select(self.model_class).where(self.model_class.api_token == api_token)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_for_owner(self, owner_id: UUID) -> Sequence[ProjectModel]:
        """Get all projects of an owner, newest first."""
        stmt = (
            select(self.model_class)
            .where(self.model_class.owner_id == owner_id)
            .order_by(self.model_class.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def create_project(
        self,
        owner_id: UUID,
        name: str,
        description: str = "",
        *,
        token_length: int = DEFAULT_TOKEN_LENGTH,
    ) -> ProjectModel:
        """Create a project with a freshly generated API token."""
        project = ProjectModel(
            owner_id=owner_id,
            name=name,
            description=description,
            api_token=generate_api_token(token_length),
        )
        return await self.create(
            project,
            conflict=ConflictError("API token collision, please retry."),
        )

    async def regenerate_token(
        self,
        project: ProjectModel,
        *,
        token_length: int = DEFAULT_TOKEN_LENGTH,
    ) -> ProjectModel:
        """
        Replace the project's API token.

        The old token stops resolving as soon as the surrounding
        transaction commits; there is no grace period.
        """
        project.api_token = generate_api_token(token_length)
        return await self.update(
            project,
            conflict=ConflictError("API token collision, please retry."),
        )

    async def delete_project(self, project: ProjectModel) -> None:
        """Delete a project together with its enablements and records."""
        await self.session.execute(
            delete(DynamicDataModel).where(DynamicDataModel.project_id == project.id)
        )
        await self.session.execute(
            delete(ProjectModuleModel).where(ProjectModuleModel.project_id == project.id)
        )
        await self.delete(project)
