"""Module and ProjectModule repositories."""

from typing import Any, Mapping, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from forgekit_core.errors import ModuleAlreadyEnabledError
from forgekit_db.models import ModuleModel, ProjectModuleModel
from forgekit_db.repositories.base import BaseRepository, ProjectScopedRepository


class ModuleRepository(BaseRepository[ModuleModel]):
    """Repository for the global module catalogue."""

    model_class = ModuleModel

    async def get_by_slug(self, slug: str) -> ModuleModel | None:
        """Get a module by slug."""
        stmt = select(self.model_class).where(self.model_class.slug == slug)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_all_by_name(self) -> Sequence[ModuleModel]:
        """Get all modules sorted by name."""
        stmt = select(self.model_class).order_by(self.model_class.name)
        result = await self.session.execute(stmt)
        return result.scalars().all()


class ProjectModuleRepository(ProjectScopedRepository[ProjectModuleModel]):
    """Repository for the modules enabled on one project."""

    model_class = ProjectModuleModel

    async def get_by_module(self, module_id: UUID) -> ProjectModuleModel | None:
        """Get the enablement row for a module, if any."""
        stmt = select(self.model_class).where(
            self.model_class.project_id == self.project_id,
            self.model_class.module_id == module_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def is_enabled(self, module_id: UUID) -> bool:
        """Check whether a module is enabled for the project."""
        stmt = select(self.model_class.id).where(
            self.model_class.project_id == self.project_id,
            self.model_class.module_id == module_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def list_with_modules(self) -> Sequence[ProjectModuleModel]:
        """Get every enablement of the project with its module loaded."""
        stmt = (
            select(self.model_class)
            .options(selectinload(self.model_class.module))
            .where(self.model_class.project_id == self.project_id)
            .order_by(self.model_class.created_at)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def enable(
        self,
        module: ModuleModel,
        configuration: Mapping[str, Any] | None = None,
    ) -> ProjectModuleModel:
        """
        Enable a module for the project.

        Raises:
            ModuleAlreadyEnabledError: If the module is already enabled.
        """
        if await self.is_enabled(module.id):
            raise ModuleAlreadyEnabledError()

        project_module = ProjectModuleModel(
            project_id=self.project_id,
            module_id=module.id,
            configuration=dict(configuration or {}),
            module=module,
        )
        return await self.create(project_module, conflict=ModuleAlreadyEnabledError())

    async def disable(self, module_id: UUID) -> bool:
        """Disable a module. Returns False if it was not enabled."""
        project_module = await self.get_by_module(module_id)
        if project_module is None:
            return False
        await self.delete(project_module)
        return True
