"""Tenant gate: resolution of project tokens, module slugs and enablements.

All lookups are read-only. A failed lookup raises; nothing falls back to a
default project or module.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from forgekit_core.errors import AuthenticationError, AuthorizationError, NotFoundError
from forgekit_db import ModuleRepository, ProjectModuleRepository, ProjectRepository
from forgekit_db.models import ModuleModel, ProjectModel


class TenantGate:
    """Resolves the tenant and module a public API request addresses."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def resolve_project_by_token(self, token: str) -> ProjectModel:
        """
        Get the project owning ``token``.

        Raises:
            AuthenticationError: If the token is empty or unknown.
        """
        if not token:
            raise AuthenticationError("API token is required.")
        project = await ProjectRepository(self.session).get_by_token(token)
        if project is None:
            raise AuthenticationError("Invalid API token.")
        return project

    async def resolve_module_by_slug(self, slug: str) -> ModuleModel:
        """
        Get the module with ``slug``.

        Raises:
            NotFoundError: If no module has that slug.
        """
        module = await ModuleRepository(self.session).get_by_slug(slug)
        if module is None:
            raise NotFoundError(f"Module '{slug}' not found.")
        return module

    async def is_module_enabled(self, project_id: UUID, module_id: UUID) -> bool:
        return await ProjectModuleRepository(self.session, project_id).is_enabled(module_id)

    async def require_module_enabled(self, project: ProjectModel, module: ModuleModel) -> None:
        """
        Raises:
            AuthorizationError: If the module is not enabled for the project.
        """
        if not await self.is_module_enabled(project.id, module.id):
            raise AuthorizationError(f"Module '{module.slug}' is not enabled for this project.")
