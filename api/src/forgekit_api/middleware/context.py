"""Owner context for the management endpoints.

Owner endpoints are authenticated with a bearer credential from the
identity provider. Endpoints under ``/api/projects/{project_id}`` also
require the caller to own that project:

- Missing or invalid credential: 401
- Project does not exist: 404
- Project belongs to someone else: 403
"""

from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from forgekit_api.dependencies import DbSession, Identity
from forgekit_core.errors import AuthenticationError, AuthorizationError, NotFoundError
from forgekit_db import ProjectRepository
from forgekit_db.models import ProjectModel

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class OwnerContext:
    """The authenticated owner of the current request."""

    user_id: UUID


def parse_uuid(value: str) -> UUID | None:
    """Parse a path identifier; malformed ids are treated as unknown ids."""
    try:
        return UUID(value)
    except ValueError:
        return None


async def get_owner_context(
    identity: Identity,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> OwnerContext:
    """
    FastAPI dependency that authenticates the owner.

    Usage:
        @router.get("/projects")
        async def list_projects(owner: Owner):
            # Use owner.user_id for filtering
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access denied. No token provided.")
    return OwnerContext(user_id=identity.authenticate(credentials.credentials))


async def get_owned_project(
    project_id: str,
    owner: Annotated[OwnerContext, Depends(get_owner_context)],
    db: DbSession,
) -> ProjectModel:
    """FastAPI dependency resolving ``{project_id}`` to a project the caller owns."""
    project_uuid = parse_uuid(project_id)
    project = await ProjectRepository(db).get_by_id(project_uuid) if project_uuid else None

    if project is None:
        raise NotFoundError("Project not found.")

    if project.owner_id != owner.user_id:
        raise AuthorizationError("Access denied. You do not own this project.")

    return project


# Type aliases for cleaner dependency injection
Owner = Annotated[OwnerContext, Depends(get_owner_context)]
OwnedProject = Annotated[ProjectModel, Depends(get_owned_project)]
