"""Project management routes for authenticated owners."""

from datetime import datetime
from uuid import UUID

import structlog
from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from forgekit_api.dependencies import AppSettings, DbSession
from forgekit_api.middleware.context import OwnedProject, Owner
from forgekit_api.schemas import ApiModel, MessageResponse
from forgekit_core.errors import ValidationFailedError
from forgekit_db import ProjectRepository
from forgekit_db.models import ProjectModel

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/projects", tags=["Projects"])


# ============================================================
# Response Models
# ============================================================


class ProjectResponse(ApiModel):
    """Project response model."""

    id: UUID
    owner_id: UUID
    name: str
    description: str
    api_token: str
    base_url: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, project: ProjectModel, public_base_url: str) -> "ProjectResponse":
        return cls(
            id=project.id,
            owner_id=project.owner_id,
            name=project.name,
            description=project.description,
            api_token=project.api_token,
            base_url=project.base_url(public_base_url),
            created_at=project.created_at,
            updated_at=project.updated_at,
        )


class ProjectEnvelope(BaseModel):
    success: bool = True
    data: ProjectResponse


class ProjectMutationEnvelope(ProjectEnvelope):
    message: str


class ProjectListEnvelope(BaseModel):
    success: bool = True
    count: int
    data: list[ProjectResponse]


# ============================================================
# Request Models
# ============================================================


class ProjectRequest(BaseModel):
    """Request to create or update a project."""

    name: str | None = Field(default=None, max_length=255)
    description: str | None = None


def _required_name(request: ProjectRequest) -> str:
    name = (request.name or "").strip()
    if not name:
        raise ValidationFailedError("Project name is required.")
    return name


# ============================================================
# Endpoints
# ============================================================


@router.get("", response_model=ProjectListEnvelope)
async def list_projects(
    owner: Owner,
    db: DbSession,
    settings: AppSettings,
) -> ProjectListEnvelope:
    """List the caller's projects, newest first."""
    projects = await ProjectRepository(db).get_for_owner(owner.user_id)
    return ProjectListEnvelope(
        count=len(projects),
        data=[ProjectResponse.from_model(p, settings.public_base_url) for p in projects],
    )


@router.post(
    "",
    response_model=ProjectMutationEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_project(
    request: ProjectRequest,
    owner: Owner,
    db: DbSession,
    settings: AppSettings,
) -> ProjectMutationEnvelope:
    """
    Create a project owned by the caller.

    A fresh API token is generated; the response carries it together with
    the base URL of the project's public API.
    """
    project = await ProjectRepository(db).create_project(
        owner.user_id,
        _required_name(request),
        request.description or "",
        token_length=settings.api_token_length,
    )
    logger.info("project_created", project_id=str(project.id), owner_id=str(owner.user_id))
    return ProjectMutationEnvelope(
        message="Project created successfully.",
        data=ProjectResponse.from_model(project, settings.public_base_url),
    )


@router.get("/{project_id}", response_model=ProjectEnvelope)
async def get_project(project: OwnedProject, settings: AppSettings) -> ProjectEnvelope:
    """Get one of the caller's projects."""
    return ProjectEnvelope(data=ProjectResponse.from_model(project, settings.public_base_url))


@router.put("/{project_id}", response_model=ProjectMutationEnvelope)
async def update_project(
    request: ProjectRequest,
    project: OwnedProject,
    db: DbSession,
    settings: AppSettings,
) -> ProjectMutationEnvelope:
    """Rename a project or change its description."""
    if request.name is not None:
        project.name = _required_name(request)
    if request.description is not None:
        project.description = request.description

    project = await ProjectRepository(db).update(project)
    return ProjectMutationEnvelope(
        message="Project updated successfully.",
        data=ProjectResponse.from_model(project, settings.public_base_url),
    )


@router.delete("/{project_id}", response_model=MessageResponse)
async def delete_project(project: OwnedProject, db: DbSession) -> MessageResponse:
    """Delete a project with all its enabled modules and records."""
    await ProjectRepository(db).delete_project(project)
    logger.info("project_deleted", project_id=str(project.id))
    return MessageResponse(message="Project deleted successfully.")


@router.post("/{project_id}/regenerate-token", response_model=ProjectMutationEnvelope)
async def regenerate_token(
    project: OwnedProject,
    db: DbSession,
    settings: AppSettings,
) -> ProjectMutationEnvelope:
    """
    Issue a new API token for the project.

    The previous token stops working immediately.
    """
    project = await ProjectRepository(db).regenerate_token(
        project, token_length=settings.api_token_length
    )
    logger.info("token_regenerated", project_id=str(project.id))
    return ProjectMutationEnvelope(
        message="API token regenerated successfully.",
        data=ProjectResponse.from_model(project, settings.public_base_url),
    )
