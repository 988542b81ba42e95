"""Module catalogue and per-project module enablement routes."""

from datetime import datetime
from typing import Any
from uuid import UUID

import structlog
from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from forgekit_api.dependencies import DbSession
from forgekit_api.middleware.context import OwnedProject, Owner, parse_uuid
from forgekit_api.schemas import ApiModel, MessageResponse
from forgekit_core.errors import NotFoundError
from forgekit_db import ModuleRepository, ProjectModuleRepository
from forgekit_db.models import ModuleModel, ProjectModuleModel

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Modules"])


# ============================================================
# Response Models
# ============================================================


class ModuleResponse(ApiModel):
    """Module response model."""

    id: UUID
    name: str
    slug: str
    description: str
    icon: str
    schema_: dict[str, dict[str, Any]] = Field(alias="schema")
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, module: ModuleModel) -> "ModuleResponse":
        return cls(
            id=module.id,
            name=module.name,
            slug=module.slug,
            description=module.description,
            icon=module.icon,
            schema_=module.schema,
            created_at=module.created_at,
            updated_at=module.updated_at,
        )


class ProjectModuleResponse(ApiModel):
    """An enabled module with the module itself joined in."""

    id: UUID
    project_id: UUID
    module_id: ModuleResponse
    configuration: dict[str, Any]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, project_module: ProjectModuleModel) -> "ProjectModuleResponse":
        return cls(
            id=project_module.id,
            project_id=project_module.project_id,
            module_id=ModuleResponse.from_model(project_module.module),
            configuration=project_module.configuration,
            created_at=project_module.created_at,
            updated_at=project_module.updated_at,
        )


class ModuleEnvelope(BaseModel):
    success: bool = True
    data: ModuleResponse


class ModuleListEnvelope(BaseModel):
    success: bool = True
    count: int
    data: list[ModuleResponse]


class ProjectModuleEnvelope(BaseModel):
    success: bool = True
    message: str
    data: ProjectModuleResponse


class ProjectModuleListEnvelope(BaseModel):
    success: bool = True
    count: int
    data: list[ProjectModuleResponse]


# ============================================================
# Request Models
# ============================================================


class EnableModuleRequest(ApiModel):
    """Request to enable a module for a project."""

    module_id: str
    configuration: dict[str, Any] | None = None


# ============================================================
# Endpoints
# ============================================================


async def _get_module(db: DbSession, module_id: str) -> ModuleModel:
    module_uuid = parse_uuid(module_id)
    module = await ModuleRepository(db).get_by_id(module_uuid) if module_uuid else None
    if module is None:
        raise NotFoundError("Module not found.")
    return module


@router.get("/modules", response_model=ModuleListEnvelope)
async def list_modules(owner: Owner, db: DbSession) -> ModuleListEnvelope:
    """List the module catalogue, sorted by name."""
    modules = await ModuleRepository(db).get_all_by_name()
    return ModuleListEnvelope(
        count=len(modules),
        data=[ModuleResponse.from_model(m) for m in modules],
    )


@router.get("/modules/{module_id}", response_model=ModuleEnvelope)
async def get_module(module_id: str, owner: Owner, db: DbSession) -> ModuleEnvelope:
    """Get a module with its field schema."""
    return ModuleEnvelope(data=ModuleResponse.from_model(await _get_module(db, module_id)))


@router.get("/projects/{project_id}/modules", response_model=ProjectModuleListEnvelope)
async def list_project_modules(project: OwnedProject, db: DbSession) -> ProjectModuleListEnvelope:
    """List the modules enabled for a project."""
    enabled = await ProjectModuleRepository(db, project.id).list_with_modules()
    return ProjectModuleListEnvelope(
        count=len(enabled),
        data=[ProjectModuleResponse.from_model(pm) for pm in enabled],
    )


@router.post(
    "/projects/{project_id}/modules",
    response_model=ProjectModuleEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def enable_module(
    request: EnableModuleRequest,
    project: OwnedProject,
    db: DbSession,
) -> ProjectModuleEnvelope:
    """
    Enable a module for a project.

    Once enabled, the module's records can be listed and created through
    the project's public API.
    """
    module = await _get_module(db, request.module_id)
    project_module = await ProjectModuleRepository(db, project.id).enable(
        module, request.configuration
    )
    logger.info("module_enabled", project_id=str(project.id), module=module.slug)
    return ProjectModuleEnvelope(
        message="Module enabled successfully.",
        data=ProjectModuleResponse.from_model(project_module),
    )


@router.delete("/projects/{project_id}/modules/{module_id}", response_model=MessageResponse)
async def disable_module(
    module_id: str,
    project: OwnedProject,
    db: DbSession,
) -> MessageResponse:
    """Disable a module. Records already stored for it are kept."""
    module_uuid = parse_uuid(module_id)
    disabled = (
        await ProjectModuleRepository(db, project.id).disable(module_uuid)
        if module_uuid
        else False
    )
    if not disabled:
        raise NotFoundError("Module not found for this project.")

    logger.info("module_disabled", project_id=str(project.id), module_id=module_id)
    return MessageResponse(message="Module disabled successfully.")
