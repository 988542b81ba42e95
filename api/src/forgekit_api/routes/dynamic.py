"""Public, token-authenticated record API generated for every module."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, status

from forgekit_api.dependencies import DbSession
from forgekit_api.schemas import (
    MessageResponse,
    RecordListResponse,
    RecordMutationResponse,
    RecordResponse,
)
from forgekit_api.services.dispatcher import DynamicApiDispatcher

router = APIRouter(prefix="/api/v1", tags=["Dynamic API"])


def get_dispatcher(db: DbSession) -> DynamicApiDispatcher:
    return DynamicApiDispatcher(db)


Dispatcher = Annotated[DynamicApiDispatcher, Depends(get_dispatcher)]
Payload = Annotated[dict[str, Any], Body()]


@router.get("/{project_token}/{module_slug}", response_model=RecordListResponse)
async def list_records(
    project_token: str,
    module_slug: str,
    dispatcher: Dispatcher,
) -> RecordListResponse:
    """Get all records of a module, newest first."""
    records = await dispatcher.list_records(project_token, module_slug)
    return RecordListResponse(count=len(records), data=records)


@router.post(
    "/{project_token}/{module_slug}",
    response_model=RecordMutationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_record(
    project_token: str,
    module_slug: str,
    payload: Payload,
    dispatcher: Dispatcher,
) -> RecordMutationResponse:
    """
    Create a record.

    The body is validated against the module schema; every violation is
    reported in ``errors`` and nothing is stored.
    """
    record = await dispatcher.create_record(project_token, module_slug, payload)
    return RecordMutationResponse(message="Record created successfully.", data=record)


@router.get("/{project_token}/{module_slug}/{record_id}", response_model=RecordResponse)
async def get_record(
    project_token: str,
    module_slug: str,
    record_id: str,
    dispatcher: Dispatcher,
) -> RecordResponse:
    """Get a single record."""
    record = await dispatcher.get_record(project_token, module_slug, record_id)
    return RecordResponse(data=record)


@router.put(
    "/{project_token}/{module_slug}/{record_id}",
    response_model=RecordMutationResponse,
)
async def replace_record(
    project_token: str,
    module_slug: str,
    record_id: str,
    payload: Payload,
    dispatcher: Dispatcher,
) -> RecordMutationResponse:
    """Replace a record's whole payload. Fields left out are removed."""
    record = await dispatcher.replace_record(project_token, module_slug, record_id, payload)
    return RecordMutationResponse(message="Record updated successfully.", data=record)


@router.delete("/{project_token}/{module_slug}/{record_id}", response_model=MessageResponse)
async def delete_record(
    project_token: str,
    module_slug: str,
    record_id: str,
    dispatcher: Dispatcher,
) -> MessageResponse:
    """Delete a record."""
    await dispatcher.delete_record(project_token, module_slug, record_id)
    return MessageResponse(message="Record deleted successfully.")
