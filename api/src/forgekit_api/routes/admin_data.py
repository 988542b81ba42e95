"""Owner-side content management: free-form admin data and image uploads.

Admin data items are records that belong to no module. They are tagged
with ``dataType`` (taken from the path, overriding any value in the body)
and are written without schema validation.
"""

from pathlib import PurePath
from typing import Annotated, Any
from uuid import uuid4

import structlog
from fastapi import APIRouter, Body, File, UploadFile, status
from pydantic import BaseModel

from forgekit_api.dependencies import AppSettings, BlobStore, DbSession
from forgekit_api.middleware.context import OwnedProject, parse_uuid
from forgekit_api.schemas import MessageResponse
from forgekit_api.services.shaping import flatten_record
from forgekit_core.errors import NotFoundError, ValidationFailedError
from forgekit_db import RecordRepository
from forgekit_db.models import DynamicDataModel

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/projects/{project_id}/admin", tags=["Admin Data"])

ALLOWED_IMAGE_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif", ".webp"}
ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}

Payload = Annotated[dict[str, Any], Body()]


# ============================================================
# Response Models
# ============================================================


class ItemListData(BaseModel):
    items: list[dict[str, Any]]


class ItemData(BaseModel):
    item: dict[str, Any]


class ItemListEnvelope(BaseModel):
    success: bool = True
    count: int
    data: ItemListData


class ItemEnvelope(BaseModel):
    success: bool = True
    data: ItemData


class ItemMutationEnvelope(ItemEnvelope):
    message: str


class UploadData(BaseModel):
    url: str
    filename: str
    size: int


class UploadEnvelope(BaseModel):
    success: bool = True
    message: str
    data: UploadData


# ============================================================
# Helpers
# ============================================================


def _tagged(payload: dict[str, Any], data_type: str) -> dict[str, Any]:
    return {**payload, "dataType": data_type}


async def _get_item(repo: RecordRepository, item_id: str) -> DynamicDataModel:
    item_uuid = parse_uuid(item_id)
    item = await repo.get_record(None, item_uuid) if item_uuid else None
    if item is None:
        raise NotFoundError("Item not found.")
    return item


# ============================================================
# Endpoints
# ============================================================


@router.get("/data/{data_type}", response_model=ItemListEnvelope)
async def list_items(data_type: str, project: OwnedProject, db: DbSession) -> ItemListEnvelope:
    """List the project's items of one data type, newest first."""
    items = await RecordRepository(db, project.id).list_records(None, data_type=data_type)
    return ItemListEnvelope(
        count=len(items),
        data=ItemListData(items=[flatten_record(item) for item in items]),
    )


@router.get("/data/{data_type}/{item_id}", response_model=ItemEnvelope)
async def get_item(
    data_type: str,
    item_id: str,
    project: OwnedProject,
    db: DbSession,
) -> ItemEnvelope:
    item = await _get_item(RecordRepository(db, project.id), item_id)
    return ItemEnvelope(data=ItemData(item=flatten_record(item)))


@router.post(
    "/data/{data_type}",
    response_model=ItemMutationEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_item(
    data_type: str,
    payload: Payload,
    project: OwnedProject,
    db: DbSession,
) -> ItemMutationEnvelope:
    """Store the body as a new item tagged with ``data_type``."""
    item = await RecordRepository(db, project.id).create_record(None, _tagged(payload, data_type))
    logger.info("admin_item_created", project_id=str(project.id), data_type=data_type)
    return ItemMutationEnvelope(
        message="Item created successfully.",
        data=ItemData(item=flatten_record(item)),
    )


@router.put("/data/{data_type}/{item_id}", response_model=ItemMutationEnvelope)
async def update_item(
    data_type: str,
    item_id: str,
    payload: Payload,
    project: OwnedProject,
    db: DbSession,
) -> ItemMutationEnvelope:
    """Replace an item's data; ``dataType`` is reset to the path value."""
    repo = RecordRepository(db, project.id)
    item = await _get_item(repo, item_id)
    item = await repo.replace_record(None, item.id, _tagged(payload, data_type))
    return ItemMutationEnvelope(
        message="Item updated successfully.",
        data=ItemData(item=flatten_record(item)),
    )


@router.delete("/data/{data_type}/{item_id}", response_model=MessageResponse)
async def delete_item(
    data_type: str,
    item_id: str,
    project: OwnedProject,
    db: DbSession,
) -> MessageResponse:
    repo = RecordRepository(db, project.id)
    item = await _get_item(repo, item_id)
    await repo.delete_record(None, item.id)
    return MessageResponse(message="Item deleted successfully.")


@router.post("/upload", response_model=UploadEnvelope)
async def upload_image(
    project: OwnedProject,
    blob_store: BlobStore,
    settings: AppSettings,
    image: Annotated[UploadFile | None, File()] = None,
) -> UploadEnvelope:
    """
    Upload an image for use in the project's content.

    Accepts JPEG, PNG, GIF and WebP files up to ``upload_max_bytes``.
    """
    if image is None or not image.filename:
        raise ValidationFailedError("No file uploaded.")

    extension = PurePath(image.filename).suffix.lower()
    if extension not in ALLOWED_IMAGE_EXTENSIONS or image.content_type not in ALLOWED_IMAGE_TYPES:
        raise ValidationFailedError("Only image files are allowed!")

    # One byte past the limit is enough to know the file is too large.
    content = await image.read(settings.upload_max_bytes + 1)
    if len(content) > settings.upload_max_bytes:
        raise ValidationFailedError("File too large.")

    filename = f"{uuid4()}{extension}"
    blob = await blob_store.upload(f"{project.id}/{filename}", content, image.content_type)
    logger.info("image_uploaded", project_id=str(project.id), key=blob.key, size=blob.size)

    return UploadEnvelope(
        message="Image uploaded successfully.",
        data=UploadData(url=blob.url, filename=filename, size=blob.size),
    )
