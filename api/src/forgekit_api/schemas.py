"""Response models shared across routes."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Response model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(BaseModel):
    """Envelope without payload."""

    success: bool = True
    message: str


class RecordResponse(BaseModel):
    """Envelope holding one flat record."""

    success: bool = True
    data: dict[str, Any]


class RecordMutationResponse(RecordResponse):
    message: str


class RecordListResponse(BaseModel):
    """Envelope holding a list of flat records."""

    success: bool = True
    count: int
    data: list[dict[str, Any]]
