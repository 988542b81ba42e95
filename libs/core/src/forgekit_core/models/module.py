"""Module and field schema domain models."""

from enum import StrEnum
from typing import Annotated, Any, Literal, Mapping

from pydantic import Field, TypeAdapter

from forgekit_core.models.base import BaseModel


class FieldType(StrEnum):
    """Field types a module schema may declare."""

    STRING = "string"
    TEXT = "text"  # multi-line string
    NUMBER = "number"
    BOOLEAN = "boolean"
    EMAIL = "email"
    URL = "url"
    DATE = "date"
    ARRAY = "array"
    SELECT = "select"


class _FieldSpecBase(BaseModel):
    """Attributes shared by every field variant."""

    required: bool = False
    label: str | None = None
    # Editing UI hint only; never applied when a record is written.
    default: Any = None

    def display_name(self, field_name: str) -> str:
        """Label used in validation messages."""
        return self.label or field_name


class StringField(_FieldSpecBase):
    type: Literal["string", "text"]


class NumberField(_FieldSpecBase):
    type: Literal["number"]


class BooleanField(_FieldSpecBase):
    type: Literal["boolean"]


class EmailField(_FieldSpecBase):
    type: Literal["email"]


class UrlField(_FieldSpecBase):
    type: Literal["url"]


class DateField(_FieldSpecBase):
    type: Literal["date"]


class ArrayField(_FieldSpecBase):
    type: Literal["array"]


class SelectField(_FieldSpecBase):
    type: Literal["select"]
    options: list[Any] | None = None


FieldSpec = Annotated[
    StringField
    | NumberField
    | BooleanField
    | EmailField
    | UrlField
    | DateField
    | ArrayField
    | SelectField,
    Field(discriminator="type"),
]

ModuleSchema = dict[str, FieldSpec]

_schema_adapter: TypeAdapter[ModuleSchema] = TypeAdapter(ModuleSchema)


def parse_schema(raw: Mapping[str, Any]) -> ModuleSchema:
    """
    Parse a raw JSON schema map into typed field specs.

    Raises:
        pydantic.ValidationError: If a field declares an unknown type or
            malformed attributes.
    """
    return _schema_adapter.validate_python(dict(raw))


def dump_schema(schema: ModuleSchema) -> dict[str, dict[str, Any]]:
    """Convert field specs back to plain JSON, omitting attributes never set."""
    return {
        name: spec.model_dump(mode="json", exclude_unset=True)
        for name, spec in schema.items()
    }


class ModuleDefinition(BaseModel):
    """
    A named, reusable record shape.

    Module definitions are global. They are seeded into the database and
    referenced by projects through enablements.
    """

    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=63, pattern=r"^[a-z0-9-]+$")
    description: str
    icon: str = "Box"
    schema_: ModuleSchema = Field(alias="schema")
