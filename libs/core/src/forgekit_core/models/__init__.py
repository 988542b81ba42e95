"""Domain models for Forgekit."""

from forgekit_core.models.base import BaseModel, utc_now
from forgekit_core.models.module import (
    ArrayField,
    BooleanField,
    DateField,
    EmailField,
    FieldSpec,
    FieldType,
    ModuleDefinition,
    ModuleSchema,
    NumberField,
    SelectField,
    StringField,
    UrlField,
    dump_schema,
    parse_schema,
)

__all__ = [
    # Base
    "BaseModel",
    "utc_now",
    # Module
    "FieldType",
    "FieldSpec",
    "StringField",
    "NumberField",
    "BooleanField",
    "EmailField",
    "UrlField",
    "DateField",
    "ArrayField",
    "SelectField",
    "ModuleSchema",
    "ModuleDefinition",
    "parse_schema",
    "dump_schema",
]
