"""Validation of free-form records against a module schema.

``validate`` is a pure function: it reads the payload and the schema, never
mutates either, and performs no I/O. Only fields declared in the schema are
checked; any other keys in the payload pass through untouched.
"""

import math
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Any

from pydantic import AnyUrl, TypeAdapter, ValidationError

from forgekit_core.models.module import FieldSpec, FieldType, SelectField

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")

_url_adapter: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one payload."""

    valid: bool
    errors: list[str] = field(default_factory=list)


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    # JSON integers of any size arrive as int and are always numbers.
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, str):
        if "_" in value:
            return False
        try:
            return math.isfinite(float(value))
        except ValueError:
            return False
    return False


def _is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def _is_email(value: Any) -> bool:
    return isinstance(value, str) and EMAIL_PATTERN.fullmatch(value) is not None


def _is_url(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def _is_date(value: Any) -> bool:
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        datetime.fromisoformat(value)
        return True
    except ValueError:
        pass
    try:
        parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return False
    return True


def _is_array(value: Any) -> bool:
    return isinstance(value, list)


# (check, message suffix) per declared type. SELECT is handled separately
# because its check depends on the field's options.
_TYPE_CHECKS: dict[FieldType, tuple[Callable[[Any], bool], str]] = {
    FieldType.STRING: (_is_string, "must be a string"),
    FieldType.TEXT: (_is_string, "must be a string"),
    FieldType.NUMBER: (_is_number, "must be a number"),
    FieldType.BOOLEAN: (_is_boolean, "must be a boolean"),
    FieldType.EMAIL: (_is_email, "must be a valid email"),
    FieldType.URL: (_is_url, "must be a valid URL"),
    FieldType.DATE: (_is_date, "must be a valid date"),
    FieldType.ARRAY: (_is_array, "must be an array"),
}


def _kind(value: Any) -> type:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float
    return type(value)


def _is_option(value: Any, options: list[Any]) -> bool:
    # Strict equality: True is not 1, but 1 is 1.0.
    return any(_kind(option) is _kind(value) and option == value for option in options)


def _check_field(name: str, spec: FieldSpec, value: Any) -> str | None:
    label = spec.display_name(name)

    if isinstance(spec, SelectField):
        if spec.options is not None and not _is_option(value, spec.options):
            choices = ", ".join(str(option) for option in spec.options)
            return f"{label} must be one of: {choices}"
        return None

    check, suffix = _TYPE_CHECKS[FieldType(spec.type)]
    if not check(value):
        return f"{label} {suffix}"
    return None


def validate(
    payload: Mapping[str, Any],
    schema: Mapping[str, FieldSpec],
) -> ValidationResult:
    """
    Validate a record payload against a module schema.

    Every violated field is reported; validation does not stop at the first
    error. Field defaults are not applied.

    Args:
        payload: The record data as received from the client
        schema: Field name to field spec

    Returns:
        ValidationResult with ``valid`` set iff no errors were found
    """
    errors: list[str] = []

    for name, spec in schema.items():
        value = payload.get(name)

        if spec.required and (value is None or value == ""):
            errors.append(f"{spec.display_name(name)} is required")
            continue

        if value is None:
            continue

        error = _check_field(name, spec, value)
        if error is not None:
            errors.append(error)

    return ValidationResult(valid=not errors, errors=errors)
