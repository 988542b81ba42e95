"""Conversion of stored records into the public JSON shape."""

from typing import Any

from forgekit_db.models import DynamicDataModel


def flatten_record(record: DynamicDataModel) -> dict[str, Any]:
    """
    Lift a record's payload to the top level next to its id and timestamps.

    ``{"id": ..., **data, "createdAt": ..., "updatedAt": ...}``; the system
    keys take precedence over same-named payload keys.
    """
    shaped: dict[str, Any] = {"id": str(record.id)}
    shaped.update(record.data)
    shaped["id"] = str(record.id)
    shaped["createdAt"] = record.created_at
    shaped["updatedAt"] = record.updated_at
    return shaped
