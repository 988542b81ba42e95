"""API middleware components."""

from forgekit_api.middleware.context import (
    OwnerContext,
    get_owned_project,
    get_owner_context,
)
from forgekit_api.middleware.errors import register_exception_handlers

__all__ = [
    "OwnerContext",
    "get_owned_project",
    "get_owner_context",
    "register_exception_handlers",
]
