"""Request-level services shared by the routes."""

from forgekit_api.services.dispatcher import DynamicApiDispatcher
from forgekit_api.services.gate import TenantGate
from forgekit_api.services.shaping import flatten_record

__all__ = [
    "DynamicApiDispatcher",
    "TenantGate",
    "flatten_record",
]
