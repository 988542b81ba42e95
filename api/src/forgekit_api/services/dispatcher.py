"""Dynamic API dispatcher.

Runs one public API request through its steps, each of which fails fast
with its own error:

1. Authenticate the project token (401)
2. Resolve the module slug (404)
3. Check the module is enabled for the project, for list and create (403)
4. Validate the payload against the module schema on writes (400, no write)
5. Delegate to the record repository (404 when the record is out of scope)
6. Flatten the stored record for the response
"""

from typing import Any, Mapping

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from forgekit_api.middleware.context import parse_uuid
from forgekit_api.services.gate import TenantGate
from forgekit_api.services.shaping import flatten_record
from forgekit_core.errors import NotFoundError, ValidationFailedError
from forgekit_core.validation import validate
from forgekit_db import RecordRepository
from forgekit_db.models import ModuleModel, ProjectModel

logger = structlog.get_logger(__name__)


class DynamicApiDispatcher:
    """Generic CRUD over module records, addressed by project token and module slug."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.gate = TenantGate(session)

    async def _resolve(
        self,
        token: str,
        slug: str,
        *,
        require_enabled: bool,
    ) -> tuple[ProjectModel, ModuleModel]:
        project = await self.gate.resolve_project_by_token(token)
        module = await self.gate.resolve_module_by_slug(slug)
        if require_enabled:
            await self.gate.require_module_enabled(project, module)
        return project, module

    @staticmethod
    def _check_payload(module: ModuleModel, payload: Mapping[str, Any]) -> None:
        result = validate(payload, module.field_specs())
        if not result.valid:
            raise ValidationFailedError(errors=result.errors)

    async def list_records(self, token: str, slug: str) -> list[dict[str, Any]]:
        """All records of the module, newest first."""
        project, module = await self._resolve(token, slug, require_enabled=True)
        records = await RecordRepository(self.session, project.id).list_records(module.id)
        return [flatten_record(record) for record in records]

    async def get_record(self, token: str, slug: str, record_id: str) -> dict[str, Any]:
        project, module = await self._resolve(token, slug, require_enabled=False)
        record_uuid = parse_uuid(record_id)
        record = None
        if record_uuid is not None:
            record = await RecordRepository(self.session, project.id).get_record(
                module.id, record_uuid
            )
        if record is None:
            raise NotFoundError("Record not found.")
        return flatten_record(record)

    async def create_record(
        self,
        token: str,
        slug: str,
        payload: Mapping[str, Any],
    ) -> dict[str, Any]:
        """Validate ``payload`` and store it as a new record."""
        project, module = await self._resolve(token, slug, require_enabled=True)
        self._check_payload(module, payload)

        record = await RecordRepository(self.session, project.id).create_record(
            module.id, payload
        )
        logger.info(
            "record_created",
            project_id=str(project.id),
            module=module.slug,
            record_id=str(record.id),
        )
        return flatten_record(record)

    async def replace_record(
        self,
        token: str,
        slug: str,
        record_id: str,
        payload: Mapping[str, Any],
    ) -> dict[str, Any]:
        """Validate ``payload`` and replace the record's whole data with it."""
        project, module = await self._resolve(token, slug, require_enabled=False)
        self._check_payload(module, payload)

        record_uuid = parse_uuid(record_id)
        record = None
        if record_uuid is not None:
            record = await RecordRepository(self.session, project.id).replace_record(
                module.id, record_uuid, payload
            )
        if record is None:
            raise NotFoundError("Record not found.")

        logger.info(
            "record_replaced",
            project_id=str(project.id),
            module=module.slug,
            record_id=record_id,
        )
        return flatten_record(record)

    async def delete_record(self, token: str, slug: str, record_id: str) -> None:
        project, module = await self._resolve(token, slug, require_enabled=False)
        record_uuid = parse_uuid(record_id)
        deleted = False
        if record_uuid is not None:
            deleted = await RecordRepository(self.session, project.id).delete_record(
                module.id, record_uuid
            )
        if not deleted:
            raise NotFoundError("Record not found.")

        logger.info(
            "record_deleted",
            project_id=str(project.id),
            module=module.slug,
            record_id=record_id,
        )
