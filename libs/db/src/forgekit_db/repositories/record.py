"""Generic record repository."""

from typing import Any, Mapping, Sequence
from uuid import UUID

from sqlalchemy import ColumnElement, select

from forgekit_core.models.base import utc_now
from forgekit_db.models import DynamicDataModel
from forgekit_db.repositories.base import ProjectScopedRepository


class RecordRepository(ProjectScopedRepository[DynamicDataModel]):
    """
    CRUD on free-form records of one project.

    Every method takes the module the record belongs to. ``module_id=None``
    addresses the project's admin data (records with no module).
    """

    model_class = DynamicDataModel

    def _in_module(self, module_id: UUID | None) -> ColumnElement[bool]:
        if module_id is None:
            return self.model_class.module_id.is_(None)
        return self.model_class.module_id == module_id

    def _scope(self, module_id: UUID | None) -> list[ColumnElement[bool]]:
        return [self.model_class.project_id == self.project_id, self._in_module(module_id)]

    async def list_records(
        self,
        module_id: UUID | None,
        *,
        data_type: str | None = None,
    ) -> Sequence[DynamicDataModel]:
        """List records newest first, optionally only those tagged ``data_type``."""
        stmt = select(self.model_class).where(*self._scope(module_id))
        if data_type is not None:
            stmt = stmt.where(self.model_class.data["dataType"].as_string() == data_type)
        stmt = stmt.order_by(self.model_class.created_at.desc())
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def get_record(
        self,
        module_id: UUID | None,
        record_id: UUID,
    ) -> DynamicDataModel | None:
        """Get one record by id within the project and module."""
        return await self.get_by_id(record_id, self._in_module(module_id))

    async def create_record(
        self,
        module_id: UUID | None,
        data: Mapping[str, Any],
    ) -> DynamicDataModel:
        """Store a payload verbatim as a new record."""
        record = DynamicDataModel(
            project_id=self.project_id,
            module_id=module_id,
            data=dict(data),
        )
        return await self.create(record)

    async def replace_record(
        self,
        module_id: UUID | None,
        record_id: UUID,
        data: Mapping[str, Any],
    ) -> DynamicDataModel | None:
        """Replace a record's whole payload. Returns None if it is not in scope."""
        record = await self.get_record(module_id, record_id)
        if record is None:
            return None
        record.data = dict(data)
        record.updated_at = utc_now()
        return await self.update(record)

    async def delete_record(self, module_id: UUID | None, record_id: UUID) -> bool:
        """Delete a record. Returns False if it is not in scope."""
        record = await self.get_record(module_id, record_id)
        if record is None:
            return False
        await self.delete(record)
        return True
