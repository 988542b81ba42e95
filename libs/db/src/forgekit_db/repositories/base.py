"""Repository base classes and utilities."""

from typing import Generic, TypeVar, Sequence
from uuid import UUID

from sqlalchemy import ColumnElement, select, func, Select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from forgekit_core.errors import ConflictError
from forgekit_db.models.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """
    Generic repository base class providing common CRUD operations.

    Usage:
        class ModuleRepository(BaseRepository[ModuleModel]):
            model_class = ModuleModel

        repo = ModuleRepository(db_session)
        module = await repo.get_by_id(module_id)
    """

    model_class: type[ModelT]

    def __init__(self, session: AsyncSession):
        """Initialize repository with a database session."""
        self.session = session

    async def get_by_id(self, id: UUID) -> ModelT | None:
        """Get a single record by ID."""
        return await self.session.get(self.model_class, id)

    async def get_all(
        self,
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> Sequence[ModelT]:
        """Get all records with optional pagination."""
        stmt: Select[tuple[ModelT]] = select(self.model_class)
        if offset:
            stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def count(self) -> int:
        """Get total count of records."""
        stmt = select(func.count()).select_from(self.model_class)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def create(
        self,
        entity: ModelT,
        *,
        conflict: ConflictError | None = None,
    ) -> ModelT:
        """
        Create a new record.

        A unique-index violation is raised as ``conflict`` (or a generic
        ConflictError) instead of the driver's IntegrityError.
        """
        self.session.add(entity)
        await self._flush(conflict)
        return entity

    async def update(self, entity: ModelT, *, conflict: ConflictError | None = None) -> ModelT:
        """Update an existing record."""
        await self._flush(conflict)
        return entity

    async def delete(self, entity: ModelT) -> None:
        """Delete a record."""
        await self.session.delete(entity)
        await self.session.flush()

    async def _flush(self, conflict: ConflictError | None) -> None:
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise (conflict or ConflictError()) from exc


class ProjectScopedRepository(BaseRepository[ModelT]):
    """
    Repository base class for project-owned rows.

    All queries are filtered by project_id; a row id alone never
    addresses a row.
    """

    def __init__(self, session: AsyncSession, project_id: UUID):
        """Initialize repository with a database session and project ID."""
        super().__init__(session)
        self.project_id = project_id

    async def get_by_id(self, id: UUID, *criteria: ColumnElement[bool]) -> ModelT | None:
        """Get a single record by ID (scoped to project, narrowed by ``criteria``)."""
        stmt = select(self.model_class).where(
            self.model_class.id == id,  # type: ignore
            self.model_class.project_id == self.project_id,  # type: ignore
            *criteria,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_all(
        self,
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> Sequence[ModelT]:
        """Get all records (scoped to project) with optional pagination."""
        stmt: Select[tuple[ModelT]] = select(self.model_class).where(
            self.model_class.project_id == self.project_id,  # type: ignore
        )
        if offset:
            stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def count(self) -> int:
        """Get total count of records (scoped to project)."""
        stmt = (
            select(func.count())
            .select_from(self.model_class)
            .where(
                self.model_class.project_id == self.project_id,  # type: ignore
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
