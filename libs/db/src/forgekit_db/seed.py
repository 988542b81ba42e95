"""Seeding of module definitions into the database."""

from collections.abc import Iterable

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from forgekit_core.models.module import ModuleDefinition, dump_schema
from forgekit_db.models import ModuleModel
from forgekit_db.repositories.module import ModuleRepository

logger = structlog.get_logger(__name__)


async def seed_modules(
    session: AsyncSession,
    definitions: Iterable[ModuleDefinition],
) -> list[ModuleModel]:
    """
    Insert or update module definitions, matched by slug.

    Existing modules keep their id, so enablements and records that
    reference them survive a re-seed. Stored records are not revalidated
    against a changed schema.

    Args:
        session: Database session (caller commits)
        definitions: Module definitions to write

    Returns:
        The seeded modules, in input order
    """
    repo = ModuleRepository(session)
    seeded: list[ModuleModel] = []

    for definition in definitions:
        schema = dump_schema(definition.schema_)
        module = await repo.get_by_slug(definition.slug)
        if module is None:
            module = ModuleModel(
                name=definition.name,
                slug=definition.slug,
                description=definition.description,
                icon=definition.icon,
                schema=schema,
            )
            module = await repo.create(module)
            logger.info("module_seeded", slug=definition.slug, action="created")
        else:
            module.name = definition.name
            module.description = definition.description
            module.icon = definition.icon
            module.schema = schema
            module = await repo.update(module)
            logger.info("module_seeded", slug=definition.slug, action="updated")
        seeded.append(module)

    return seeded
