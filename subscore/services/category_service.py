"""Category directory — read-only lookups."""

import uuid
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from subscore.constants import CATEGORY_LOOKUP_CHUNK_SIZE
from subscore.models.category import Category


async def list_categories(db: AsyncSession) -> list[Category]:
    result = await db.execute(select(Category).order_by(Category.name))
    return list(result.scalars().all())


async def get_categories_by_ids(
    db: AsyncSession,
    category_ids: Iterable[uuid.UUID],
    chunk_size: int = CATEGORY_LOOKUP_CHUNK_SIZE,
) -> dict[uuid.UUID, Category]:
    """Return {id: Category} for the ids that exist, querying in bounded chunks."""
    unique_ids = list(dict.fromkeys(category_ids))
    found: dict[uuid.UUID, Category] = {}

    for start in range(0, len(unique_ids), chunk_size):
        chunk = unique_ids[start:start + chunk_size]
        result = await db.execute(select(Category).where(Category.id.in_(chunk)))
        for category in result.scalars():
            found[category.id] = category

    return found
