"""
Write helpers shared by the generic content routes.
"""

import logging
from typing import Any, Sequence, TypeVar

from cosmic_db import F, Model, Q
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas import ReorderItem

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Model)


class DuplicateError(ValueError):
    """A record with the same title or slug already exists."""


async def ensure_unique_title(
    db: AsyncSession, model: type[Model], values: dict[str, Any]
) -> None:
    """
    Raises:
        DuplicateError: If another record has the same title or slug.
    """
    condition = Q(title=values["title"])
    if values.get("slug"):
        condition |= Q(slug=values["slug"])

    if await model.objects.filter(condition).exists(db):
        msg = f"{model.get_verbose_name()} with this title or slug already exists"
        raise DuplicateError(msg)


async def reorder(
    db: AsyncSession, model: type[T], items: list[ReorderItem]
) -> Sequence[T]:
    """
    Apply the given ``order`` values and return every record by order.

    Unknown ids are skipped.
    """
    for item in items:
        await model.objects.filter(id=item.id).update(db, order=item.order)
    logger.info("Reordered %d %s records", len(items), model.__name__)
    return await model.objects.order_by("order", "id").fetch(db)


async def record_view(db: AsyncSession, instance: Model) -> Model:
    """Count one read of a blog post."""
    model = type(instance)
    await model.objects.filter(id=instance.id).update(db, views=F("views") + 1)
    await db.refresh(instance)
    return instance
