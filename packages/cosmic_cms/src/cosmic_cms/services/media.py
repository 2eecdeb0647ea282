"""
Media library records. Files themselves live in external storage.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Media

logger = logging.getLogger(__name__)


async def folders(db: AsyncSession) -> list[str]:
    names = await Media.objects.order_by("folder").values_list(
        db, "folder", distinct=True
    )
    return list(names)


async def bulk_delete(db: AsyncSession, ids: list[int]) -> int:
    """
    Delete the listed records and return how many existed.
    """
    deleted = await Media.objects.filter(id__in=ids).delete(db)
    logger.info("Bulk deleted %d media records", deleted)
    return deleted
