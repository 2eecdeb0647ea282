"""
Per-entity counts for the admin dashboard.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Contact
from ..registry import CONTENT_TYPES


async def dashboard_stats(db: AsyncSession) -> dict[str, Any]:
    """
    Example:
        >>> await dashboard_stats(db)
        {'products': {'total': 12, 'active': 10}, ..., 'contacts': {...}}
    """
    stats: dict[str, Any] = {}
    for content_type in CONTENT_TYPES:
        model = content_type.model
        stats[content_type.key] = {
            "total": await model.objects.count(db),
            "active": await model.objects.filter(is_active=True).count(db),
        }

    stats["contacts"] = {
        "total": await Contact.objects.count(db),
        "unread": await Contact.objects.filter(is_read=False).count(db),
    }
    return stats
