"""
Contact form submissions.
"""

import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import CONTACT_STATUSES, Contact
from ..schemas import ContactForm

logger = logging.getLogger(__name__)


async def submit_contact(
    db: AsyncSession, form: ContactForm, *, ip_address: str | None = None
) -> Contact:
    record = form.to_record()
    if ip_address:
        record["ip_address"] = ip_address
    contact = await Contact.objects.create(db, **record)
    logger.info("Contact submission %s received", contact.id)
    return contact


def check_status(status: str) -> str:
    """
    Raises:
        ValueError: For a status outside the workflow.
    """
    if status not in CONTACT_STATUSES:
        msg = f"Invalid status. Must be one of: {', '.join(CONTACT_STATUSES)}"
        raise ValueError(msg)
    return status


async def contact_stats(db: AsyncSession) -> dict[str, Any]:
    """
    Submission counts per status, plus unread and overall totals.

    Example:
        >>> await contact_stats(db)
        {'total': 3, 'unread': 1, 'by_status': {'new': 2, 'in-progress': 1,
         'completed': 0, 'spam': 0}}
    """
    rows = await db.execute(
        select(Contact.status, func.count()).group_by(Contact.status)
    )
    by_status = dict.fromkeys(CONTACT_STATUSES, 0)
    for status, count in rows.all():
        by_status[status] = count

    unread = await Contact.objects.filter(is_read=False).count(db)
    return {
        "total": sum(by_status.values()),
        "unread": unread,
        "by_status": by_status,
    }
