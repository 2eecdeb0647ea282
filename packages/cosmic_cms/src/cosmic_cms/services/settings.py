"""
The site-wide settings document.

There is at most one row; reads create it with the defaults below when the
table is empty.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Setting
from ..registry import schemas_for

logger = logging.getLogger(__name__)

PUBLIC_FIELDS = frozenset(
    {
        "site_title",
        "tagline",
        "logo",
        "favicon",
        "contact_email",
        "contact_phone",
        "address",
        "social_media",
        "meta_title",
        "meta_description",
        "google_analytics_id",
        "footer_text",
        "maintenance_mode",
        "maintenance_message",
    }
)


def default_settings() -> dict[str, Any]:
    year = datetime.now(timezone.utc).year
    return {
        "site_title": "Cosmic Energy Solutions",
        "tagline": "Powering a Sustainable Future",
        "contact_email": "info@cosmicenergy.com",
        "contact_phone": "+1 (123) 456-7890",
        "address": "123 Solar Street, Green City, CA 94123",
        "social_media": {
            "facebook": "https://facebook.com/cosmicenergy",
            "twitter": "https://twitter.com/cosmicenergy",
            "instagram": "https://instagram.com/cosmicenergy",
            "linkedin": "https://linkedin.com/company/cosmicenergy",
        },
        "meta_title": "Cosmic Energy Solutions - Renewable Energy Experts",
        "meta_description": (
            "Cosmic Energy Solutions provides solar and renewable energy "
            "solutions for residential and commercial properties."
        ),
        "footer_text": f"© {year} Cosmic Energy Solutions. All rights reserved.",
    }


async def get_settings(
    db: AsyncSession, *, create_default: bool = True
) -> Setting | None:
    """
    The settings row, created from :func:`default_settings` when missing.

    With ``create_default=False`` a missing row yields ``None``.
    """
    settings = await Setting.objects.first(db)
    if settings is None and create_default:
        logger.info("No settings found, creating defaults")
        settings = await Setting.objects.create(db, **default_settings())
    return settings


def serialize_settings(
    settings: Setting | None, *, public: bool = False
) -> dict[str, Any] | None:
    if settings is None:
        return None
    data = schemas_for(Setting).serialize(settings)
    if public:
        return {key: value for key, value in data.items() if key in PUBLIC_FIELDS}
    return data


async def upsert_settings(db: AsyncSession, values: dict[str, Any]) -> Setting:
    """
    Update the settings row, or create it from ``values`` when none exists.
    """
    settings = await Setting.objects.first(db)
    if settings is None:
        return await Setting.objects.create(db, **{**default_settings(), **values})
    if not values:
        return settings
    return await Setting.objects.update(db, settings.id, **values)


async def update_group(db: AsyncSession, payload: BaseModel) -> Setting:
    """
    Apply one grouped settings form (SEO, scripts, contact details, ...).
    """
    return await upsert_settings(db, payload.model_dump(exclude_unset=True))


async def update_social_media(db: AsyncSession, payload: BaseModel) -> Setting:
    """Merge the given networks into the stored social links."""
    settings = await get_settings(db)
    links = {**(settings.social_media or {}), **payload.model_dump(exclude_unset=True)}
    return await Setting.objects.update(db, settings.id, social_media=links)
