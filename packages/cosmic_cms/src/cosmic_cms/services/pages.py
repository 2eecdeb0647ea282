"""
Aggregated page payloads for the public site.
"""

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ..models import (
    AboutHero,
    BlogPost,
    BrandVision,
    CoreValue,
    EnergySolution,
    Faq,
    Hero,
    JoinTeamCta,
    Model,
    Product,
    Project,
    TeamMember,
    Testimonial,
    WorkEnvironment,
)
from ..registry import schemas_for
from .listing import list_content
from .settings import get_settings, serialize_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Section:
    """One listing of an aggregated page."""

    key: str
    model: type[Model]
    limit: int | None = None
    featured: bool | None = True
    ordering: tuple[str, ...] = ("order",)


HOMEPAGE_SECTIONS: tuple[Section, ...] = (
    Section("heroes", Hero, limit=5),
    Section("energy_solutions", EnergySolution, limit=6),
    Section("products", Product, limit=8),
    Section("projects", Project, limit=6),
    Section("testimonials", Testimonial, limit=6),
    Section("team_members", TeamMember, limit=4),
    Section("blog_posts", BlogPost, limit=3, ordering=("-created_at",)),
    Section("faqs", Faq, limit=6, featured=None),
)

ABOUT_SECTIONS: tuple[Section, ...] = (
    Section("team_members", TeamMember, featured=None),
    Section("testimonials", Testimonial, featured=None),
)

CULTURE_SINGLETONS: tuple[tuple[str, type[Model]], ...] = (
    ("about_hero", AboutHero),
    ("brand_vision", BrandVision),
    ("work_environment", WorkEnvironment),
    ("join_team_cta", JoinTeamCta),
)


async def _collect(db: AsyncSession, sections: tuple[Section, ...]) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for section in sections:
        items = await list_content(
            db,
            section.model,
            featured=section.featured,
            ordering=section.ordering,
            limit=section.limit,
        )
        data[section.key] = schemas_for(section.model).serialize_many(items)
    return data


async def homepage(db: AsyncSession) -> dict[str, Any]:
    """
    Every homepage section in one payload.

    The eight listings run one after the other on the request's session,
    followed by the settings document. Any failure propagates and fails the
    whole aggregate.

    Example:
        >>> data = await homepage(db)
        >>> sorted(data)
        ['blog_posts', 'energy_solutions', 'faqs', 'heroes', 'products',
         'projects', 'settings', 'team_members', 'testimonials']
    """
    data = await _collect(db, HOMEPAGE_SECTIONS)
    settings = await get_settings(db, create_default=False)
    data["settings"] = serialize_settings(settings)
    logger.debug("Homepage aggregate built with %d sections", len(data))
    return data


async def about_page(db: AsyncSession) -> dict[str, Any]:
    """All active team members and testimonials by display order, plus settings."""
    data = await _collect(db, ABOUT_SECTIONS)
    settings = await get_settings(db, create_default=False)
    data["settings"] = serialize_settings(settings)
    return data


async def company_culture_page(db: AsyncSession) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for key, model in CULTURE_SINGLETONS:
        section = await model.objects.filter(is_active=True).order_by("id").first(db)
        data[key] = schemas_for(model).serialize(section) if section else None

    values = await list_content(db, CoreValue)
    data["core_values"] = schemas_for(CoreValue).serialize_many(values)
    return data
