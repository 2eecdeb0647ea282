"""
Every content type exposed over the API, with the knobs the generic
routes read.
"""

from dataclasses import dataclass, field

from cosmic_db import Model, ModelValidator

from . import models
from .schemas import (
    MENU_SCHEMAS,
    HeroCreate,
    HeroUpdate,
    ProductCreate,
    ProductUpdate,
    ResourceSchemas,
    build_schemas,
)


@dataclass(frozen=True)
class ContentType:
    """
    A model served by :class:`cosmic_cms.resources.ContentRouter`.

    Attributes:
        key: Name used in dashboards and stats (``"blog_posts"``).
        prefix: URL prefix (``"/blog-posts"``).
        search_fields: Columns matched by ``?search=`` and ``/search?q=``.
        lookups: Extra ``/{segment}/{value}`` routes, segment -> column.
        ordering: Sort keys of the public listings.
        unique_title: Reject creates whose title or slug is taken.
        count_views: Reads by id or slug increment ``views``.
    """

    key: str
    prefix: str
    model: type[Model]
    schemas: ResourceSchemas
    search_fields: tuple[str, ...] = ()
    lookups: dict[str, str] = field(default_factory=dict)
    ordering: tuple[str, ...] = ("order",)
    unique_title: bool = False
    count_views: bool = False

    def __post_init__(self) -> None:
        ModelValidator.validate_model(self.model)
        ModelValidator.validate_fields(
            self.model, *self.search_fields, *self.lookups.values()
        )

    @property
    def columns(self):
        return self.model.__table__.columns

    @property
    def has_active(self) -> bool:
        return "is_active" in self.columns

    @property
    def has_featured(self) -> bool:
        return "is_featured" in self.columns

    @property
    def has_order(self) -> bool:
        return "order" in self.columns

    @property
    def has_slug(self) -> bool:
        return ModelValidator.is_slugged(self.model)


def content_type(key: str, model: type[Model], **options) -> ContentType:
    schemas = options.pop("schemas", None) or build_schemas(model)
    prefix = options.pop("prefix", None) or "/" + key.replace("_", "-")
    return ContentType(key=key, prefix=prefix, model=model, schemas=schemas, **options)


CONTENT_TYPES: tuple[ContentType, ...] = (
    content_type(
        "heroes",
        models.Hero,
        schemas=build_schemas(models.Hero, create=HeroCreate, update=HeroUpdate),
        search_fields=("rail_title", "subtitle", "body"),
    ),
    content_type(
        "energy_solutions",
        models.EnergySolution,
        search_fields=("title", "description"),
    ),
    content_type(
        "products",
        models.Product,
        schemas=build_schemas(
            models.Product, create=ProductCreate, update=ProductUpdate
        ),
        search_fields=("title", "description"),
        lookups={"category": "category"},
        unique_title=True,
    ),
    content_type(
        "projects",
        models.Project,
        search_fields=("title", "description", "client", "location"),
        lookups={"category": "category", "location": "location"},
        unique_title=True,
    ),
    content_type(
        "testimonials",
        models.Testimonial,
        search_fields=("name", "quote", "company"),
        lookups={"project-type": "project_type"},
    ),
    content_type(
        "team_members",
        models.TeamMember,
        prefix="/team",
        search_fields=("name", "position", "bio"),
        lookups={"department": "department"},
    ),
    content_type(
        "blog_posts",
        models.BlogPost,
        search_fields=("title", "excerpt", "content"),
        ordering=("-created_at",),
        count_views=True,
    ),
    content_type(
        "faqs",
        models.Faq,
        search_fields=("question", "answer"),
        lookups={"category": "category"},
    ),
    content_type(
        "careers",
        models.Career,
        search_fields=("title", "description", "department"),
        lookups={"department": "department", "type": "type", "location": "location"},
        unique_title=True,
    ),
    content_type(
        "solar_solutions",
        models.SolarSolution,
        search_fields=("title", "description"),
        lookups={"category": "category"},
    ),
    content_type(
        "categories",
        models.Category,
        search_fields=("name", "description"),
        lookups={"type": "type"},
    ),
    content_type(
        "tags",
        models.Tag,
        search_fields=("name", "description"),
        lookups={"type": "type"},
        ordering=("name",),
    ),
    content_type(
        "menus",
        models.Menu,
        schemas=MENU_SCHEMAS,
        search_fields=("name", "description"),
        lookups={"location": "location"},
        ordering=("name",),
    ),
    content_type(
        "clients",
        models.Client,
        search_fields=("name", "industry", "description"),
        lookups={"industry": "industry"},
    ),
    content_type(
        "timeline",
        models.TimelineEntry,
        search_fields=("year", "title", "description"),
    ),
    content_type(
        "core_values",
        models.CoreValue,
        search_fields=("title", "description"),
    ),
)

MEDIA = content_type(
    "media",
    models.Media,
    search_fields=("name", "original_name", "alt", "caption"),
    lookups={"type": "type", "folder": "folder"},
    ordering=("-created_at",),
)

SINGLETON_TYPES: tuple[ContentType, ...] = (
    content_type("about_hero", models.AboutHero),
    content_type("brand_vision", models.BrandVision),
    content_type("work_environment", models.WorkEnvironment),
    content_type("join_team_cta", models.JoinTeamCta),
)

_SCHEMAS: dict[type[Model], ResourceSchemas] = {
    item.model: item.schemas for item in (*CONTENT_TYPES, MEDIA, *SINGLETON_TYPES)
}
_SCHEMAS[models.Setting] = build_schemas(models.Setting)
_SCHEMAS[models.Contact] = build_schemas(models.Contact)


def schemas_for(model: type[Model]) -> ResourceSchemas:
    """
    Raises:
        KeyError: For a model without registered schemas.
    """
    return _SCHEMAS[model]
