"""
Listing queries shared by every content resource.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Sequence, TypeVar

from cosmic_core.schemas.parameter import RESERVED_QUERY_KEYS, PaginationParams
from cosmic_core.schemas.response import PageMeta
from cosmic_db import Model, Q, QuerySet
from cosmic_db.expressions import split_lookup
from cosmic_db.schema_generator import python_type
from pydantic import TypeAdapter
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Model)

DEFAULT_ORDERING = ("order",)


def content_queryset(
    model: type[T],
    *,
    active: bool | None = True,
    featured: bool | None = None,
    filters: Mapping[str, Any] | None = None,
) -> QuerySet[T]:
    """
    Base queryset of a listing: visibility flags plus field lookups.

    ``active=None`` / ``featured=None`` leave the flag unfiltered.
    """
    qs = model.objects.all()
    if active is not None:
        qs = qs.filter(is_active=active)
    if featured is not None:
        qs = qs.filter(is_featured=featured)
    if filters:
        qs = qs.filter(**filters)
    return qs


async def list_content(
    db: AsyncSession,
    model: type[T],
    *,
    active: bool | None = True,
    featured: bool | None = None,
    ordering: Iterable[str] = DEFAULT_ORDERING,
    limit: int | None = None,
    offset: int = 0,
    filters: Mapping[str, Any] | None = None,
) -> Sequence[T]:
    """
    Ordered records matching the visibility flags and lookups.

    Ties on the sort keys fall back to insertion order.

    Example:
        >>> await list_content(db, Product, featured=True, limit=8)
        >>> await list_content(db, BlogPost, ordering=["-created_at"], limit=3)
    """
    qs = content_queryset(model, active=active, featured=featured, filters=filters)
    qs = qs.order_by(*ordering, model.id).offset(offset).limit(limit)
    items = await qs.fetch(db)
    logger.debug(
        "Listed %d %s (active=%s, featured=%s, limit=%s)",
        len(items),
        model.__name__,
        active,
        featured,
        limit,
    )
    return items


def search_condition(fields: Iterable[str], term: str) -> Q:
    """
    Case-insensitive substring match on any of ``fields``.

    >>> search_condition(["title", "description"], "panel")
    """
    return Q.any_of(**{f"{name}__icontains": term for name in fields})


def coerce_filters(model: type[Model], query: Mapping[str, str]) -> dict[str, Any]:
    """
    Turn raw query-string pairs into typed lookups.

    Pagination keys are skipped; values are validated against the column's
    Python type, and ``__in`` takes a comma separated list.

    Raises:
        ValueError: For unknown fields.
        pydantic.ValidationError: For values of the wrong type.

    >>> coerce_filters(Product, {"stock__gte": "3", "page": "2"})
    {'stock__gte': 3}
    """
    columns = model.__table__.columns
    lookups: dict[str, Any] = {}

    for key, raw in query.items():
        if key in RESERVED_QUERY_KEYS:
            continue
        field_name, lookup = split_lookup(key)
        if field_name not in columns:
            msg = f"Cannot filter {model.__name__} by unknown field '{field_name}'"
            raise ValueError(msg)

        py_type = python_type(columns[field_name])
        if lookup == "in":
            adapter = TypeAdapter(list[py_type])
            lookups[key] = adapter.validate_python(raw.split(","))
        elif lookup == "isnull":
            lookups[key] = TypeAdapter(bool).validate_python(raw)
        elif lookup in ("contains", "icontains", "startswith", "istartswith"):
            lookups[key] = raw
        else:
            lookups[key] = TypeAdapter(py_type).validate_python(raw)

    return lookups


async def paginate(
    db: AsyncSession,
    qs: QuerySet[T],
    params: PaginationParams,
    *,
    default_sort: str = "-created_at",
) -> tuple[Sequence[T], PageMeta]:
    """
    One page of ``qs`` plus its meta block.

    Example:
        >>> items, meta = await paginate(db, Product.objects.all(), params)
        >>> meta.total_pages
        3
    """
    total = await qs.count(db)
    page = (
        qs.order_by_instructions(params.get_ordering(default_sort))
        .order_by(qs.model.id)
        .offset(params.get_offset())
        .limit(params.limit)
    )
    items = await page.fetch(db)
    meta = PageMeta.build(
        count=len(items), total=total, page=params.page, limit=params.limit
    )
    return items, meta
