from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    TypeVar,
)

from .write import QuerySetWrite

if TYPE_CHECKING:
    from cosmic_db.models import Model


T = TypeVar("T", bound="Model")


class QuerySet(QuerySetWrite[T]):
    """
    Lazy, immutable query builder for a specific ORM model.

    A QuerySet wraps a SQLAlchemy ``Select`` statement and allows query
    composition without executing SQL immediately. Each transformation
    (filter, order_by, limit) returns a new QuerySet instance.

    Execution happens only through terminal methods such as:
        - fetch()
        - first()
        - count()
        - update()
        - delete()

    Examples:
        >>> qs = Product.objects.filter(is_active=True, is_featured=True)
        >>> qs = qs.order_by("order").limit(8)
        >>> products = await qs.fetch(db)
    """


__all__ = ["QuerySet"]
