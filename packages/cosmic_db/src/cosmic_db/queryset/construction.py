from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
)

from .resolver import QuerySetResolver, T

if TYPE_CHECKING:
    from cosmic_core.schemas.parameter import OrderingInstruction


class QuerySetConstruction(QuerySetResolver[T]):
    """
    Fluent API for building and composing QuerySet transformations.

    Every method returns a new QuerySet, allowing step-by-step construction
    of the query.
    """

    def order_by(self, *criterion: Any) -> Any:
        """
        Add ORDER BY criteria to the query.

        Example:
            >>> Product.objects.order_by("order")
            # SELECT * FROM products ORDER BY "order" ASC;

            >>> BlogPost.objects.order_by("-created_at")
            # SELECT * FROM blog_posts ORDER BY created_at DESC;
        """
        resolved = [self._resolve_sort_key(c) for c in criterion]
        return self._clone(self._stmt.order_by(*resolved))

    def order_by_instructions(self, instructions: list[OrderingInstruction]) -> Any:
        """
        Apply parsed ``(field, direction)`` pairs.

        Example:
            >>> Product.objects.order_by_instructions([("order", "asc")])
        """
        keys = [
            f"-{name}" if direction == "desc" else name
            for name, direction in instructions
        ]
        return self.order_by(*keys) if keys else self

    def limit(self, count: int | None) -> Any:
        """
        Limit the number of records returned. ``None`` leaves it unbounded.

        Example:
            >>> await Product.objects.limit(8).fetch(db)
            # SELECT * FROM products LIMIT 8;
        """
        if count is None:
            return self
        return self._clone(self._stmt.limit(count))

    def offset(self, count: int) -> Any:
        """
        Apply an offset to the result set.
        """
        if not count:
            return self
        return self._clone(self._stmt.offset(count))

    def distinct(self, *criterion: Any) -> Any:
        return self._clone(self._stmt.distinct(*criterion))

    def filter(self, *conditions: Any, **kwargs: object) -> Any:
        """
        Add WHERE criteria to the query.

        Args:
            *conditions: Q objects or raw SQLAlchemy expressions.
            **kwargs: Keyword lookups (e.g., is_active=True, order__gte=2).

        Examples:
            >>> Product.objects.filter(is_active=True, is_featured=True)
            >>> Product.objects.filter(Q(title__icontains="pv") | Q(stock=0))
        """
        if not conditions and not kwargs:
            return self

        stmt = self._stmt

        for cond in conditions:
            expr = self._resolve_condition(cond)
            if expr is not None:
                stmt = stmt.where(expr)

        for key, value in kwargs.items():
            stmt = stmt.where(self._resolve_lookup(key, value))

        return self._clone(stmt)

    def exclude(self, *conditions: Any, **kwargs: object) -> Any:
        """
        Add negative WHERE criteria to the query.

        Example:
            >>> Contact.objects.exclude(status="spam")
        """
        if not conditions and not kwargs:
            return self

        from sqlalchemy import not_

        stmt = self._stmt

        for cond in conditions:
            expr = self._resolve_condition(cond)
            if expr is not None:
                stmt = stmt.where(not_(expr))

        for key, value in kwargs.items():
            stmt = stmt.where(not_(self._resolve_lookup(key, value)))

        return self._clone(stmt)
