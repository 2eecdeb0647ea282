from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
)

from cosmic_db.expressions import Resolvable, build_lookup

from .base import QuerySetBase, T

if TYPE_CHECKING:
    from sqlalchemy.sql import ColumnElement


class QuerySetResolver(QuerySetBase[T]):
    """
    Turns conditions, keyword lookups and sort keys into SQL against the
    QuerySet's model.
    """

    def _resolve_condition(self, cond: Any) -> ColumnElement[bool] | None:
        """Q objects are resolved; raw SQLAlchemy expressions pass through."""
        if isinstance(cond, Resolvable):
            return cond.resolve(self.model)
        return cond

    def _resolve_lookup(self, key: str, value: Any) -> ColumnElement[bool]:
        """
        Resolve a keyword lookup such as ``category="inverters"`` or
        ``order__gte=2``.

        Raises:
            ValueError: For unknown fields or operators.
        """
        return build_lookup(self.model, key, value)

    def _resolve_values(self, values: dict[str, Any]) -> dict[str, Any]:
        """Resolve ``F`` expressions among the values of a bulk update."""
        return {
            key: value.resolve(self.model) if isinstance(value, Resolvable) else value
            for key, value in values.items()
        }

    def _resolve_sort_key(self, key: Any) -> Any:
        """
        ``"order"`` sorts ascending and ``"-created_at"`` descending.

        Column expressions pass through unchanged.

        Raises:
            ValueError: For names that are not columns of the model.
        """
        if not isinstance(key, str):
            return key

        name = key.removeprefix("-")
        if name not in self.model.__table__.columns:
            msg = f"Cannot sort {self.model.__name__} by unknown field '{name}'"
            raise ValueError(msg)
        column = getattr(self.model, name)
        return column.desc() if key.startswith("-") else column.asc()
