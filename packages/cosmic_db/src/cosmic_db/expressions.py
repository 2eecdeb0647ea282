"""
Keyword lookups (``order__gte=2``), composable conditions (``Q``) and column
references usable in bulk updates (``F``).
"""

from __future__ import annotations

import operator
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Protocol,
    runtime_checkable,
)

from sqlalchemy import and_, func, not_, or_

if TYPE_CHECKING:
    from sqlalchemy.sql import ColumnElement

    from .models import Model


@runtime_checkable
class Resolvable(Protocol):
    """Anything that turns into a SQL expression once the model is known."""

    def resolve(self, model: type[Model]) -> ColumnElement[Any] | None: ...


LOOKUPS: dict[str, Callable[[Any, Any], ColumnElement[bool]]] = {
    "exact": operator.eq,
    "ne": operator.ne,
    "gt": operator.gt,
    "gte": operator.ge,
    "lt": operator.lt,
    "lte": operator.le,
    "in": lambda col, value: col.in_(value),
    "iexact": lambda col, value: func.lower(col) == func.lower(value),
    "contains": lambda col, value: col.contains(value),
    "icontains": lambda col, value: func.lower(col).contains(func.lower(value)),
    "startswith": lambda col, value: col.startswith(value),
    "istartswith": lambda col, value: func.lower(col).startswith(func.lower(value)),
    "isnull": lambda col, value: col.is_(None) if value else col.is_not(None),
}


def split_lookup(key: str) -> tuple[str, str]:
    """
    Split a keyword lookup into its field and operator.

    >>> split_lookup("order__gte")
    ('order', 'gte')
    >>> split_lookup("slug")
    ('slug', 'exact')
    """
    field_name, sep, lookup = key.partition("__")
    if "__" in lookup:
        msg = (
            f"Unsupported lookup '{key}'. "
            "Lookups across relationships are not supported."
        )
        raise ValueError(msg)
    return field_name, lookup if sep else "exact"


def column_for(model: type[Model], field_name: str) -> Any:
    """
    Raises:
        ValueError: If the model has no such attribute.
    """
    column = getattr(model, field_name, None)
    if column is None:
        msg = f"Field '{field_name}' not found on model {model.__name__}"
        raise ValueError(msg)
    return column


def build_lookup(model: type[Model], key: str, value: Any) -> ColumnElement[bool]:
    """
    Turn ``key=value`` into a boolean SQL expression on ``model``.

    Raises:
        ValueError: For unknown fields or operators.
    """
    field_name, lookup = split_lookup(key)
    column = column_for(model, field_name)
    try:
        compare = LOOKUPS[lookup]
    except KeyError:
        msg = f"Unsupported lookup '{lookup}'. Supported: {', '.join(LOOKUPS)}"
        raise ValueError(msg) from None

    if isinstance(value, Resolvable):
        value = value.resolve(model)
    return compare(column, value)


class Q:
    """
    A condition tree combined with ``&``, ``|`` and ``~``.

    Children are nested ``Q`` objects, raw SQLAlchemy expressions or
    ``(lookup, value)`` pairs, resolved against a model only when the
    query is built.

    Example:
        >>> Q(title__icontains="solar") | Q(description__icontains="solar")
        >>> ~Q(status="spam")
    """

    AND = "AND"
    OR = "OR"

    def __init__(self, *conditions: Any, **lookups: Any):
        self.children: tuple[Any, ...] = (*conditions, *lookups.items())
        self.connector = self.AND
        self.negated = False

    @classmethod
    def _node(cls, children: tuple[Any, ...], connector: str, negated: bool) -> Q:
        node = cls()
        node.children = children
        node.connector = connector
        node.negated = negated
        return node

    @classmethod
    def any_of(cls, **lookups: Any) -> Q:
        """
        OR together one lookup per keyword.

        >>> Q.any_of(title__icontains="pv", description__icontains="pv")
        """
        return cls._node(tuple(lookups.items()), cls.OR, False)

    def _join(self, other: Any, connector: str) -> Q:
        if not isinstance(other, Q):
            msg = f"Cannot combine Q object with {type(other).__name__}"
            raise TypeError(msg)
        return self._node((self, other), connector, False)

    def __and__(self, other: Q) -> Q:
        return self._join(other, self.AND)

    def __or__(self, other: Q) -> Q:
        return self._join(other, self.OR)

    def __invert__(self) -> Q:
        return self._node(self.children, self.connector, not self.negated)

    def __repr__(self) -> str:
        prefix = "NOT " if self.negated else ""
        return f"<Q {prefix}{self.connector} {list(self.children)!r}>"

    def resolve(self, model: type[Model]) -> ColumnElement[Any] | None:
        parts = []
        for child in self.children:
            if isinstance(child, Q):
                expr = child.resolve(model)
            elif isinstance(child, tuple):
                expr = build_lookup(model, *child)
            else:
                expr = child
            if expr is not None:
                parts.append(expr)

        if not parts:
            return None
        clause = or_(*parts) if self.connector == self.OR else and_(*parts)
        return not_(clause) if self.negated else clause


class F:
    """
    A column reference evaluated by the database, with ``+``, ``-`` and ``*``.

    Example:
        >>> await BlogPost.objects.filter(id=1).update(db, views=F("views") + 1)
    """

    def __init__(self, name: str):
        self.name = name
        self._steps: tuple[tuple[Callable[[Any, Any], Any], Any], ...] = ()

    def _then(self, op: Callable[[Any, Any], Any], operand: Any) -> F:
        ref = F(self.name)
        ref._steps = (*self._steps, (op, operand))
        return ref

    def __add__(self, operand: Any) -> F:
        return self._then(operator.add, operand)

    def __sub__(self, operand: Any) -> F:
        return self._then(operator.sub, operand)

    def __mul__(self, operand: Any) -> F:
        return self._then(operator.mul, operand)

    def __repr__(self) -> str:
        return f"F({self.name!r})"

    def resolve(self, model: type[Model]) -> ColumnElement[Any]:
        expr = column_for(model, self.name)
        for op, operand in self._steps:
            if isinstance(operand, Resolvable):
                operand = operand.resolve(model)
            expr = op(expr, operand)
        return expr
