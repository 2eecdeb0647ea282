"""
Pydantic request and response schemas derived from model columns.

Column types map onto Python annotations, ``Enum`` columns become
``Literal`` choices and constraints stored in ``Column.info``
(``max_length``, ``ge``, ...) are passed on to ``pydantic.Field``.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any, Callable, Dict, Generic, Literal, TypeAlias, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, create_model
from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Enum,
    Float,
    Integer,
    Numeric,
    String,
    Text,
    Time,
    inspect,
)
from sqlalchemy.orm import DeclarativeBase

T = TypeVar("T", bound=DeclarativeBase)
FieldDefinitions: TypeAlias = Dict[str, tuple[Any, Any]]

# Checked in order; the first matching SQL type wins
PYTHON_TYPES: tuple[tuple[type, Any], ...] = (
    (String, str),
    (Text, str),
    (Integer, int),
    (Numeric, float),
    (Float, float),
    (Boolean, bool),
    (DateTime, datetime),
    (Date, date),
    (Time, time),
    (JSON, Any),
)

FIELD_CONSTRAINTS = frozenset(
    {"min_length", "max_length", "ge", "le", "gt", "lt", "pattern"}
)


def python_type(column: Column[Any]) -> Any:
    """
    Annotation used for ``column`` in generated schemas.

    >>> python_type(Product.__table__.c.order)
    <class 'int'>
    """
    if isinstance(column.type, Enum) and column.type.enums:
        return Literal[tuple(column.type.enums)]
    for sql_type, annotation in PYTHON_TYPES:
        if isinstance(column.type, sql_type):
            return annotation
    return Any


def has_default(column: Column[Any]) -> bool:
    return not (
        column.default is None
        and column.server_default is None
        and column.onupdate is None
        and column.server_onupdate is None
    )


@dataclass(slots=True, frozen=True)
class SchemaConfig:
    """Which columns end up in which schema."""

    exclude: set[str] = field(default_factory=set)
    readonly_fields: set[str] = field(
        default_factory=lambda: {"id", "created_at", "updated_at"},
    )
    # Required in storage but filled by model hooks when omitted
    optional_fields: set[str] = field(default_factory=lambda: {"slug"})
    # Non-column attributes (relationships) added to the response schema
    response_extra: dict[str, Any] = field(default_factory=dict)

    # Explicit whitelists; readonly and excluded fields are still dropped
    create_fields: set[str] | None = None
    update_fields: set[str] | None = None


class SchemaGenerator(Generic[T]):
    """
    Builds Create, Update and Response schemas for one model.

    Create and update payloads are meant to be dumped with
    ``exclude_unset=True`` so omitted fields fall back to column defaults.

    Example:
        >>> generator = SchemaGenerator(Product)
        >>> ProductCreate = generator.create_schema()
        >>> ProductResponse = generator.response_schema()
    """

    def __init__(self, model_class: type[T], config: SchemaConfig | None = None):
        self.model_class = model_class
        self.config = config or SchemaConfig()
        self.columns: list[Column[Any]] = [
            prop.columns[0] for prop in inspect(model_class).column_attrs
        ]

    def _writable(
        self, whitelist: set[str] | None, skip: Callable[[Column[Any]], bool]
    ) -> list[Column[Any]]:
        hidden = self.config.exclude | self.config.readonly_fields
        if whitelist is not None:
            return [
                c for c in self.columns if c.name in whitelist and c.name not in hidden
            ]
        return [c for c in self.columns if c.name not in hidden and not skip(c)]

    @staticmethod
    def _field(
        column: Column[Any], optional: bool, constrained: bool = True
    ) -> tuple[Any, Any]:
        annotation = python_type(column)
        kwargs = (
            {k: v for k, v in column.info.items() if k in FIELD_CONSTRAINTS}
            if constrained
            else {}
        )
        if optional:
            return Union[annotation, None], Field(
                default=None, description=column.comment, **kwargs
            )
        return annotation, Field(description=column.comment, **kwargs)

    def _model(self, suffix: str, fields: FieldDefinitions, **config: Any):
        return create_model(
            f"{self.model_class.__name__}{suffix}",
            __config__=ConfigDict(from_attributes=True, **config),
            **fields,
        )

    def create_schema(self) -> type[BaseModel]:
        """
        Payload of POST requests.

        Primary keys and read-only columns are left out. Columns that are
        nullable, have a default or are listed in ``optional_fields`` may be
        omitted; everything else is required.
        """
        columns = self._writable(self.config.create_fields, lambda c: c.primary_key)
        fields = {
            c.name: self._field(
                c,
                c.nullable or has_default(c) or c.name in self.config.optional_fields,
            )
            for c in columns
        }
        return self._model("Create", fields, extra="ignore")

    def update_schema(self) -> type[BaseModel]:
        """Payload of PUT requests: every writable column, all optional."""
        columns = self._writable(
            self.config.update_fields,
            lambda c: c.primary_key or c.onupdate is not None,
        )
        fields = {c.name: self._field(c, True) for c in columns}
        return self._model("Update", fields, extra="ignore")

    def response_schema(self) -> type[BaseModel]:
        fields: FieldDefinitions = {
            c.name: self._field(c, bool(c.nullable), constrained=False)
            for c in self.columns
            if c.name not in self.config.exclude
        }
        for name, annotation in self.config.response_extra.items():
            fields[name] = (annotation, Field(default=None))
        return self._model("Response", fields)
