from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Generic,
    Type,
    TypeVar,
)

if TYPE_CHECKING:
    from sqlalchemy.sql import Select

    from cosmic_db.models import Model

T = TypeVar("T", bound="Model")


class QuerySetBase(Generic[T]):
    """
    Fundamental state and identity for a QuerySet: the target model and the
    SQLAlchemy Select statement being composed.
    """

    def __init__(self, model: Type[T], stmt: Select):
        self.model: Type[T] = model
        self._stmt: Select = stmt

    def _clone(self, stmt: Select | None = None) -> Any:
        """
        Return a new instance of the current class with updated statement.

        Using self.__class__ keeps the top-most class in the inheritance chain,
        preserving every layer's capabilities in the result.
        """
        return self.__class__(
            self.model,
            stmt if stmt is not None else self._stmt,
        )

    @property
    def statement(self) -> Select:
        return self._stmt
