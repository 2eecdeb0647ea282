from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from .exceptions import DoesNotExistError, MultipleObjectsReturnedError, WriteError
from .models import Model
from .queryset import QuerySet

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T", bound=Model)
PrimaryKey = int | str

logger = logging.getLogger(__name__)


def _driver_message(error: SQLAlchemyError) -> str:
    """The database driver's own error text, without SQLAlchemy's statement dump."""
    orig = getattr(error, "orig", None)
    return str(orig) if orig is not None else str(error)


class ModelManager(Generic[T]):
    """
    ``Model.objects``: starts QuerySets and performs single-row reads and
    writes for one content model.

    Single-record writes go through the ORM unit of work so mapper events
    (slug derivation, timestamps) fire on every save.
    """

    def __init__(self, model: type[T]):
        self._model = model

    def _queryset(self) -> QuerySet[T]:
        return QuerySet(self._model, select(self._model))

    def all(self) -> QuerySet[T]:
        return self._queryset()

    def filter(self, *conditions: Any, **kwargs: Any) -> QuerySet[T]:
        """``Product.objects.filter(category="inverters", is_active=True)``"""
        return self._queryset().filter(*conditions, **kwargs)

    def exclude(self, *conditions: Any, **kwargs: Any) -> QuerySet[T]:
        return self._queryset().exclude(*conditions, **kwargs)

    def order_by(self, *criterion: Any) -> QuerySet[T]:
        return self._queryset().order_by(*criterion)

    async def first(self, db: AsyncSession) -> T | None:
        return await self._queryset().order_by(self._model.id).first(db)

    async def count(self, db: AsyncSession) -> int:
        return await self._queryset().count(db)

    async def get(self, db: AsyncSession, *conditions: Any, **kwargs: Any) -> T:
        """
        Fetch exactly one row.

        Raises:
            DoesNotExistError: If no object matches.
            MultipleObjectsReturnedError: If more than one object matches.
        """
        stmt = self._queryset().filter(*conditions, **kwargs).statement.limit(2)
        result = await db.execute(stmt)
        rows = result.scalars().all()

        if not rows:
            msg = f"{self._model.get_verbose_name()} not found"
            raise DoesNotExistError(msg, model_name=self._model.__name__)
        if len(rows) > 1:
            msg = f"get() returned more than one {self._model.__name__}"
            raise MultipleObjectsReturnedError(msg)

        return rows[0]

    async def get_or_none(
        self, db: AsyncSession, *conditions: Any, **kwargs: Any
    ) -> T | None:
        try:
            return await self.get(db, *conditions, **kwargs)
        except DoesNotExistError:
            return None

    async def get_by_pk(self, db: AsyncSession, pk: PrimaryKey) -> T:
        return await self.get(db, self._model.id == pk)

    async def create(self, db: AsyncSession, **fields: Any) -> T:
        """
        Insert a row built from ``fields``.

        Raises:
            WriteError: If the database rejects the row (e.g. duplicate slug).
        """
        return await self.save(db, self._model(**fields))

    async def save(self, db: AsyncSession, instance: T) -> T:
        """
        Commit a new or changed instance and reload server-side values.
        """
        try:
            db.add(instance)
            await db.commit()
            await db.refresh(instance)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.warning(
                "Write rejected for %s: %s", self._model.__name__, _driver_message(e)
            )
            raise WriteError(_driver_message(e)) from e

        logger.info("Saved %s id=%s", self._model.__name__, instance.id)
        return instance

    async def update(self, db: AsyncSession, pk: PrimaryKey, **fields: Any) -> T:
        """
        Assign ``fields`` to the row with id ``pk`` and save it.

        Raises:
            DoesNotExistError: If the record with the given PK does not exist.
            WriteError: If a database integrity or connection error occurs.
        """
        instance = await self.get_by_pk(db, pk)
        for name, value in fields.items():
            setattr(instance, name, value)
        return await self.save(db, instance)

    async def update_or_create(
        self,
        db: AsyncSession,
        defaults: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> tuple[T, bool]:
        """
        Apply ``defaults`` to the row matching ``kwargs``, inserting it when
        absent. The flag in the result is True for an insert.
        """
        instance = await self.get_or_none(db, **kwargs)
        if instance is None:
            created = await self.create(db, **{**kwargs, **(defaults or {})})
            return created, True
        if defaults:
            instance = await self.update(db, instance.id, **defaults)
        return instance, False

    async def delete_by_pk(
        self,
        db: AsyncSession,
        pk: PrimaryKey,
        *,
        raise_if_missing: bool = True,
    ) -> int:
        """
        Remove the row with id ``pk``; returns 1, or 0 when it is absent and
        ``raise_if_missing`` is off.

        ORM-level cascades (e.g. a menu's items) apply.
        """
        instance = await self.get_or_none(db, self._model.id == pk)
        if instance is None:
            if raise_if_missing:
                msg = f"{self._model.get_verbose_name()} not found"
                raise DoesNotExistError(msg, model_name=self._model.__name__)
            return 0

        try:
            await db.delete(instance)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            raise WriteError(_driver_message(e)) from e

        logger.info("Deleted %s id=%s", self._model.__name__, pk)
        return 1
