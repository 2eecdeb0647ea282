from __future__ import annotations

import logging
from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING, Any, ClassVar, Self

from cosmic_core.text import should_derive_slug, slugify
from sqlalchemy import (
    Boolean,
    DateTime,
    Integer,
    String,
    event,
    false,
    func,
    inspect,
    text,
    true,
)
from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from .exceptions import DoesNotExistError, MultipleObjectsReturnedError

if TYPE_CHECKING:
    from .manager import ModelManager

logger = logging.getLogger(__name__)


class Model(AsyncAttrs, DeclarativeBase):
    """
    Declarative base of the content tables: integer `id` primary key and an
    `objects` manager attached to every concrete subclass.

    Example:
        >>> class Faq(Model):
        ...     __tablename__ = "faqs"
        ...     question: Mapped[str] = mapped_column()
    """

    __abstract__ = True
    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    objects: ClassVar[ModelManager[Self]]  # type: ignore[invalid-type-arguments]

    # Human readable name used in error messages ("Product not found")
    verbose_name: ClassVar[str | None] = None

    # Model-specific exception aliases
    DoesNotExist = DoesNotExistError
    MultipleObjectsReturned = MultipleObjectsReturnedError

    def __init_subclass__(cls, **kwargs: Any):
        super().__init_subclass__(**kwargs)
        from .manager import ModelManager

        if not cls.__dict__.get("__abstract__"):
            cls.objects = ModelManager(cls)

    @classmethod
    def get_verbose_name(cls) -> str:
        return cls.verbose_name or cls.__name__

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r}>"


class TimestampMixin:
    """
    `created_at` set on insert, `updated_at` refreshed on every update.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=func.now(),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        onupdate=func.now(),
        server_onupdate=func.now(),
        nullable=True,
    )


class ActiveMixin:
    """
    Soft-visibility flag. Inactive rows stay in storage but drop out of
    public listings.
    """

    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=true(), nullable=False
    )


class ListableMixin(ActiveMixin):
    """
    Adds the manual `order` sort key (ascending) next to `is_active`.
    """

    order: Mapped[int] = mapped_column(
        Integer, default=0, server_default=text("0"), nullable=False
    )


class FeaturedMixin:
    """
    Marks rows eligible for promoted, size-limited listings.
    """

    is_featured: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )


class SlugMixin:
    """
    Adds a unique `slug` derived from `__slug_source__` on the triggering save.

    The slug is computed only when the row has none and the source field is
    part of the save: on INSERT, or on an UPDATE that changes the source while
    the slug is still empty. A caller supplied slug is never overwritten.

    Example:
        >>> class Tag(Model, SlugMixin):
        ...     __tablename__ = "tags"
        ...     __slug_source__ = "name"
        ...     name: Mapped[str] = mapped_column()
    """

    __slug_source__: ClassVar[str] = "title"

    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True)

    def assign_slug(self, *, source_changed: bool) -> None:
        if not should_derive_slug(self.slug, source_changed):
            return
        source = getattr(self, self.__slug_source__, None) or ""
        self.slug = slugify(source)
        logger.debug(
            "Derived slug %r for %s from %s",
            self.slug,
            type(self).__name__,
            self.__slug_source__,
        )


@event.listens_for(SlugMixin, "before_insert", propagate=True)
def _slug_before_insert(_mapper, _connection, target: SlugMixin) -> None:
    target.assign_slug(source_changed=True)


@event.listens_for(SlugMixin, "before_update", propagate=True)
def _slug_before_update(_mapper, _connection, target: SlugMixin) -> None:
    history = inspect(target).attrs[target.__slug_source__].history
    target.assign_slug(source_changed=history.has_changes())
