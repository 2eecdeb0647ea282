from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Sequence,
)

from sqlalchemy import func, select

from .construction import QuerySetConstruction, T

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class QuerySetExecution(QuerySetConstruction[T]):
    """
    Terminal methods that emit SQL and return results.
    """

    async def fetch(self, db: AsyncSession) -> Sequence[T]:
        """
        Execute query and return results as model instances.

        Example:
            >>> products = await Product.objects.all().fetch(db)
            # SELECT * FROM products;
        """
        result = await db.execute(self._stmt)
        return result.scalars().unique().all()

    async def first(self, db: AsyncSession) -> T | None:
        """
        Execute query and return the first result or None.

        Example:
            >>> setting = await Setting.objects.first(db)
            # SELECT * FROM settings LIMIT 1;
        """
        result = await db.execute(self._stmt.limit(1))
        return result.scalars().unique().one_or_none()

    async def count(self, db: AsyncSession) -> int:
        """
        Count rows matched by the filters, ignoring ordering and pagination.

        Example:
            >>> await Product.objects.filter(is_active=True).count(db)
            # SELECT count(*) FROM (SELECT ... WHERE is_active) AS anon;
        """
        inner = self._stmt.order_by(None).limit(None).offset(None)
        stmt = select(func.count()).select_from(inner.subquery())
        result = await db.execute(stmt)
        return int(result.scalar_one())

    async def exists(self, db: AsyncSession) -> bool:
        return await self.first(db) is not None

    async def values_list(
        self, db: AsyncSession, field: str, *, distinct: bool = False
    ) -> list[Any]:
        """
        Return a flat list of one column's values.

        Example:
            >>> await Media.objects.values_list(db, "folder", distinct=True)
            ['uploads', 'products']
        """
        col = getattr(self.model, field, None)
        if col is None:
            msg = f"Field '{field}' not found on model {self.model.__name__}"
            raise ValueError(msg)

        stmt = self._stmt.with_only_columns(col)
        if distinct:
            stmt = stmt.distinct()
        result = await db.execute(stmt)
        return list(result.scalars().all())
