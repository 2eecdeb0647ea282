from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
)

from sqlalchemy import delete, update

from .execution import QuerySetExecution, T

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class QuerySetWrite(QuerySetExecution[T]):
    """
    Bulk operations that modify data in the database.

    These run as single UPDATE / DELETE statements over the QuerySet's
    filters; they bypass ORM hooks such as slug derivation.
    """

    async def update(self, db: AsyncSession, **values: Any) -> int:
        """
        Execute bulk update on the QuerySet and commit.

        Raises:
            ValueError: If the QuerySet has no filters.

        Example:
            >>> await BlogPost.objects.filter(id=1).update(db, views=F("views") + 1)
        """
        where_clause = self._stmt.whereclause
        if where_clause is None:
            msg = "Refusing to update without filters"
            raise ValueError(msg)

        stmt = (
            update(self.model)
            .where(where_clause)
            .values(self._resolve_values(values))
        )
        result = await db.execute(stmt)
        await db.commit()
        return getattr(result, "rowcount", 0)

    async def delete(self, db: AsyncSession) -> int:
        """
        Delete all records matched by the query and commit.

        Raises:
            ValueError: If the QuerySet has no filters.

        Example:
            >>> await Media.objects.filter(id__in=[1, 2]).delete(db)
        """
        where_clause = self._stmt.whereclause
        if where_clause is None:
            msg = "Refusing to delete without filters"
            raise ValueError(msg)

        stmt = delete(self.model).where(where_clause)
        result = await db.execute(stmt)
        await db.commit()
        return getattr(result, "rowcount", 0)
