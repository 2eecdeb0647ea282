from collections.abc import AsyncGenerator
from typing import Annotated

from cosmic_core.schemas.parameter import PaginationParams
from cosmic_db import Database
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession


def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_db(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncGenerator[AsyncSession, None]:
    """One session per request, closed once the response is sent."""
    async with database.session() as session:
        yield session


def get_pagination(request: Request) -> PaginationParams:
    """
    Pagination and sort keys of the query string.

    Raises:
        pydantic.ValidationError: For malformed values (e.g. ``page=abc``).
    """
    return PaginationParams.model_validate(dict(request.query_params))


DbSession = Annotated[AsyncSession, Depends(get_db)]
Pagination = Annotated[PaginationParams, Depends(get_pagination)]
