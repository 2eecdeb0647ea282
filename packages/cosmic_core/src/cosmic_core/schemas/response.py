"""
Response envelope shared by every endpoint.
"""

import math
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class PageMeta(BaseModel):
    """
    Pagination details attached to listing responses.

    Example:
        >>> PageMeta.build(count=10, total=42, page=1, limit=10).total_pages
        5
    """

    count: int = Field(..., description="Items in this page")
    total: int = Field(..., description="Items across all pages")
    page: int = Field(default=1, description="1-indexed page number")
    limit: int = Field(default=10, description="Maximum items per page")
    total_pages: int = Field(default=0, description="Number of pages")

    @classmethod
    def build(cls, *, count: int, total: int, page: int, limit: int) -> "PageMeta":
        return cls(
            count=count,
            total=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit) if limit else 0,
        )


class Envelope(BaseModel, Generic[T]):
    """
    The ``{success, data, message, meta}`` wrapper.

    Example:
        >>> Envelope[int](data=3).dump()
        {'success': True, 'data': 3}
        >>> Envelope.fail("Product not found").dump()
        {'success': False, 'message': 'Product not found'}
    """

    model_config = ConfigDict(from_attributes=True)

    success: bool = True
    data: T | None = None
    message: str | None = None
    meta: PageMeta | None = None

    @classmethod
    def fail(cls, message: str | None = None) -> "Envelope[Any]":
        return cls(success=False, message=message)

    def dump(self) -> dict[str, Any]:
        """JSON-ready dict without the empty top-level keys."""
        payload = self.model_dump(mode="json")
        return {key: value for key, value in payload.items() if value is not None}
