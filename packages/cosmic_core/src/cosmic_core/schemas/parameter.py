from typing import Annotated, List, Literal, Self, Tuple, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, model_validator

from cosmic_core.config import cosmic_settings

SortDirection: TypeAlias = Literal["asc", "desc"]
OrderingInstruction: TypeAlias = Tuple[str, SortDirection]

# Query keys consumed by the listing machinery; everything else is a field filter.
RESERVED_QUERY_KEYS = frozenset(
    {"page", "sort", "limit", "fields", "search", "q", "direction"}
)


class PaginationParams(BaseModel):
    """
    Pagination and sort schema for listing requests.

    Examples
    --------
    Default initialization::

        >>> params = PaginationParams()
        >>> params.page, params.get_offset()
        (1, 0)

    Page-based offset calculation::

        >>> PaginationParams(page=3, limit=10).get_offset()
        20

    Multi-field sort parsing::

        >>> PaginationParams(sort="-order,created_at").get_ordering()
        [('order', 'desc'), ('created_at', 'asc')]
    """

    model_config = ConfigDict(
        populate_by_name=True,
        # Extra query params are field filters, not errors
        extra="ignore",
    )

    page: Annotated[int, Field(default=1, description="1-indexed page number")]

    limit: Annotated[
        int,
        Field(default=cosmic_settings.DEFAULT_PAGE_SIZE, description="Items per page"),
    ]

    sort: Annotated[
        str | None, Field(default=None, description="Format: 'field1,-field2'")
    ]

    direction: Annotated[
        SortDirection | None,
        Field(default=None, description="Forces the direction of every sort field"),
    ]

    @model_validator(mode="after")
    def _validate_bounds(self) -> Self:
        """
        Clamps values to system limits.

        >>> PaginationParams(limit=9999).limit
        100
        """
        self.limit = max(1, min(self.limit, cosmic_settings.MAX_PAGE_SIZE))
        self.page = max(1, self.page)
        return self

    def get_offset(self) -> int:
        return (self.page - 1) * self.limit

    def get_ordering(
        self, default: str = "-created_at"
    ) -> List[OrderingInstruction]:
        """
        Parses the sort string into typed instructions.

        Without an explicit sort the default applies, and ``direction``
        overrides any per-field prefix.

        >>> PaginationParams(sort="title", direction="desc").get_ordering()
        [('title', 'desc')]
        """
        raw = self.sort or default
        instructions: List[OrderingInstruction] = []
        for part in raw.split(","):
            field = part.strip()
            if not field:
                continue
            if field.startswith("-"):
                instructions.append((field[1:], "desc"))
            else:
                instructions.append((field, "asc"))

        if self.direction is not None:
            instructions = [(name, self.direction) for name, _ in instructions]
        return instructions
