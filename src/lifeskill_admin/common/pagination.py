from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from ..core.constants import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT


@dataclass(frozen=True)
class PageOptions:
    """Query options shared by every paginated listing.

    ``sort_by`` uses the ``field:asc|desc`` format, several criteria separated
    by commas (``visitDate:desc,time:asc``).
    """

    sort_by: Optional[str] = None
    limit: int = DEFAULT_PAGE_LIMIT
    page: int = DEFAULT_PAGE

    def __post_init__(self):
        limit = int(self.limit) if self.limit and int(self.limit) > 0 else DEFAULT_PAGE_LIMIT
        page = int(self.page) if self.page and int(self.page) > 0 else DEFAULT_PAGE
        object.__setattr__(self, "limit", min(limit, MAX_PAGE_LIMIT))
        object.__setattr__(self, "page", page)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_mapping(cls, data: dict) -> "PageOptions":
        return cls(
            sort_by=data.get("sortBy") or None,
            limit=data.get("limit") or DEFAULT_PAGE_LIMIT,
            page=data.get("page") or DEFAULT_PAGE,
        )


@dataclass(frozen=True)
class QueryResult:
    results: list = field(default_factory=list)
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_LIMIT
    total_results: int = 0

    @property
    def total_pages(self) -> int:
        return int(math.ceil(self.total_results / self.limit)) if self.limit else 0

    def map(self, fn: Callable[[Any], Any]) -> "QueryResult":
        return QueryResult(
            results=[fn(r) for r in self.results],
            page=self.page,
            limit=self.limit,
            total_results=self.total_results,
        )

    def to_dict(self) -> dict:
        return {
            "results": list(self.results),
            "page": self.page,
            "limit": self.limit,
            "totalPages": self.total_pages,
            "totalResults": self.total_results,
        }


def order_by_clause(sort_by: Optional[str], columns: dict[str, str], default: str) -> str:
    """Translate ``sortBy`` into an ORDER BY body.

    Only fields listed in ``columns`` (API name -> SQL column) are honoured;
    anything else is ignored so user input never reaches the SQL text.
    """

    parts: list[str] = []
    for criterion in (sort_by or "").split(","):
        criterion = criterion.strip()
        if not criterion:
            continue
        name, _, direction = criterion.partition(":")
        column = columns.get(name.strip())
        if not column:
            continue
        parts.append(f"{column} {'DESC' if direction.strip().lower() == 'desc' else 'ASC'}")
    return ", ".join(parts) or default
