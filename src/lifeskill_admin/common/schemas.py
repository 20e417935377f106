from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .pagination import PageOptions


class PageQuery(BaseModel):
    """``sortBy``/``limit``/``page`` accepted by every listing endpoint."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    sort_by: Optional[str] = Field(default=None, alias="sortBy")
    limit: Optional[int] = Field(default=None, ge=1)
    page: Optional[int] = Field(default=None, ge=1)

    def page_options(self) -> PageOptions:
        return PageOptions(sort_by=self.sort_by, limit=self.limit or 0, page=self.page or 0)
