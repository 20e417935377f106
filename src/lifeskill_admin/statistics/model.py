from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import iso_datetime


@dataclass(frozen=True)
class Statistic:
    """An aggregate record stored as an opaque JSON document."""

    statistic_id: int
    data: dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {**self.data, "id": self.statistic_id, "createdAt": iso_datetime(self.created_at)}
