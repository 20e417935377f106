from __future__ import annotations

import re
from typing import Any

from ..common.pagination import PageOptions, QueryResult
from ..core.exceptions import ValidationError
from .model import Statistic
from .repository import StatisticRepository

_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class StatisticService:
    """Pass-through storage for aggregate documents."""

    def __init__(self, statistics: StatisticRepository):
        self._statistics = statistics

    def create_statistic(self, document: dict[str, Any]) -> Statistic:
        return self._statistics.create(dict(document))

    def query_statistics(self, *, filters: dict[str, str], options: PageOptions) -> QueryResult:
        for key in filters:
            if not _KEY_RE.match(key):
                raise ValidationError(f'"{key}" is not a valid filter key')
        return self._statistics.query(filters=filters, options=options)
