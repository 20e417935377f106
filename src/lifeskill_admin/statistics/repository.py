from __future__ import annotations

from typing import Any, Protocol

from ..common.pagination import PageOptions, QueryResult
from .model import Statistic


class StatisticRepository(Protocol):
    def create(self, data: dict[str, Any]) -> Statistic:
        raise NotImplementedError

    def query(self, *, filters: dict[str, str], options: PageOptions) -> QueryResult:
        """Documents whose top-level keys equal the given (string) values."""

        raise NotImplementedError
