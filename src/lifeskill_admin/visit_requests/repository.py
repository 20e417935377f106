from __future__ import annotations

from typing import Protocol

from ..common.pagination import PageOptions, QueryResult
from .model import NewVisitRequest, VisitRequest


class VisitRequestRepository(Protocol):
    def create(self, request: NewVisitRequest) -> VisitRequest:
        raise NotImplementedError

    def query(self, *, filters: dict, options: PageOptions) -> QueryResult:
        raise NotImplementedError
