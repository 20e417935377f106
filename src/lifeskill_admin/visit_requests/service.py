from __future__ import annotations

from dataclasses import replace

from ..common.pagination import PageOptions, QueryResult
from ..core.exceptions import NotFoundError
from ..schools.repository import SchoolRepository
from .model import NewVisitRequest, VisitRequest
from .repository import VisitRequestRepository


class VisitRequestService:
    def __init__(self, requests: VisitRequestRepository, schools: SchoolRepository):
        self._requests = requests
        self._schools = schools

    def create_request(self, request: NewVisitRequest) -> VisitRequest:
        school = self._schools.get_by_school_id(request.school_id)
        if not school:
            raise NotFoundError("School not found")
        if not request.school_name:
            request = replace(request, school_name=school.name)
        return self._requests.create(request)

    def query_requests(self, *, filters: dict, options: PageOptions) -> QueryResult:
        return self._requests.query(filters=filters, options=options)
