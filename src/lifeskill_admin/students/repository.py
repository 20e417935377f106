from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..common.pagination import PageOptions, QueryResult
from .model import NewStudent, Student


class StudentRepository(Protocol):
    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def create(self, student: NewStudent) -> int:
        raise NotImplementedError

    def create_many(self, students: Sequence[NewStudent]) -> int:
        """Insert all rows in one transaction; returns the number inserted."""

        raise NotImplementedError

    def update(self, student_id: int, fields: dict) -> Optional[Student]:
        raise NotImplementedError

    def query(self, *, filters: dict, options: PageOptions) -> QueryResult:
        raise NotImplementedError

    def count_for_schools(self, school_ids: Sequence[str]) -> int:
        raise NotImplementedError
