from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.pagination import PageOptions, QueryResult
from ..common.tabular import read_rows
from ..core.exceptions import NotFoundError
from ..schools.repository import SchoolRepository
from .model import NewStudent, Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)

# Column names accepted in uploaded sheets, mapped to entity fields.
_ROW_KEYS = {
    "schoolId": "school_id",
    "name": "name",
    "standard": "standard",
    "gender": "gender",
    "mobNumber": "mob_number",
    "rollNumber": "roll_number",
}


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class StudentService:
    def __init__(self, students: StudentRepository, schools: SchoolRepository):
        self._students = students
        self._schools = schools

    def _require_school(self, school_id: str) -> None:
        if not self._schools.get_by_school_id(school_id):
            raise NotFoundError("School not found")

    def create_student(self, student: NewStudent) -> Student:
        self._require_school(student.school_id)
        return self.get_student(self._students.create(student))

    def get_student(self, student_id: int) -> Student:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError("Student not found")
        return student

    def query_students(self, *, filters: dict, options: PageOptions) -> QueryResult:
        return self._students.query(filters=filters, options=options)

    def update_student(self, student_id: int, update_body: dict) -> Student:
        self.get_student(student_id)
        if update_body.get("school_id"):
            self._require_school(update_body["school_id"])

        student = self._students.update(int(student_id), update_body)
        if not student:
            raise NotFoundError("Student not found")
        return student

    def count_for_schools(self, school_ids: Sequence[str]) -> int:
        return self._students.count_for_schools(school_ids)

    def bulk_upload(self, rows: Optional[Sequence[dict]] = None, *, file_path: Optional[str] = None) -> dict:
        """Insert students from an uploaded sheet.

        Rows without a name or schoolId, or naming an unknown school, are
        returned as rejected; the rest are inserted together.
        """

        records = read_rows(file_path) if file_path else list(rows or [])

        known: dict[str, bool] = {}
        accepted: list[NewStudent] = []
        created: list[dict] = []
        rejected: list[dict] = []

        for record in records:
            fields = {attr: _clean(record.get(key)) for key, attr in _ROW_KEYS.items()}
            school_id = fields["school_id"]
            if not fields["name"] or not school_id:
                rejected.append({**record, "reason": "name and schoolId are required"})
                continue
            if school_id not in known:
                known[school_id] = self._schools.get_by_school_id(school_id) is not None
            if not known[school_id]:
                rejected.append({**record, "reason": "school not found"})
                continue
            accepted.append(NewStudent(**fields))
            created.append(record)

        self._students.create_many(accepted)
        logger.info("student bulk upload: %d created, %d rejected", len(accepted), len(rejected))
        return {
            "created": {"total": len(created), "data": created},
            "rejected": {"total": len(rejected), "data": rejected},
        }
