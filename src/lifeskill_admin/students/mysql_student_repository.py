from __future__ import annotations

from typing import Optional, Sequence

from ..common.pagination import PageOptions, QueryResult
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, paginate
from .model import STUDENT_FIELDS, NewStudent, Student
from .repository import StudentRepository

_COLUMNS = "student_id, school_id, name, standard, gender, mob_number, roll_number, created_at"
_SORT_COLUMNS = {
    "name": "name",
    "schoolId": "school_id",
    "standard": "standard",
    "createdAt": "created_at",
}
_INSERT_SQL = """
    INSERT INTO students(school_id, name, standard, gender, mob_number, roll_number)
    VALUES(%s,%s,%s,%s,%s,%s)
"""


def _to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["student_id"]),
        school_id=r["school_id"],
        name=r["name"],
        standard=r.get("standard"),
        gender=r.get("gender"),
        mob_number=r.get("mob_number"),
        roll_number=r.get("roll_number"),
        created_at=r.get("created_at"),
    )


def _params(s: NewStudent) -> tuple:
    return (s.school_id, s.name, s.standard, s.gender, s.mob_number, s.roll_number)


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (int(student_id),))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def create(self, student: NewStudent) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_INSERT_SQL, _params(student))
            return int(cur.lastrowid)

    def create_many(self, students: Sequence[NewStudent]) -> int:
        if not students:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(_INSERT_SQL, [_params(s) for s in students])
            return len(students)

    def update(self, student_id: int, fields: dict) -> Optional[Student]:
        sets = [(k, v) for k, v in fields.items() if k in STUDENT_FIELDS]
        if sets:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"UPDATE students SET {', '.join(f'{k}=%s' for k, _ in sets)} WHERE student_id=%s",
                    tuple(v for _, v in sets) + (int(student_id),),
                )
        return self.get_by_id(student_id)

    def query(self, *, filters: dict, options: PageOptions) -> QueryResult:
        clauses: list[str] = []
        params: list[object] = []
        if filters.get("name"):
            clauses.append("name LIKE %s")
            params.append(f"%{filters['name']}%")
        if filters.get("school_id"):
            clauses.append("school_id=%s")
            params.append(filters["school_id"])

        result = paginate(
            self._conn_factory,
            select_sql=_COLUMNS,
            from_sql="students",
            clauses=clauses,
            params=params,
            options=options,
            sort_columns=_SORT_COLUMNS,
            default_order="student_id ASC",
        )
        return result.map(_to_student)

    def count_for_schools(self, school_ids: Sequence[str]) -> int:
        ids = list(dict.fromkeys(school_ids))
        if not ids:
            return 0
        placeholders = ", ".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM students WHERE school_id IN ({placeholders})", tuple(ids))
            return int((fetchone(cur) or {}).get("total") or 0)
