from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.pagination import PageOptions, QueryResult
from ..core.enums import VisitStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, paginate
from ..schools.model import School
from .model import Visit
from .repository import VisitRepository

_COLUMNS = (
    "v.visit_id, v.trainer_id, v.school_id, v.visit_date, v.visit_time, v.standard, v.status, "
    "v.in_time, v.out_time, v.in_date, v.out_date, v.file, v.file1, v.created_at, v.updated_at"
)
_SCHOOL_COLUMNS = (
    "s.id AS s_id, s.school_id AS s_school_id, s.name AS s_name, s.contact_number AS s_contact_number, "
    "s.address AS s_address, s.udisecode AS s_udisecode, s.district AS s_district, s.block AS s_block"
)
_SORT_COLUMNS = {
    "visitDate": "v.visit_date",
    "time": "v.visit_time",
    "status": "v.status",
    "schoolId": "v.school_id",
    "createdAt": "v.created_at",
}


def _to_visit(r: dict) -> Visit:
    return Visit(
        visit_id=int(r["visit_id"]),
        trainer_id=int(r["trainer_id"]),
        school_id=r["school_id"],
        visit_date=r["visit_date"],
        time=r["visit_time"],
        standard=r.get("standard"),
        status=VisitStatus(r["status"]),
        in_time=r.get("in_time"),
        out_time=r.get("out_time"),
        in_date=r.get("in_date"),
        out_date=r.get("out_date"),
        file=r.get("file"),
        file1=r.get("file1"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _to_school(r: dict) -> School:
    return School(
        id=int(r["s_id"]),
        school_id=r["s_school_id"],
        name=r.get("s_name"),
        contact_number=r.get("s_contact_number"),
        address=r.get("s_address"),
        udisecode=r.get("s_udisecode"),
        district=r.get("s_district"),
        block=r.get("s_block"),
    )


class MySQLVisitRepository(VisitRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _one(self, cur, where: str, params: tuple, order: str = "") -> Optional[Visit]:
        cur.execute(f"SELECT {_COLUMNS} FROM visits v WHERE {where} {order} LIMIT 1", params)
        r = fetchone(cur)
        return _to_visit(r) if r else None

    def get_by_id(self, visit_id: int) -> Optional[Visit]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._one(cur, "v.visit_id=%s", (int(visit_id),))

    def find_slot(self, *, trainer_id: int, school_id: str, visit_date: date, time: str) -> Optional[Visit]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._one(
                cur,
                "v.trainer_id=%s AND v.school_id=%s AND v.visit_date=%s AND v.visit_time=%s",
                (int(trainer_id), school_id, visit_date, time),
            )

    def find_for_school_and_trainer(self, *, school_id: str, trainer_id: int) -> Optional[Visit]:
        with db_cursor(self._conn_factory) as (_, cur):
            visit = self._one(
                cur,
                "v.school_id=%s AND v.trainer_id=%s AND v.status<>%s",
                (school_id, int(trainer_id), VisitStatus.COMPLETED.value),
                "ORDER BY v.visit_date ASC, v.visit_time ASC",
            )
            if visit:
                return visit
            return self._one(
                cur,
                "v.school_id=%s AND v.trainer_id=%s",
                (school_id, int(trainer_id)),
                "ORDER BY v.visit_date DESC, v.visit_time DESC",
            )

    def create_for_trainer(
        self,
        *,
        trainer_id: int,
        school_id: str,
        visit_date: date,
        time: str,
        standard: Optional[str] = None,
    ) -> Visit:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO visits(trainer_id, school_id, visit_date, visit_time, standard, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(trainer_id), school_id, visit_date, time, standard, VisitStatus.SCHEDULED.value),
            )
            visit_id = int(cur.lastrowid)
            cur.execute(
                "INSERT INTO trainer_visits(trainer_id, visit_id) VALUES(%s,%s)",
                (int(trainer_id), visit_id),
            )
            return self._one(cur, "v.visit_id=%s", (visit_id,))

    def save(self, visit: Visit) -> Visit:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE visits
                SET visit_date=%s, visit_time=%s, standard=%s, status=%s,
                    in_time=%s, out_time=%s, in_date=%s, out_date=%s, file=%s, file1=%s
                WHERE visit_id=%s
                """,
                (
                    visit.visit_date,
                    visit.time,
                    visit.standard,
                    visit.status.value,
                    visit.in_time,
                    visit.out_time,
                    visit.in_date,
                    visit.out_date,
                    visit.file,
                    visit.file1,
                    int(visit.visit_id),
                ),
            )
            return self._one(cur, "v.visit_id=%s", (int(visit.visit_id),))

    def delete_for_trainer(self, *, visit_id: int, trainer_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM trainer_visits WHERE trainer_id=%s AND visit_id=%s",
                (int(trainer_id), int(visit_id)),
            )
            cur.execute("DELETE FROM visits WHERE visit_id=%s", (int(visit_id),))
            return cur.rowcount > 0

    def list_for_trainer_with_school(
        self, *, trainer_id: int, status: Optional[VisitStatus] = None
    ) -> Sequence[tuple[Visit, School]]:
        clauses = ["v.trainer_id=%s"]
        params: list[object] = [int(trainer_id)]
        if status is not None:
            clauses.append("v.status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}, {_SCHOOL_COLUMNS}
                FROM visits v
                JOIN schools s ON s.school_id = v.school_id
                WHERE {' AND '.join(clauses)}
                ORDER BY v.visit_date ASC, v.visit_time ASC
                """,
                tuple(params),
            )
            return [(_to_visit(r), _to_school(r)) for r in fetchall(cur)]

    def list_for_school(self, school_id: str) -> Sequence[Visit]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM visits v WHERE v.school_id=%s ORDER BY v.visit_date ASC, v.visit_time ASC",
                (school_id,),
            )
            return [_to_visit(r) for r in fetchall(cur)]

    def school_ids_for_trainer(self, trainer_id: int) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT DISTINCT school_id FROM visits WHERE trainer_id=%s ORDER BY school_id ASC",
                (int(trainer_id),),
            )
            return [r["school_id"] for r in fetchall(cur)]

    def status_counts_for_trainer(self, trainer_id: int) -> dict[str, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT status, COUNT(*) AS total FROM visits WHERE trainer_id=%s GROUP BY status",
                (int(trainer_id),),
            )
            return {r["status"]: int(r["total"]) for r in fetchall(cur)}

    def query(self, *, filters: dict, options: PageOptions) -> QueryResult:
        clauses: list[str] = []
        params: list[object] = []
        if filters.get("trainer_id"):
            clauses.append("v.trainer_id=%s")
            params.append(int(filters["trainer_id"]))
        if filters.get("school_id"):
            clauses.append("v.school_id=%s")
            params.append(filters["school_id"])
        if filters.get("status"):
            clauses.append("v.status=%s")
            params.append(VisitStatus(filters["status"]).value)

        result = paginate(
            self._conn_factory,
            select_sql=_COLUMNS,
            from_sql="visits v",
            clauses=clauses,
            params=params,
            options=options,
            sort_columns=_SORT_COLUMNS,
            default_order="v.visit_date DESC, v.visit_time DESC",
        )
        return result.map(_to_visit)
