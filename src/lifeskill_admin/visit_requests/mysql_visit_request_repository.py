from __future__ import annotations

from ..common.pagination import PageOptions, QueryResult
from ..core.enums import VisitRequestKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, paginate
from .model import NewVisitRequest, VisitRequest
from .repository import VisitRequestRepository

_COLUMNS = "request_id, kind, school_id, visit_date, visit_time, standard, school_name, school_cluster, created_at"


def _to_request(r: dict) -> VisitRequest:
    return VisitRequest(
        request_id=int(r["request_id"]),
        kind=VisitRequestKind(r["kind"]),
        school_id=r["school_id"],
        visit_date=r["visit_date"],
        time=r.get("visit_time"),
        standard=r.get("standard"),
        school_name=r.get("school_name"),
        school_cluster=r.get("school_cluster"),
        created_at=r.get("created_at"),
    )


class MySQLVisitRequestRepository(VisitRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, request: NewVisitRequest) -> VisitRequest:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO visit_requests(kind, school_id, visit_date, visit_time, standard, school_name, school_cluster)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    request.kind.value,
                    request.school_id,
                    request.visit_date,
                    request.time,
                    request.standard,
                    request.school_name,
                    request.school_cluster,
                ),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM visit_requests WHERE request_id=%s", (int(cur.lastrowid),))
            return _to_request(fetchone(cur))

    def query(self, *, filters: dict, options: PageOptions) -> QueryResult:
        clauses: list[str] = []
        params: list[object] = []
        if filters.get("kind"):
            clauses.append("kind=%s")
            params.append(VisitRequestKind(filters["kind"]).value)
        if filters.get("school_id"):
            clauses.append("school_id=%s")
            params.append(filters["school_id"])

        result = paginate(
            self._conn_factory,
            select_sql=_COLUMNS,
            from_sql="visit_requests",
            clauses=clauses,
            params=params,
            options=options,
            sort_columns={"visitDate": "visit_date", "createdAt": "created_at"},
            default_order="created_at DESC",
        )
        return result.map(_to_request)
