from __future__ import annotations

import json
from typing import Any

from ..common.pagination import PageOptions, QueryResult
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, paginate
from .model import Statistic
from .repository import StatisticRepository


def _to_statistic(r: dict) -> Statistic:
    data = r.get("data")
    if isinstance(data, (bytes, bytearray)):
        data = data.decode("utf-8")
    if isinstance(data, str):
        data = json.loads(data)
    return Statistic(statistic_id=int(r["statistic_id"]), data=data or {}, created_at=r.get("created_at"))


class MySQLStatisticRepository(StatisticRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, data: dict[str, Any]) -> Statistic:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO statistics(data) VALUES(%s)", (json.dumps(data, default=str),))
            cur.execute(
                "SELECT statistic_id, data, created_at FROM statistics WHERE statistic_id=%s",
                (int(cur.lastrowid),),
            )
            return _to_statistic(fetchone(cur))

    def query(self, *, filters: dict[str, str], options: PageOptions) -> QueryResult:
        clauses: list[str] = []
        params: list[object] = []
        for key, value in filters.items():
            clauses.append("JSON_UNQUOTE(JSON_EXTRACT(data, %s)) = %s")
            params.extend([f'$."{key}"', str(value)])

        result = paginate(
            self._conn_factory,
            select_sql="statistic_id, data, created_at",
            from_sql="statistics",
            clauses=clauses,
            params=params,
            options=options,
            sort_columns={"createdAt": "created_at"},
            default_order="statistic_id DESC",
        )
        return result.map(_to_statistic)
