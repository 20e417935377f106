from __future__ import annotations

from typing import Optional, Sequence

from ..common.pagination import PageOptions, QueryResult
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, paginate, where_clause
from .model import SCHOOL_FIELDS, NewSchool, School, SchoolAccount
from .repository import SchoolRepository

_COLUMNS = "id, school_id, name, contact_number, address, udisecode, district, block"
_SORT_COLUMNS = {
    "name": "name",
    "schoolId": "school_id",
    "district": "district",
    "block": "block",
    "udisecode": "udisecode",
}


def _to_school(r: dict) -> School:
    return School(
        id=int(r["id"]),
        school_id=r["school_id"],
        name=r.get("name"),
        contact_number=r.get("contact_number"),
        address=r.get("address"),
        udisecode=r.get("udisecode"),
        district=r.get("district"),
        block=r.get("block"),
    )


class MySQLSchoolRepository(SchoolRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_by(self, column: str, value: str) -> Optional[School]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM schools WHERE {column}=%s", (value,))
            r = fetchone(cur)
            return _to_school(r) if r else None

    def get_by_school_id(self, school_id: str) -> Optional[School]:
        return self._get_by("school_id", school_id)

    def get_by_udisecode(self, udisecode: str) -> Optional[School]:
        return self._get_by("udisecode", udisecode)

    def create_with_account(self, *, school: NewSchool, account: SchoolAccount) -> School:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO schools(school_id, name, contact_number, address, udisecode, district, block)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    school.school_id,
                    school.name,
                    school.contact_number,
                    school.address,
                    school.udisecode,
                    school.district,
                    school.block,
                ),
            )
            new_id = int(cur.lastrowid)
            cur.execute(
                """
                INSERT INTO users(first_name, last_name, mob_number, username, password_hash, role)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    account.first_name,
                    account.last_name,
                    account.mob_number,
                    account.username,
                    account.password_hash,
                    account.role.value,
                ),
            )

        return School(
            id=new_id,
            school_id=school.school_id,
            name=school.name,
            contact_number=school.contact_number,
            address=school.address,
            udisecode=school.udisecode,
            district=school.district,
            block=school.block,
        )

    def update(self, school_id: str, fields: dict) -> Optional[School]:
        sets = [(k, v) for k, v in fields.items() if k in SCHOOL_FIELDS]
        if sets:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"UPDATE schools SET {', '.join(f'{k}=%s' for k, _ in sets)} WHERE school_id=%s",
                    tuple(v for _, v in sets) + (school_id,),
                )
        return self.get_by_school_id(school_id)

    def query(self, *, filters: dict, options: PageOptions) -> QueryResult:
        clauses: list[str] = []
        params: list[object] = []
        if filters.get("name"):
            clauses.append("name LIKE %s")
            params.append(f"%{filters['name']}%")
        for key in ("district", "block"):
            if filters.get(key):
                clauses.append(f"{key}=%s")
                params.append(filters[key])

        result = paginate(
            self._conn_factory,
            select_sql=_COLUMNS,
            from_sql="schools",
            clauses=clauses,
            params=params,
            options=options,
            sort_columns=_SORT_COLUMNS,
            default_order="id ASC",
        )
        return result.map(_to_school)

    def list_blocks(self, *, district: Optional[str] = None) -> Sequence[str]:
        clauses = ["block IS NOT NULL", "block <> ''"]
        params: list[object] = []
        if district:
            clauses.append("district=%s")
            params.append(district)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT DISTINCT block FROM schools {where_clause(clauses)} ORDER BY block ASC", tuple(params))
            return [r["block"] for r in fetchall(cur)]

    def list_in_block(self, block: str) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT school_id, name FROM schools WHERE block=%s ORDER BY name ASC", (block,))
            return [{"schoolId": r["school_id"], "name": r.get("name")} for r in fetchall(cur)]
