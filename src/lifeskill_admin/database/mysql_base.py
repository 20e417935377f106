from __future__ import annotations

import re
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..common.pagination import PageOptions, QueryResult, order_by_clause
from ..core.exceptions import DuplicateRecordError
from .connection import DatabaseConnection

_DUP_KEY_RE = re.compile(r"for key '([^']+)'")


def duplicate_key_name(err: mysql.connector.Error) -> Optional[str]:
    """Name of the unique index a duplicate-entry error refers to.

    MySQL 8 reports ``table.key``; older servers only the key name.
    """

    m = _DUP_KEY_RE.search(str(getattr(err, "msg", "") or err))
    if not m:
        return None
    return m.group(1).rsplit(".", 1)[-1]


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError as e:
        conn.rollback()
        if e.errno == errorcode.ER_DUP_ENTRY:
            raise DuplicateRecordError("Duplicate record", key=duplicate_key_name(e)) from e
        raise
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def where_clause(clauses: Sequence[str]) -> str:
    return f"WHERE {' AND '.join(clauses)}" if clauses else ""


def paginate(
    conn_factory: DatabaseConnection,
    *,
    select_sql: str,
    from_sql: str,
    clauses: Sequence[str],
    params: Sequence[Any],
    options: PageOptions,
    sort_columns: dict[str, str],
    default_order: str,
) -> QueryResult:
    """Run a count query plus one page of rows.

    ``select_sql``/``from_sql`` are trusted fragments written by repositories;
    user values only ever travel through ``params``.
    """

    where = where_clause(clauses)
    order = order_by_clause(options.sort_by, sort_columns, default_order)

    with db_cursor(conn_factory) as (_, cur):
        cur.execute(f"SELECT COUNT(*) AS total FROM {from_sql} {where}", tuple(params))
        total = int((fetchone(cur) or {}).get("total") or 0)

        cur.execute(
            f"SELECT {select_sql} FROM {from_sql} {where} ORDER BY {order} LIMIT %s OFFSET %s",
            tuple(params) + (options.limit, options.offset),
        )
        rows = fetchall(cur)

    return QueryResult(results=rows, page=options.page, limit=options.limit, total_results=total)
