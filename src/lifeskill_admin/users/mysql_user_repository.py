from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_USER_COLUMNS = "user_id, first_name, last_name, mob_number, username, password_hash, role, device_token"


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load(self, cur, where: str, value) -> Optional[User]:
        cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE {where}=%s", (value,))
        row = fetchone(cur)
        if not row:
            return None

        cur.execute(
            "SELECT visit_id FROM trainer_visits WHERE trainer_id=%s ORDER BY position ASC",
            (int(row["user_id"]),),
        )
        visits = tuple(int(r["visit_id"]) for r in fetchall(cur))

        return User(
            user_id=int(row["user_id"]),
            first_name=row.get("first_name"),
            last_name=row.get("last_name"),
            mob_number=row.get("mob_number"),
            username=row["username"],
            password_hash=row["password_hash"],
            role=Role(row["role"]),
            device_token=row.get("device_token"),
            visits=visits,
        )

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._load(cur, "user_id", int(user_id))

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._load(cur, "username", username)

    def create_user(
        self,
        *,
        first_name: Optional[str],
        last_name: Optional[str],
        mob_number: Optional[str],
        username: str,
        password_hash: str,
        role: Role,
        device_token: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(first_name, last_name, mob_number, username, password_hash, role, device_token)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (first_name, last_name, mob_number, username, password_hash, role.value, device_token),
            )
            return int(cur.lastrowid)

    def set_device_token(self, user_id: int, device_token: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET device_token=%s WHERE user_id=%s", (device_token, int(user_id)))
            return cur.rowcount > 0
