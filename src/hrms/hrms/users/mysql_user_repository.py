from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_int, db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_USER_COLUMNS = """
    user_id, email, first_name, last_name, role, department, position,
    manager_id, profile_image_url, is_active
"""


def _to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        email=row["email"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        role=Role(row["role"]),
        department=row.get("department"),
        position=row.get("position"),
        manager_id=as_int(row.get("manager_id")),
        profile_image_url=row.get("profile_image_url"),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def list_active(self, *, department: Optional[str] = None) -> Sequence[User]:
        clauses = ["is_active = 1"]
        params: list[object] = []
        if department:
            clauses.append("department=%s")
            params.append(department)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_USER_COLUMNS}
                FROM users
                WHERE {" AND ".join(clauses)}
                ORDER BY first_name ASC, last_name ASC
                """,
                tuple(params),
            )
            return [_to_user(r) for r in fetchall(cur)]

    def list_reports(self, manager_id: int) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_USER_COLUMNS} FROM users WHERE manager_id=%s AND is_active = 1",
                (int(manager_id),),
            )
            return [_to_user(r) for r in fetchall(cur)]
