from __future__ import annotations

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .repository import RoleRepository


class MySQLRoleRepository(RoleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def has_role(self, user_id: str, role: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS present FROM user_roles WHERE user_id=%s AND role=%s LIMIT 1",
                (user_id, role),
            )
            return fetchone(cur) is not None
