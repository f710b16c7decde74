from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..core.enums import ActivityAction
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import ActivityEntry
from .repository import ActivityRepository


class MySQLActivityRepository(ActivityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(self, *, user_id: str, action: ActivityAction, description: str, created_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO activity_logs (user_id, action, description, created_at)
                VALUES (%s, %s, %s, %s)
                """,
                (user_id, action.value, description, created_at),
            )
            return int(cur.lastrowid)

    def list_recent(self, limit: int) -> Sequence[ActivityEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.id, a.user_id, a.action, a.description, a.created_at, p.name
                FROM activity_logs a
                LEFT JOIN profiles p ON p.id = a.user_id
                ORDER BY a.created_at DESC, a.id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [
                ActivityEntry(
                    entry_id=int(r["id"]),
                    user_id=str(r["user_id"]),
                    action=r["action"],
                    description=r["description"],
                    created_at=r["created_at"],
                    actor_name=r.get("name"),
                )
                for r in fetchall(cur)
            ]
