from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchcount, fetchone
from .model import LeaveRequest, LeaveRow
from .repository import LeaveRepository

_COLUMNS = """
    l.id, l.user_id, l.type, l.start_date, l.end_date, l.reason, l.status,
    l.review_notes, l.reviewed_by, l.reviewed_at, l.created_at
"""


def _to_request(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["id"]),
        user_id=str(r["user_id"]),
        leave_type=LeaveType(r["type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        created_at=r["created_at"],
        reviewed_by=str(r["reviewed_by"]) if r.get("reviewed_by") else None,
        reviewed_at=r.get("reviewed_at"),
        review_notes=r.get("review_notes"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        user_id: str,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: str,
        created_at: datetime,
    ) -> LeaveRequest:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leaves (user_id, type, start_date, end_date, reason, status, created_at)
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                """,
                (user_id, leave_type.value, start_date, end_date, reason, LeaveStatus.PENDING.value, created_at),
            )
            request_id = int(cur.lastrowid)
        return LeaveRequest(
            request_id=request_id,
            user_id=user_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=LeaveStatus.PENDING,
            created_at=created_at,
        )

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leaves l WHERE l.id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def decide(
        self,
        *,
        request_id: int,
        status: LeaveStatus,
        reviewed_by: str,
        reviewed_at: datetime,
        review_notes: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leaves
                SET status=%s, reviewed_by=%s, reviewed_at=%s, review_notes=%s
                WHERE id=%s AND status=%s
                """,
                (
                    status.value,
                    reviewed_by,
                    reviewed_at,
                    review_notes,
                    int(request_id),
                    LeaveStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def list_requests(self, *, user_id: Optional[str] = None) -> Sequence[LeaveRow]:
        clauses = ["1=1"]
        params: list[object] = []
        if user_id is not None:
            clauses.append("l.user_id=%s")
            params.append(user_id)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}, p.name
                FROM leaves l
                LEFT JOIN profiles p ON p.id = l.user_id
                WHERE {where}
                ORDER BY l.created_at DESC
                """,
                tuple(params),
            )
            return [LeaveRow(request=_to_request(r), employee_name=r.get("name")) for r in fetchall(cur)]

    def count_by_status(self, status: LeaveStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM leaves WHERE status=%s", (status.value,))
            return fetchcount(cur)
