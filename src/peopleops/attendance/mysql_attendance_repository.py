from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchcount, fetchone
from .model import AttendanceRecord, AttendanceRow
from .repository import AttendanceRepository


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["id"]),
        user_id=str(r["user_id"]),
        work_date=r["date"],
        check_in=r.get("check_in"),
        check_out=r.get("check_out"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, user_id, date, check_in, check_out
                FROM attendance
                WHERE user_id=%s AND date=%s
                """,
                (user_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create_checkin(self, *, user_id: str, work_date: date, check_in: datetime) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO attendance (user_id, date, check_in) VALUES (%s, %s, %s)",
                (user_id, work_date, check_in),
            )
            attendance_id = int(cur.lastrowid)
        return AttendanceRecord(
            attendance_id=attendance_id,
            user_id=user_id,
            work_date=work_date,
            check_in=check_in,
            check_out=None,
        )

    def update_checkout(self, *, attendance_id: int, check_out: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET check_out=%s
                WHERE id=%s AND check_out IS NULL
                """,
                (check_out, int(attendance_id)),
            )
            return cur.rowcount > 0

    def list_recent(self, *, limit: int, user_id: Optional[str] = None) -> Sequence[AttendanceRow]:
        clauses = ["1=1"]
        params: list[object] = []
        if user_id is not None:
            clauses.append("a.user_id=%s")
            params.append(user_id)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT a.id, a.user_id, a.date, a.check_in, a.check_out, p.name
                FROM attendance a
                LEFT JOIN profiles p ON p.id = a.user_id
                WHERE {where}
                ORDER BY a.date DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [AttendanceRow(record=_to_record(r), employee_name=r.get("name")) for r in fetchall(cur)]

    def count_for_date(self, work_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM attendance WHERE date=%s", (work_date,))
            return fetchcount(cur)
