from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, AttendanceRow


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(self, *, user_id: str, work_date: date, check_in: datetime) -> AttendanceRecord:
        """Insert today's row.

        Raises DuplicateError when (user_id, work_date) already exists; the
        store's unique key is the only source of truth for that rule.
        """

        raise NotImplementedError

    def update_checkout(self, *, attendance_id: int, check_out: datetime) -> bool:
        """Set check_out only if it is still empty. Returns False otherwise."""

        raise NotImplementedError

    def list_recent(self, *, limit: int, user_id: Optional[str] = None) -> Sequence[AttendanceRow]:
        """Ordered by date descending; all users when user_id is None."""

        raise NotImplementedError

    def count_for_date(self, work_date: date) -> int:
        raise NotImplementedError
