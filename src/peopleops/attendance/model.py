from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import hours_between
from ..core.enums import AttendanceState


def _state(check_in: Optional[datetime], check_out: Optional[datetime]) -> AttendanceState:
    if check_in is None:
        return AttendanceState.ABSENT
    if check_out is None:
        return AttendanceState.CHECKED_IN
    return AttendanceState.COMPLETED


@dataclass(frozen=True)
class AttendanceRecord:
    """One identity's attendance for one calendar day (unique per user/date)."""

    attendance_id: int
    user_id: str
    work_date: date
    check_in: Optional[datetime]
    check_out: Optional[datetime]

    @property
    def state(self) -> AttendanceState:
        return _state(self.check_in, self.check_out)

    @property
    def worked_hours(self) -> Optional[float]:
        if self.check_in is None or self.check_out is None:
            return None
        return hours_between(self.check_in, self.check_out)


@dataclass(frozen=True)
class AttendanceRow:
    """Read-model for the history table (joined with the owner's name)."""

    record: AttendanceRecord
    employee_name: Optional[str]


@dataclass(frozen=True)
class TodayStatus:
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None

    @property
    def state(self) -> AttendanceState:
        return _state(self.check_in, self.check_out)
