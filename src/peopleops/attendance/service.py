from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..activity.repository import ActivityRepository
from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import ActivityAction, AttendanceMode
from ..core.exceptions import AuthorizationError, DuplicateError, ValidationError
from ..roles.resolver import RoleResolver
from .model import AttendanceRecord, AttendanceRow, TodayStatus
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Daily check-in/check-out per identity: Absent -> CheckedIn -> Completed.

    In ``SELF_SERVICE`` mode everyone marks their own attendance (admins may
    also mark others) and each transition is written to the activity log. In
    ``ADMIN_MARKS`` mode only admins mark attendance, for anyone.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        activity: ActivityRepository,
        roles: RoleResolver,
        *,
        mode: AttendanceMode = AttendanceMode.SELF_SERVICE,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        self._attendance = attendance
        self._activity = activity
        self._roles = roles
        self._mode = AttendanceMode(mode)
        self._history_limit = int(history_limit)

    @property
    def mode(self) -> AttendanceMode:
        return self._mode

    def can_mark(self, actor_id: str, target_id: Optional[str] = None) -> bool:
        target_id = target_id or actor_id
        if self._roles.is_admin(actor_id):
            return True
        return self._mode is AttendanceMode.SELF_SERVICE and target_id == actor_id

    def _require_can_mark(self, actor_id: str, target_id: str) -> None:
        if not self.can_mark(actor_id, target_id):
            if self._mode is AttendanceMode.ADMIN_MARKS:
                raise AuthorizationError("Only administrators can mark attendance")
            raise AuthorizationError("You can only mark your own attendance")

    def _log(self, actor_id: str, description: str, now: datetime) -> None:
        if self._mode is AttendanceMode.SELF_SERVICE:
            self._activity.append(
                user_id=actor_id,
                action=ActivityAction.ATTENDANCE,
                description=description,
                created_at=now,
            )

    def check_in(self, actor_id: str, target_id: Optional[str] = None, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or now_local()
        target_id = target_id or actor_id
        self._require_can_mark(actor_id, target_id)

        try:
            record = self._attendance.create_checkin(user_id=target_id, work_date=now.date(), check_in=now)
        except DuplicateError:
            if target_id == actor_id:
                raise DuplicateError("You have already checked in today")
            raise DuplicateError("This employee has already checked in today")

        logger.info("Check-in for %s on %s by %s", target_id, record.work_date, actor_id)
        self._log(actor_id, "Checked in for today" if target_id == actor_id else "Marked check-in", now)
        return record

    def check_out(self, actor_id: str, target_id: Optional[str] = None, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or now_local()
        target_id = target_id or actor_id
        self._require_can_mark(actor_id, target_id)

        record = self._attendance.get_for_user_and_date(target_id, now.date())
        if not record or record.check_in is None:
            raise ValidationError("No check-in recorded for today")
        if record.check_out is not None:
            raise ValidationError("You have already checked out today")
        if now < record.check_in:
            raise ValidationError("Check-out time cannot be earlier than check-in time")

        if not self._attendance.update_checkout(attendance_id=record.attendance_id, check_out=now):
            # another request completed the record in between
            raise ValidationError("You have already checked out today")

        logger.info("Check-out for %s on %s by %s", target_id, record.work_date, actor_id)
        self._log(actor_id, "Checked out for today" if target_id == actor_id else "Marked check-out", now)
        return AttendanceRecord(
            attendance_id=record.attendance_id,
            user_id=record.user_id,
            work_date=record.work_date,
            check_in=record.check_in,
            check_out=now,
        )

    def list_attendance(self, actor_id: str, *, limit: Optional[int] = None) -> list[AttendanceRow]:
        limit = int(limit or self._history_limit)
        if self._roles.is_admin(actor_id):
            return list(self._attendance.list_recent(limit=limit))
        return list(self._attendance.list_recent(limit=limit, user_id=actor_id))

    def today_status(self, actor_id: str, *, today: Optional[date] = None) -> TodayStatus:
        today = today or now_local().date()
        record = self._attendance.get_for_user_and_date(actor_id, today)
        if not record:
            return TodayStatus()
        return TodayStatus(check_in=record.check_in, check_out=record.check_out)
