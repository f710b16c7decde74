from __future__ import annotations

from datetime import date
from typing import Optional

from ..activity.repository import ActivityRepository
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_ACTIVITY_LIMIT
from ..core.enums import LeaveStatus
from ..leaves.repository import LeaveRepository
from ..profiles.repository import ProfileRepository
from .model import DashboardOverview


class DashboardService:
    """Read-only counters and the recent activity feed."""

    def __init__(
        self,
        profiles: ProfileRepository,
        leaves: LeaveRepository,
        attendance: AttendanceRepository,
        activity: ActivityRepository,
        *,
        activity_limit: int = DEFAULT_ACTIVITY_LIMIT,
    ):
        self._profiles = profiles
        self._leaves = leaves
        self._attendance = attendance
        self._activity = activity
        self._activity_limit = int(activity_limit)

    def overview(self, *, today: Optional[date] = None) -> DashboardOverview:
        today = today or now_local().date()
        return DashboardOverview(
            total_employees=self._profiles.count(),
            pending_leaves=self._leaves.count_by_status(LeaveStatus.PENDING),
            today_attendance=self._attendance.count_for_date(today),
            recent_activity=list(self._activity.list_recent(self._activity_limit)),
        )
