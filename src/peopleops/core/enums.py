from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Capability level. MEMBER means no admin row exists in user_roles."""

    ADMIN = "admin"
    MEMBER = "member"


class AttendanceMode(str, Enum):
    """Who is allowed to mark attendance."""

    SELF_SERVICE = "self_service"
    ADMIN_MARKS = "admin_marks"


class AttendanceState(str, Enum):
    ABSENT = "absent"
    CHECKED_IN = "checked_in"
    COMPLETED = "completed"


class LeaveType(str, Enum):
    SICK = "sick"
    VACATION = "vacation"
    PERSONAL = "personal"
    OTHER = "other"


class LeaveStatus(str, Enum):
    """Approval workflow state; APPROVED and REJECTED are terminal."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not LeaveStatus.PENDING


class ActivityAction(str, Enum):
    ATTENDANCE = "attendance"
    LEAVE = "leave"
    PROFILE = "profile"
