from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    user_id: str
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus
    created_at: datetime
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    review_notes: Optional[str] = None

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days + 1


@dataclass(frozen=True)
class LeaveRow:
    """Read-model for the leave table (joined with the owner's name)."""

    request: LeaveRequest
    employee_name: Optional[str]
