from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRequest, LeaveRow


class LeaveRepository(Protocol):
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
        raise NotImplementedError

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: LeaveStatus,
        reviewed_by: str,
        reviewed_at: datetime,
        review_notes: Optional[str] = None,
    ) -> bool:
        """Move a PENDING request to a terminal status.

        Returns False when the request is missing or no longer pending.
        """

        raise NotImplementedError

    def list_requests(self, *, user_id: Optional[str] = None) -> Sequence[LeaveRow]:
        """Ordered by created_at descending; all users when user_id is None."""

        raise NotImplementedError

    def count_by_status(self, status: LeaveStatus) -> int:
        raise NotImplementedError
