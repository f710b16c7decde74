from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..activity.repository import ActivityRepository
from ..common.datetime_utils import now_local
from ..common.validators import optional_text, require_date_order, require_non_empty
from ..core.enums import ActivityAction, LeaveStatus, LeaveType
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..roles.resolver import RoleResolver
from .model import LeaveRequest, LeaveRow
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    """Leave workflow: Pending -> Approved | Rejected, decided once by an admin."""

    def __init__(self, leaves: LeaveRepository, activity: ActivityRepository, roles: RoleResolver):
        self._leaves = leaves
        self._activity = activity
        self._roles = roles

    @staticmethod
    def _parse_type(value) -> LeaveType:
        try:
            return LeaveType(value)
        except ValueError:
            raise ValidationError("Invalid leave type")

    def submit(
        self,
        owner_id: str,
        *,
        leave_type: LeaveType | str,
        start_date: date,
        end_date: date,
        reason: str,
        now: Optional[datetime] = None,
    ) -> LeaveRequest:
        leave_type = self._parse_type(leave_type)
        require_date_order(start_date, end_date)
        reason = require_non_empty(reason, "Reason")
        now = now or now_local()

        request = self._leaves.create(
            user_id=owner_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            created_at=now,
        )
        logger.info("Leave request %s submitted by %s", request.request_id, owner_id)
        self._activity.append(
            user_id=owner_id,
            action=ActivityAction.LEAVE,
            description=f"Requested {leave_type.value} leave ({start_date:%Y-%m-%d} to {end_date:%Y-%m-%d})",
            created_at=now,
        )
        return request

    def approve(
        self,
        actor_id: str,
        request_id: int,
        *,
        review_notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> LeaveRequest:
        return self._decide(actor_id, request_id, LeaveStatus.APPROVED, review_notes=review_notes, now=now)

    def reject(
        self,
        actor_id: str,
        request_id: int,
        *,
        review_notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> LeaveRequest:
        return self._decide(actor_id, request_id, LeaveStatus.REJECTED, review_notes=review_notes, now=now)

    def _decide(
        self,
        actor_id: str,
        request_id: int,
        status: LeaveStatus,
        *,
        review_notes: Optional[str],
        now: Optional[datetime],
    ) -> LeaveRequest:
        if not self._roles.is_admin(actor_id):
            raise AuthorizationError("Only administrators can review leave requests")

        request = self._leaves.get(int(request_id))
        if not request:
            raise NotFoundError("Leave request not found")
        if request.status.is_terminal:
            raise ValidationError("Leave request has already been reviewed")

        now = now or now_local()
        notes = optional_text(review_notes)
        ok = self._leaves.decide(
            request_id=request.request_id,
            status=status,
            reviewed_by=actor_id,
            reviewed_at=now,
            review_notes=notes,
        )
        if not ok:
            # decided concurrently by another admin
            raise ValidationError("Leave request has already been reviewed")

        logger.info("Leave request %s %s by %s", request.request_id, status.value, actor_id)
        self._activity.append(
            user_id=actor_id,
            action=ActivityAction.LEAVE,
            description=f"{status.value.capitalize()} a {request.leave_type.value} leave request",
            created_at=now,
        )
        return LeaveRequest(
            request_id=request.request_id,
            user_id=request.user_id,
            leave_type=request.leave_type,
            start_date=request.start_date,
            end_date=request.end_date,
            reason=request.reason,
            status=status,
            created_at=request.created_at,
            reviewed_by=actor_id,
            reviewed_at=now,
            review_notes=notes,
        )

    def list_requests(self, actor_id: str) -> list[LeaveRow]:
        if self._roles.is_admin(actor_id):
            return list(self._leaves.list_requests())
        return list(self._leaves.list_requests(user_id=actor_id))
