from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.validators import optional_text
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import LeaveStatus, LeaveType, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.repository import UserRepository
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

_APPROVER_ROLES = {Role.MANAGER, Role.ADMIN}


class LeaveService:
    def __init__(self, leaves: LeaveRepository, users: UserRepository):
        self._leaves = leaves
        self._users = users

    @staticmethod
    def _parse_type(value: str | LeaveType) -> LeaveType:
        try:
            return LeaveType(value)
        except ValueError:
            raise ValidationError(f"Unknown leave type: {value}")

    def create_leave(
        self,
        *,
        user_id: int,
        leave_type: str | LeaveType,
        start_date: date,
        end_date: date,
        reason: Optional[str] = None,
    ) -> LeaveRequest:
        kind = self._parse_type(leave_type)
        if end_date < start_date:
            raise ValidationError("End date must not be before start date")

        days = (end_date - start_date).days + 1
        leave = self._leaves.create_leave(
            user_id=int(user_id),
            leave_type=kind,
            start_date=start_date,
            end_date=end_date,
            days=days,
            reason=optional_text(reason),
        )
        logger.info("Leave request %s created by user %s (%s, %d days)", leave.request_id, user_id, kind.value, days)
        return leave

    def list_my_leaves(self, *, user_id: int) -> Sequence[LeaveRequest]:
        return self._leaves.list_leaves(user_ids=[int(user_id)], limit=DEFAULT_LIST_LIMIT)

    def list_pending(self, *, current_role: Role, approver_id: int) -> Sequence[LeaveRequest]:
        """Admins see every pending request, managers only their direct reports'."""
        if current_role not in _APPROVER_ROLES:
            raise AuthorizationError("Access denied")

        user_ids = None
        if current_role == Role.MANAGER:
            user_ids = [u.user_id for u in self._users.list_reports(int(approver_id))]
        return self._leaves.list_leaves(status=LeaveStatus.PENDING, user_ids=user_ids, limit=DEFAULT_LIST_LIMIT)

    def decide_leave(
        self,
        *,
        current_role: Role,
        approver_id: int,
        request_id: int,
        status: str | LeaveStatus,
        notes: Optional[str] = None,
    ) -> LeaveRequest:
        if current_role not in _APPROVER_ROLES:
            raise AuthorizationError("Access denied")

        try:
            target = LeaveStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown leave status: {status}")
        if target == LeaveStatus.PENDING:
            raise ValidationError("A leave request can only be approved or rejected")

        req = self._leaves.get_leave(request_id=int(request_id))
        if not req:
            raise ValidationError("Leave request not found")
        if req.status != LeaveStatus.PENDING:
            raise ValidationError("Leave request has already been processed")

        if current_role == Role.MANAGER:
            owner = self._users.get_by_id(req.user_id)
            if not owner or owner.manager_id != int(approver_id):
                raise AuthorizationError("You can only decide requests of your own reports")

        ok = self._leaves.decide_leave(
            request_id=req.request_id,
            status=target,
            approver_id=int(approver_id),
            approver_notes=optional_text(notes),
        )
        if not ok:
            raise ValidationError("Leave request has already been processed")

        logger.info("Leave request %s %s by user %s", req.request_id, target.value, approver_id)
        decided = self._leaves.get_leave(request_id=req.request_id)
        if decided is None:
            raise ValidationError("Leave request not found")
        return decided
