from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def create_leave(
        self,
        *,
        user_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        days: int,
        reason: Optional[str],
    ) -> LeaveRequest:
        raise NotImplementedError

    def get_leave(self, *, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_leaves(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        user_ids: Optional[Sequence[int]] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        """Newest first. ``user_ids=None`` means every user."""

        raise NotImplementedError

    def decide_leave(
        self,
        *,
        request_id: int,
        status: LeaveStatus,
        approver_id: int,
        approver_notes: Optional[str] = None,
    ) -> bool:
        """Only a pending request can be decided; returns False otherwise."""

        raise NotImplementedError
