from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceReportRow, DailyCounts


class AttendanceRepository(Protocol):
    """Record store for daily attendance.

    Implementations must enforce uniqueness of (user_id, work_date) and raise
    ``AlreadyCheckedInError`` when an insert violates it.
    """

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 30,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        user_id: int,
        work_date: date,
        check_in: datetime,
        status: AttendanceStatus,
        location_name: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        reason: Optional[str] = None,
        is_out_of_office: bool = False,
        distance_from_office: Optional[int] = None,
    ) -> AttendanceRecord:
        raise NotImplementedError

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out: datetime,
        location_name: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        reason: Optional[str] = None,
        is_out_of_office: bool = False,
        distance_from_office: Optional[int] = None,
    ) -> Optional[AttendanceRecord]:
        """Set check-out fields on a record that has none yet.

        Returns None when nothing was updated (record missing or already checked out).
        """

        raise NotImplementedError

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError

    def get_daily_counts(self, work_date: date) -> DailyCounts:
        raise NotImplementedError

    def count_present_between(self, start_date: date, end_date: date) -> int:
        """Records with status 'present' in the range (active employees only)."""

        raise NotImplementedError
