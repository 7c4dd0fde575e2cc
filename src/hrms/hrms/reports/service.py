from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..attendance.model import AttendanceReportRow
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import Clock, month_bounds, now_local
from ..core.exceptions import ValidationError
from .calculator.base import WorkingHoursCalculator
from .calculator.standard_calculator import StandardWorkingHoursCalculator


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]

    def to_dict(self) -> dict:
        return {"rows": self.rows, "summary": self.summary}


def _hours(minutes: Optional[int]) -> Optional[float]:
    if minutes is None:
        return None
    return round(minutes / 60, 2)


class AttendanceReportService:
    """Read-side views over attendance: admin tables and dashboard numbers."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        calculator: Optional[WorkingHoursCalculator] = None,
        clock: Clock | None = None,
    ):
        self._attendance = attendance
        self._calculator = calculator or StandardWorkingHoursCalculator()
        self._clock = clock or now_local

    def _to_row(self, r: AttendanceReportRow) -> dict:
        return {
            "id": r.attendance_id,
            "user_id": r.user_id,
            "user_name": r.full_name,
            "user_email": r.email,
            "department": r.department,
            "date": r.work_date.isoformat(),
            "check_in": r.check_in.isoformat() if r.check_in else None,
            "check_out": r.check_out.isoformat() if r.check_out else None,
            "status": r.status.value,
            "location": r.location_name,
            "is_out_of_office": r.is_out_of_office,
            "distance_from_office": r.distance_from_office,
            "working_hours": _hours(self._calculator.worked_minutes(r)),
        }

    def build_attendance_report(self, *, start: date, end: date, user_id: Optional[int] = None) -> ReportData:
        if end < start:
            raise ValidationError("End date must not be before start date")

        query_rows = self._attendance.get_report_rows(start_date=start, end_date=end, user_id=user_id)

        summary_map: dict[int, dict] = {}
        out_rows: list[dict] = []

        for r in query_rows:
            out_rows.append(self._to_row(r))

            s = summary_map.get(r.user_id)
            if not s:
                s = {
                    "user_id": r.user_id,
                    "user_name": r.full_name,
                    "days_present": 0,
                    "days_out_of_office": 0,
                    "total_minutes": 0,
                }
                summary_map[r.user_id] = s
            s["days_present"] += 1
            if r.is_out_of_office:
                s["days_out_of_office"] += 1
            s["total_minutes"] += self._calculator.worked_minutes(r) or 0

        summary = [
            {
                "user_id": s["user_id"],
                "user_name": s["user_name"],
                "days_present": s["days_present"],
                "days_out_of_office": s["days_out_of_office"],
                "total_hours": _hours(s["total_minutes"]),
            }
            for s in summary_map.values()
        ]
        summary.sort(key=lambda x: x["total_hours"], reverse=True)
        return ReportData(rows=out_rows, summary=summary)

    def today_overview(self, *, now: datetime | None = None) -> list[dict]:
        """Today's records for every active employee, earliest check-in first."""
        today = (now or self._clock()).date()
        rows = self._attendance.get_report_rows(start_date=today, end_date=today)
        ordered = sorted(rows, key=lambda r: r.check_in or datetime.max)
        return [self._to_row(r) for r in ordered]

    def dashboard_stats(self, *, now: datetime | None = None, pending_approvals: int = 0) -> dict:
        """Today's counts plus the month's attendance rate.

        ``pending_approvals`` is counted by the caller, since only approvers see it.
        """
        today = (now or self._clock()).date()
        counts = self._attendance.get_daily_counts(today)
        month_start, month_end = month_bounds(today)
        present_in_month = self._attendance.count_present_between(month_start, month_end)

        rate = 0.0
        if counts.total_employees:
            rate = round(present_in_month / counts.total_employees * 100, 2)

        return {
            "total_employees": counts.total_employees,
            "present_today": counts.present,
            "late_today": counts.late,
            "out_of_office_today": counts.out_of_office,
            "absent_today": counts.absent,
            "average_working_hours": counts.average_working_hours,
            "attendance_rate": rate,
            "pending_approvals": int(pending_approvals),
        }
