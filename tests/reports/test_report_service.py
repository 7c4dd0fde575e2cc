from datetime import date, timedelta

import pytest

from src.hrms.hrms.attendance.model import CheckInput
from src.hrms.hrms.attendance.service import AttendanceService
from src.hrms.hrms.core.exceptions import ValidationError
from src.hrms.hrms.reports.service import AttendanceReportService


@pytest.fixture
def attendance(attendance_repo, users_repo, fixed_now):
    return AttendanceService(attendance_repo, users_repo, clock=lambda: fixed_now)


@pytest.fixture
def reports(attendance_repo, fixed_now):
    return AttendanceReportService(attendance_repo, clock=lambda: fixed_now)


def _work_day(attendance, user_id, start, hours, data=None):
    attendance.check_in(user_id, data, now=start)
    attendance.check_out(user_id, now=start + timedelta(hours=hours))


def test_range_report_rows_and_summary(attendance, reports, fixed_now):
    _work_day(attendance, 3, fixed_now - timedelta(days=1), 8)
    _work_day(
        attendance,
        3,
        fixed_now,
        7.5,
        CheckInput(latitude=26.0, longitude=85.1, reason="client visit"),
    )
    _work_day(attendance, 4, fixed_now, 9)
    attendance.check_in(2, now=fixed_now)

    data = reports.build_attendance_report(start=date(2026, 2, 1), end=date(2026, 2, 2))

    assert len(data.rows) == 4
    open_rows = [r for r in data.rows if r["user_id"] == 2]
    assert open_rows[0]["working_hours"] is None

    summary = {s["user_id"]: s for s in data.summary}
    assert summary[3]["days_present"] == 2
    assert summary[3]["days_out_of_office"] == 1
    assert summary[3]["total_hours"] == 15.5
    assert summary[2]["total_hours"] == 0.0
    assert [s["user_id"] for s in data.summary][0] == 3
    assert data.to_dict()["summary"] == data.summary


def test_range_report_for_one_user(attendance, reports, fixed_now):
    _work_day(attendance, 3, fixed_now, 8)
    _work_day(attendance, 4, fixed_now, 8)

    data = reports.build_attendance_report(start=fixed_now.date(), end=fixed_now.date(), user_id=4)

    assert [r["user_id"] for r in data.rows] == [4]


def test_range_report_rejects_reversed_dates(reports):
    with pytest.raises(ValidationError):
        reports.build_attendance_report(start=date(2026, 2, 2), end=date(2026, 2, 1))


def test_today_overview_is_ordered_by_check_in(attendance, reports, fixed_now):
    attendance.check_in(4, now=fixed_now + timedelta(minutes=30))
    attendance.check_in(3, now=fixed_now)

    rows = reports.today_overview()

    assert [r["user_name"] for r in rows] == ["Priya Sharma", "Rahul Verma"]


def test_dashboard_stats_counts_today_and_month(attendance, reports, fixed_now):
    _work_day(attendance, 3, fixed_now, 8)
    attendance.check_in(4, CheckInput(latitude=26.0, longitude=85.1, reason="client visit"), now=fixed_now)
    attendance.check_in(2, now=fixed_now - timedelta(days=1))

    stats = reports.dashboard_stats()

    assert stats == {
        "total_employees": 4,
        "present_today": 1,
        "late_today": 0,
        "out_of_office_today": 1,
        "absent_today": 2,
        "average_working_hours": 8.0,
        "attendance_rate": 50.0,
        "pending_approvals": 0,
    }


def test_dashboard_stats_with_no_employees(users_repo, attendance_repo, fixed_now):
    users_repo.users_by_id.clear()
    reports = AttendanceReportService(attendance_repo, clock=lambda: fixed_now)

    stats = reports.dashboard_stats()

    assert stats["total_employees"] == 0
    assert stats["attendance_rate"] == 0.0
