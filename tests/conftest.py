from __future__ import annotations

import dataclasses
from datetime import date, datetime
from itertools import count
from typing import Optional

import pytest

from src.hrms.hrms.attendance.model import AttendanceRecord, AttendanceReportRow, DailyCounts
from src.hrms.hrms.core.enums import AttendanceStatus, ExpenseStatus, LeaveStatus, Role
from src.hrms.hrms.core.exceptions import AlreadyCheckedInError
from src.hrms.hrms.expenses.model import ExpenseClaim
from src.hrms.hrms.leaves.model import LeaveRequest
from src.hrms.hrms.users.model import User


class InMemoryUsers:
    def __init__(self, users: list[User]):
        self.users_by_id = {u.user_id: u for u in users}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users_by_id.get(user_id)

    def list_active(self, *, department=None):
        items = [u for u in self.users_by_id.values() if u.is_active]
        if department:
            items = [u for u in items if u.department == department]
        return sorted(items, key=lambda u: (u.first_name, u.last_name))

    def list_reports(self, manager_id: int):
        return [u for u in self.users_by_id.values() if u.manager_id == manager_id and u.is_active]


class InMemoryAttendance:
    """Record store with the same (user_id, work_date) uniqueness as the MySQL schema."""

    def __init__(self, users: Optional[InMemoryUsers] = None):
        self._by_user_date: dict[tuple[int, date], AttendanceRecord] = {}
        self._ids = count(1)
        self._users = users
        self.inserts = 0
        self.updates = 0

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_user_date.get((user_id, work_date))

    def get_for_user(self, user_id: int, *, start_date=None, end_date=None, limit: int = 30):
        items = [
            r
            for r in self._by_user_date.values()
            if r.user_id == user_id
            and (start_date is None or r.work_date >= start_date)
            and (end_date is None or r.work_date <= end_date)
        ]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def create_checkin(self, *, user_id: int, work_date: date, check_in: datetime, status: AttendanceStatus, **fields):
        key = (user_id, work_date)
        if key in self._by_user_date:
            raise AlreadyCheckedInError()
        rec = AttendanceRecord(
            attendance_id=next(self._ids),
            user_id=user_id,
            work_date=work_date,
            check_in=check_in,
            check_out=None,
            status=status,
            **fields,
        )
        self._by_user_date[key] = rec
        self.inserts += 1
        return rec

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out: datetime,
        location_name=None,
        latitude=None,
        longitude=None,
        reason=None,
        is_out_of_office=False,
        distance_from_office=None,
    ):
        for key, rec in self._by_user_date.items():
            if rec.attendance_id == attendance_id and rec.check_out is None:
                updated = dataclasses.replace(
                    rec,
                    check_out=check_out,
                    check_out_location_name=location_name,
                    check_out_latitude=latitude,
                    check_out_longitude=longitude,
                    check_out_reason=reason,
                    is_out_of_office_check_out=is_out_of_office,
                    check_out_distance_from_office=distance_from_office,
                )
                self._by_user_date[key] = updated
                self.updates += 1
                return updated
        return None

    def put(self, record: AttendanceRecord) -> AttendanceRecord:
        self._by_user_date[(record.user_id, record.work_date)] = record
        return record

    def _active_users(self) -> dict[int, User]:
        if not self._users:
            return {}
        return {u.user_id: u for u in self._users.list_active()}

    def get_report_rows(self, *, start_date: date, end_date: date, user_id=None):
        users = self._active_users()
        rows = []
        for r in self._by_user_date.values():
            u = users.get(r.user_id)
            if not u or not (start_date <= r.work_date <= end_date):
                continue
            if user_id is not None and r.user_id != user_id:
                continue
            rows.append(
                AttendanceReportRow(
                    attendance_id=r.attendance_id,
                    user_id=r.user_id,
                    full_name=u.full_name,
                    email=u.email,
                    department=u.department,
                    work_date=r.work_date,
                    check_in=r.check_in,
                    check_out=r.check_out,
                    status=r.status,
                    location_name=r.location_name,
                    is_out_of_office=r.is_out_of_office,
                    distance_from_office=r.distance_from_office,
                )
            )
        rows.sort(key=lambda x: (x.work_date, x.check_in), reverse=True)
        return rows

    def get_daily_counts(self, work_date: date) -> DailyCounts:
        users = self._active_users()
        today = [r for r in self._by_user_date.values() if r.work_date == work_date and r.user_id in users]
        hours = [(r.check_out - r.check_in).total_seconds() / 3600 for r in today if r.check_out and r.check_in]
        return DailyCounts(
            total_employees=len(users),
            present=sum(1 for r in today if r.status == AttendanceStatus.PRESENT),
            late=sum(1 for r in today if r.status == AttendanceStatus.LATE),
            out_of_office=sum(1 for r in today if r.status == AttendanceStatus.OUT_OF_OFFICE),
            absent=len(users) - len(today),
            average_working_hours=round(sum(hours) / len(hours), 2) if hours else 0.0,
        )

    def count_present_between(self, start_date: date, end_date: date) -> int:
        users = self._active_users()
        return sum(
            1
            for r in self._by_user_date.values()
            if r.user_id in users and r.status == AttendanceStatus.PRESENT and start_date <= r.work_date <= end_date
        )


class InMemoryLeaves:
    def __init__(self, now: datetime):
        self._now = now
        self._ids = count(1)
        self.items: dict[int, LeaveRequest] = {}

    def create_leave(self, *, user_id, leave_type, start_date, end_date, days, reason):
        rid = next(self._ids)
        self.items[rid] = LeaveRequest(
            request_id=rid,
            user_id=user_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            days=days,
            reason=reason,
            status=LeaveStatus.PENDING,
            created_at=self._now,
        )
        return self.items[rid]

    def get_leave(self, *, request_id):
        return self.items.get(int(request_id))

    def list_leaves(self, *, status=None, user_ids=None, limit=200):
        items = [
            lv
            for lv in self.items.values()
            if (status is None or lv.status == status) and (user_ids is None or lv.user_id in user_ids)
        ]
        items.sort(key=lambda lv: lv.request_id, reverse=True)
        return items[:limit]

    def decide_leave(self, *, request_id, status, approver_id, approver_notes=None):
        req = self.items.get(int(request_id))
        if not req or req.status != LeaveStatus.PENDING:
            return False
        self.items[req.request_id] = dataclasses.replace(
            req, status=status, approver_id=approver_id, approver_notes=approver_notes, updated_at=self._now
        )
        return True


class InMemoryExpenses:
    def __init__(self):
        self._ids = count(1)
        self.items: dict[int, ExpenseClaim] = {}

    def create_claim(self, *, user_id, title, amount, category, description, receipt_url, submitted_at):
        cid = next(self._ids)
        self.items[cid] = ExpenseClaim(
            claim_id=cid,
            user_id=user_id,
            title=title,
            amount=amount,
            category=category,
            status=ExpenseStatus.SUBMITTED,
            submitted_at=submitted_at,
            description=description,
            receipt_url=receipt_url,
        )
        return self.items[cid]

    def get_claim(self, *, claim_id):
        return self.items.get(int(claim_id))

    def list_claims(self, *, status=None, user_ids=None, limit=200):
        items = [
            c
            for c in self.items.values()
            if (status is None or c.status == status) and (user_ids is None or c.user_id in user_ids)
        ]
        items.sort(key=lambda c: c.claim_id, reverse=True)
        return items[:limit]

    def update_status(self, *, claim_id, from_status, to_status, approver_id, approver_notes, changed_at):
        claim = self.items.get(int(claim_id))
        if not claim or claim.status != from_status:
            return False
        changes = {"status": to_status, "approver_id": approver_id}
        if approver_notes is not None:
            changes["approver_notes"] = approver_notes
        if to_status == ExpenseStatus.APPROVED:
            changes["approved_at"] = changed_at
        elif to_status == ExpenseStatus.REIMBURSED:
            changes["reimbursed_at"] = changed_at
        self.items[claim.claim_id] = dataclasses.replace(claim, **changes)
        return True


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 8, 30, 0)


@pytest.fixture
def people() -> list[User]:
    return [
        User(user_id=1, email="admin@example.com", first_name="Asha", last_name="Rao", role=Role.ADMIN),
        User(
            user_id=2,
            email="manager@example.com",
            first_name="Vikram",
            last_name="Singh",
            role=Role.MANAGER,
            department="Engineering",
        ),
        User(
            user_id=3,
            email="priya@example.com",
            first_name="Priya",
            last_name="Sharma",
            department="Engineering",
            position="Developer",
            manager_id=2,
        ),
        User(
            user_id=4,
            email="rahul@example.com",
            first_name="Rahul",
            last_name="Verma",
            department="Sales",
            manager_id=1,
        ),
        User(user_id=5, email="former@example.com", first_name="Old", last_name="Timer", is_active=False),
    ]


@pytest.fixture
def users_repo(people) -> InMemoryUsers:
    return InMemoryUsers(people)


@pytest.fixture
def attendance_repo(users_repo) -> InMemoryAttendance:
    return InMemoryAttendance(users_repo)


@pytest.fixture
def leaves_repo(fixed_now) -> InMemoryLeaves:
    return InMemoryLeaves(fixed_now)


@pytest.fixture
def expenses_repo() -> InMemoryExpenses:
    return InMemoryExpenses()
