from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import Clock, now_local
from .database.connection import DBConfig, DatabaseConnection
from .expenses.mysql_expense_repository import MySQLExpenseRepository
from .expenses.repository import ExpenseRepository
from .expenses.service import ExpenseService
from .geofencing.provider import GeofenceConfigProvider, StaticGeofenceConfigProvider
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .reports.service import AttendanceReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    clock: Clock
    geofence_provider: GeofenceConfigProvider

    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository
    expenses_repo: ExpenseRepository

    user_service: UserService
    attendance_service: AttendanceService
    report_service: AttendanceReportService
    leave_service: LeaveService
    expense_service: ExpenseService


def assemble(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    expenses_repo: ExpenseRepository,
    geofence_provider: GeofenceConfigProvider | None = None,
    clock: Clock | None = None,
) -> Container:
    """Wire services over the given repositories (MySQL in production, fakes in tests)."""
    clock = clock or now_local
    geofence_provider = geofence_provider or StaticGeofenceConfigProvider()

    return Container(
        clock=clock,
        geofence_provider=geofence_provider,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        expenses_repo=expenses_repo,
        user_service=UserService(users_repo),
        attendance_service=AttendanceService(attendance_repo, users_repo, geofence_provider, clock=clock),
        report_service=AttendanceReportService(attendance_repo, clock=clock),
        leave_service=LeaveService(leaves_repo, users_repo),
        expense_service=ExpenseService(expenses_repo, users_repo, clock=clock),
    )


def build_container(*, db_config: dict, geofence_provider: GeofenceConfigProvider | None = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return assemble(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        expenses_repo=MySQLExpenseRepository(conn),
        geofence_provider=geofence_provider,
    )
