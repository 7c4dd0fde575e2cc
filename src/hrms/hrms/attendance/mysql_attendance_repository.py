from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus
from ..core.exceptions import AlreadyCheckedInError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, as_int, db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord, AttendanceReportRow, DailyCounts
from .repository import AttendanceRepository

_RECORD_COLUMNS = """
    attendance_id, user_id, work_date, check_in, check_out, status,
    location_name, latitude, longitude, reason, is_out_of_office, distance_from_office,
    check_out_location_name, check_out_latitude, check_out_longitude, check_out_reason,
    is_out_of_office_check_out, check_out_distance_from_office
"""


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        check_in=r.get("check_in"),
        check_out=r.get("check_out"),
        status=AttendanceStatus(r["status"]),
        location_name=r.get("location_name"),
        latitude=as_float(r.get("latitude")),
        longitude=as_float(r.get("longitude")),
        reason=r.get("reason"),
        is_out_of_office=bool(r.get("is_out_of_office")),
        distance_from_office=as_int(r.get("distance_from_office")),
        check_out_location_name=r.get("check_out_location_name"),
        check_out_latitude=as_float(r.get("check_out_latitude")),
        check_out_longitude=as_float(r.get("check_out_longitude")),
        check_out_reason=r.get("check_out_reason"),
        is_out_of_office_check_out=bool(r.get("is_out_of_office_check_out")),
        check_out_distance_from_office=as_int(r.get("check_out_distance_from_office")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_by_id(self, cur, attendance_id: int) -> Optional[AttendanceRecord]:
        cur.execute(
            f"SELECT {_RECORD_COLUMNS} FROM attendance_records WHERE attendance_id=%s",
            (int(attendance_id),),
        )
        r = fetchone(cur)
        return _to_record(r) if r else None

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND work_date=%s
                """,
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 30,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["user_id=%s"]
        params: list[object] = [int(user_id)]
        if start_date is not None:
            clauses.append("work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("work_date <= %s")
            params.append(end_date)
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records
                WHERE {" AND ".join(clauses)}
                ORDER BY work_date DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

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
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        user_id, work_date, check_in, status, location_name,
                        latitude, longitude, reason, is_out_of_office, distance_from_office
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(user_id),
                        work_date,
                        check_in,
                        status.value,
                        location_name,
                        latitude,
                        longitude,
                        reason,
                        int(bool(is_out_of_office)),
                        distance_from_office,
                    ),
                )
                return self._get_by_id(cur, int(cur.lastrowid))
        except mysql.connector.IntegrityError as e:
            # The unique key on (user_id, work_date) is the authoritative duplicate check.
            if is_duplicate_key(e):
                raise AlreadyCheckedInError() from e
            raise

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out=%s, check_out_location_name=%s,
                    check_out_latitude=%s, check_out_longitude=%s, check_out_reason=%s,
                    is_out_of_office_check_out=%s, check_out_distance_from_office=%s
                WHERE attendance_id=%s AND check_in IS NOT NULL AND check_out IS NULL
                """,
                (
                    check_out,
                    location_name,
                    latitude,
                    longitude,
                    reason,
                    int(bool(is_out_of_office)),
                    distance_from_office,
                    int(attendance_id),
                ),
            )
            if cur.rowcount <= 0:
                return None
            return self._get_by_id(cur, attendance_id)

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        clauses = ["ar.work_date BETWEEN %s AND %s", "u.is_active = 1"]
        params: list[object] = [start_date, end_date]
        if user_id is not None:
            clauses.append("u.user_id=%s")
            params.append(int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    ar.attendance_id, u.user_id,
                    CONCAT(u.first_name, ' ', u.last_name) AS full_name, u.email, u.department,
                    ar.work_date, ar.check_in, ar.check_out, ar.status,
                    ar.location_name, ar.is_out_of_office, ar.distance_from_office
                FROM attendance_records ar
                JOIN users u ON u.user_id = ar.user_id
                WHERE {" AND ".join(clauses)}
                ORDER BY ar.work_date DESC, ar.check_in ASC
                """,
                tuple(params),
            )
            return [
                AttendanceReportRow(
                    attendance_id=int(r["attendance_id"]),
                    user_id=int(r["user_id"]),
                    full_name=r["full_name"],
                    email=r["email"],
                    department=r.get("department"),
                    work_date=r["work_date"],
                    check_in=r.get("check_in"),
                    check_out=r.get("check_out"),
                    status=AttendanceStatus(r["status"]),
                    location_name=r.get("location_name"),
                    is_out_of_office=bool(r.get("is_out_of_office")),
                    distance_from_office=as_int(r.get("distance_from_office")),
                )
                for r in fetchall(cur)
            ]

    def get_daily_counts(self, work_date: date) -> DailyCounts:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    COUNT(DISTINCT u.user_id) AS total_employees,
                    COUNT(CASE WHEN ar.status = 'present' THEN 1 END) AS present,
                    COUNT(CASE WHEN ar.status = 'late' THEN 1 END) AS late,
                    COUNT(CASE WHEN ar.status = 'out_of_office' THEN 1 END) AS out_of_office,
                    COUNT(DISTINCT u.user_id) - COUNT(ar.attendance_id) AS absent,
                    ROUND(AVG(
                        CASE WHEN ar.check_out IS NOT NULL
                        THEN TIMESTAMPDIFF(SECOND, ar.check_in, ar.check_out) / 3600
                        END
                    ), 2) AS average_working_hours
                FROM users u
                LEFT JOIN attendance_records ar
                    ON ar.user_id = u.user_id AND ar.work_date = %s
                WHERE u.is_active = 1
                """,
                (work_date,),
            )
            r = fetchone(cur) or {}
            return DailyCounts(
                total_employees=int(r.get("total_employees") or 0),
                present=int(r.get("present") or 0),
                late=int(r.get("late") or 0),
                out_of_office=int(r.get("out_of_office") or 0),
                absent=int(r.get("absent") or 0),
                average_working_hours=as_float(r.get("average_working_hours")) or 0.0,
            )

    def count_present_between(self, start_date: date, end_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(ar.attendance_id) AS n
                FROM attendance_records ar
                JOIN users u ON u.user_id = ar.user_id
                WHERE u.is_active = 1 AND ar.status = 'present' AND ar.work_date BETWEEN %s AND %s
                """,
                (start_date, end_date),
            )
            r = fetchone(cur) or {}
            return int(r.get("n") or 0)
