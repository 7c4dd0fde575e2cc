from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.validators import optional_text, parse_coordinates, require_json_object
from ..core.enums import AttendanceStatus, TodayState


@dataclass(frozen=True)
class CheckInput:
    """What the client sends with a check-in or check-out.

    Text fields are already normalized: absent means None, never "".
    """

    latitude: Optional[float] = None
    longitude: Optional[float] = None
    location_name: Optional[str] = None
    reason: Optional[str] = None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one user's attendance for one calendar day.

    Distances are snapshots taken at the moment of each action (meters, rounded).
    """

    attendance_id: int
    user_id: int
    work_date: date
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    status: AttendanceStatus
    location_name: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    reason: Optional[str] = None
    is_out_of_office: bool = False
    distance_from_office: Optional[int] = None
    check_out_location_name: Optional[str] = None
    check_out_latitude: Optional[float] = None
    check_out_longitude: Optional[float] = None
    check_out_reason: Optional[str] = None
    is_out_of_office_check_out: bool = False
    check_out_distance_from_office: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "user_id": self.user_id,
            "date": self.work_date.isoformat(),
            "check_in": self.check_in.isoformat() if self.check_in else None,
            "check_out": self.check_out.isoformat() if self.check_out else None,
            "status": self.status.value,
            "location_name": self.location_name,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "reason": self.reason,
            "is_out_of_office": self.is_out_of_office,
            "distance_from_office": self.distance_from_office,
            "check_out_location_name": self.check_out_location_name,
            "check_out_latitude": self.check_out_latitude,
            "check_out_longitude": self.check_out_longitude,
            "check_out_reason": self.check_out_reason,
            "is_out_of_office_check_out": self.is_out_of_office_check_out,
            "check_out_distance_from_office": self.check_out_distance_from_office,
        }


@dataclass(frozen=True)
class TodayStatus:
    """Read-model for the client's check-in button."""

    is_checked_in: bool
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    today_status: TodayState

    def to_dict(self) -> dict:
        return {
            "is_checked_in": self.is_checked_in,
            "check_in_time": self.check_in_time.isoformat() if self.check_in_time else None,
            "check_out_time": self.check_out_time.isoformat() if self.check_out_time else None,
            "today_status": self.today_status.value,
        }


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for reports (record joined with the employee)."""

    attendance_id: int
    user_id: int
    full_name: str
    email: str
    department: Optional[str]
    work_date: date
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    status: AttendanceStatus
    location_name: Optional[str] = None
    is_out_of_office: bool = False
    distance_from_office: Optional[int] = None


@dataclass(frozen=True)
class DailyCounts:
    """Aggregates over active employees for one day."""

    total_employees: int
    present: int
    late: int
    out_of_office: int
    absent: int
    average_working_hours: float


def parse_check_input(payload: Optional[dict]) -> CheckInput:
    """Build a CheckInput from a JSON body; raises ValidationError on bad coordinates."""
    payload = require_json_object(payload)
    coords = parse_coordinates(payload.get("latitude"), payload.get("longitude"))
    return CheckInput(
        latitude=coords[0] if coords else None,
        longitude=coords[1] if coords else None,
        location_name=optional_text(payload.get("location_name") or payload.get("location")),
        reason=optional_text(payload.get("reason")),
    )
