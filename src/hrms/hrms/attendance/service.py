from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import Clock, now_local
from ..common.validators import optional_text
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_LIST_LIMIT
from ..core.enums import AttendanceStatus, TodayState
from ..core.exceptions import (
    AlreadyCheckedInError,
    AlreadyCheckedOutError,
    NoCheckInFoundError,
    ReasonRequiredError,
    ValidationError,
)
from ..geofencing.distance import evaluate_location
from ..geofencing.provider import GeofenceConfigProvider, StaticGeofenceConfigProvider
from ..users.repository import UserRepository
from .model import AttendanceRecord, CheckInput, TodayStatus
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocationDecision:
    """Outcome of the geofence step for one action."""

    is_out_of_office: bool
    distance_meters: Optional[int]
    reason: Optional[str]


class AttendanceService:
    """Check-in/check-out state machine for one user's today-record.

    NoRecord --check_in--> CheckedIn --check_out--> CheckedOut. Each call
    reads the today-record and then performs one insert or one update.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        geofence: GeofenceConfigProvider | None = None,
        *,
        clock: Clock | None = None,
    ):
        self._attendance = attendance
        self._users = users
        self._geofence = geofence or StaticGeofenceConfigProvider()
        self._clock = clock or now_local

    def _require_active_user(self, user_id: int) -> None:
        user = self._users.get_by_id(user_id)
        if not user or not user.is_active:
            raise ValidationError("Employee not found")

    def _decide_location(self, data: CheckInput, *, action: str) -> LocationDecision:
        reason = optional_text(data.reason)
        if not data.has_coordinates:
            # No coordinates: geofencing is skipped and the action is accepted.
            return LocationDecision(is_out_of_office=False, distance_meters=None, reason=reason)

        config = self._geofence.get_active()
        check = evaluate_location(float(data.latitude), float(data.longitude), config)
        if check.is_out_of_office and not reason:
            logger.info("%s rejected: %dm from %s without reason", action, check.distance_meters, config.name)
            raise ReasonRequiredError(check.distance_meters, action=action)

        return LocationDecision(
            is_out_of_office=check.is_out_of_office,
            distance_meters=check.distance_meters,
            reason=reason,
        )

    def check_in(self, user_id: int, data: CheckInput | None = None, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or self._clock()
        today = now.date()
        data = data or CheckInput()

        self._require_active_user(user_id)

        if self._attendance.get_for_user_and_date(user_id, today):
            raise AlreadyCheckedInError()

        decision = self._decide_location(data, action="check-in")
        status = AttendanceStatus.OUT_OF_OFFICE if decision.is_out_of_office else AttendanceStatus.PRESENT

        record = self._attendance.create_checkin(
            user_id=user_id,
            work_date=today,
            check_in=now,
            status=status,
            location_name=optional_text(data.location_name),
            latitude=data.latitude,
            longitude=data.longitude,
            reason=decision.reason,
            is_out_of_office=decision.is_out_of_office,
            distance_from_office=decision.distance_meters,
        )

        if decision.is_out_of_office:
            logger.warning(
                "User %s checked in out of office (%sm): %s", user_id, decision.distance_meters, decision.reason
            )
        else:
            logger.info("User %s checked in at %s", user_id, now.isoformat())
        return record

    def check_out(self, user_id: int, data: CheckInput | None = None, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or self._clock()
        today = now.date()
        data = data or CheckInput()

        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record or record.check_in is None:
            raise NoCheckInFoundError()
        if record.check_out is not None:
            raise AlreadyCheckedOutError()

        decision = self._decide_location(data, action="check-out")

        updated = self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            check_out=now,
            location_name=optional_text(data.location_name),
            latitude=data.latitude,
            longitude=data.longitude,
            reason=decision.reason,
            is_out_of_office=decision.is_out_of_office,
            distance_from_office=decision.distance_meters,
        )
        if updated is None:
            # Another request checked out between our read and this update.
            raise AlreadyCheckedOutError()

        if decision.is_out_of_office:
            logger.warning(
                "User %s checked out out of office (%sm): %s", user_id, decision.distance_meters, decision.reason
            )
        else:
            logger.info("User %s checked out at %s", user_id, now.isoformat())
        return updated

    def get_today_record(self, user_id: int, today: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_user_and_date(user_id, today)

    def get_status(self, user_id: int, *, now: datetime | None = None) -> TodayStatus:
        now = now or self._clock()
        record = self._attendance.get_for_user_and_date(user_id, now.date())
        return self.project_status(record)

    @staticmethod
    def project_status(record: Optional[AttendanceRecord]) -> TodayStatus:
        if not record or record.check_in is None:
            return TodayStatus(
                is_checked_in=False,
                check_in_time=None,
                check_out_time=None,
                today_status=TodayState.NOT_CHECKED_IN,
            )
        if record.check_out is None:
            state = TodayState.CHECKED_IN
        else:
            state = TodayState.CHECKED_OUT
        return TodayStatus(
            is_checked_in=state == TodayState.CHECKED_IN,
            check_in_time=record.check_in,
            check_out_time=record.check_out,
            today_status=state,
        )

    def get_history(
        self,
        user_id: int,
        *,
        start: date | None = None,
        end: date | None = None,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> Sequence[AttendanceRecord]:
        if start and end and end < start:
            raise ValidationError("End date must not be before start date")
        if not 1 <= limit <= DEFAULT_LIST_LIMIT:
            raise ValidationError(f"Limit must be between 1 and {DEFAULT_LIST_LIMIT}")
        return self._attendance.get_for_user(user_id, start_date=start, end_date=end, limit=limit)
