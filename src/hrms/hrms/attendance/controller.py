from __future__ import annotations

from datetime import date, timedelta

from flask import Flask, jsonify, request

from ..common.auth import current_role, current_user_id, login_required, roles_required
from ..common.datetime_utils import parse_iso_date
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_REPORT_DAYS
from ..core.enums import Role
from ..core.exceptions import DuplicateActionError, ReasonRequiredError, ValidationError
from ..container import Container
from .model import parse_check_input


def register(app: Flask, container: Container) -> None:
    def _parse_date(value: str | None, default: date | None = None) -> date | None:
        if not value:
            return default
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError("Dates must be YYYY-MM-DD")

    def _reason_required(e: ReasonRequiredError):
        return (
            jsonify(
                {
                    "message": str(e),
                    "requires_reason": True,
                    "distance": e.distance_meters,
                }
            ),
            422,
        )

    def _attendance_action(action):
        try:
            data = parse_check_input(request.get_json(silent=True))
            record = action(current_user_id(), data)
        except ReasonRequiredError as e:
            return _reason_required(e)
        except (DuplicateActionError, ValidationError) as e:
            return jsonify({"message": str(e)}), 400
        return jsonify(record.to_dict())

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    @login_required
    def check_in():
        return _attendance_action(container.attendance_service.check_in)

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    @login_required
    def check_out():
        return _attendance_action(container.attendance_service.check_out)

    @app.route("/api/attendance/status", methods=["GET"], endpoint="attendance_status")
    @login_required
    def status():
        return jsonify(container.attendance_service.get_status(current_user_id()).to_dict())

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def today():
        record = container.attendance_service.get_today_record(current_user_id(), container.clock().date())
        return jsonify(record.to_dict() if record else None)

    @app.route("/api/attendance/my", methods=["GET"], endpoint="attendance_my")
    @login_required
    def my_attendance():
        try:
            records = container.attendance_service.get_history(
                current_user_id(),
                start=_parse_date(request.args.get("start_date")),
                end=_parse_date(request.args.get("end_date")),
                limit=request.args.get("limit", DEFAULT_HISTORY_LIMIT, type=int),
            )
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/attendance/geofence", methods=["GET"], endpoint="attendance_geofence")
    @login_required
    def geofence():
        return jsonify(container.geofence_provider.get_active().to_dict())

    @app.route("/api/admin/attendance/today", methods=["GET"], endpoint="admin_attendance_today")
    @roles_required(Role.MANAGER, Role.ADMIN)
    def admin_today():
        return jsonify(container.report_service.today_overview())

    @app.route("/api/admin/attendance/range", methods=["GET"], endpoint="admin_attendance_range")
    @roles_required(Role.MANAGER, Role.ADMIN)
    def admin_range():
        today = container.clock().date()
        try:
            start = _parse_date(request.args.get("start_date"), today - timedelta(days=DEFAULT_REPORT_DAYS))
            end = _parse_date(request.args.get("end_date"), today)
            user_id = request.args.get("user_id", type=int)
            data = container.report_service.build_attendance_report(start=start, end=end, user_id=user_id)
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        return jsonify(data.to_dict())

    @app.route("/api/dashboard/stats", methods=["GET"], endpoint="dashboard_stats")
    @login_required
    def dashboard_stats():
        pending = 0
        role = current_role()
        if role in (Role.MANAGER, Role.ADMIN):
            approver_id = current_user_id()
            pending = len(container.leave_service.list_pending(current_role=role, approver_id=approver_id))
            pending += len(container.expense_service.list_pending(current_role=role, approver_id=approver_id))
        return jsonify(container.report_service.dashboard_stats(pending_approvals=pending))
