from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import current_role, current_user_id, login_required
from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_json_object
from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _parse_date(value, field_name: str):
        try:
            return parse_iso_date(str(value or ""))
        except ValueError:
            raise ValidationError(f"{field_name} must be YYYY-MM-DD")

    @app.route("/api/leaves", methods=["POST"], endpoint="create_leave")
    @login_required
    def create_leave():
        try:
            body = require_json_object(request.get_json(silent=True))
            leave = container.leave_service.create_leave(
                user_id=current_user_id(),
                leave_type=body.get("type", ""),
                start_date=_parse_date(body.get("start_date"), "start_date"),
                end_date=_parse_date(body.get("end_date"), "end_date"),
                reason=body.get("reason"),
            )
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        return jsonify(leave.to_dict()), 201

    @app.route("/api/leaves/my", methods=["GET"], endpoint="my_leaves")
    @login_required
    def my_leaves():
        leaves = container.leave_service.list_my_leaves(user_id=current_user_id())
        return jsonify([lv.to_dict() for lv in leaves])

    @app.route("/api/leaves/pending", methods=["GET"], endpoint="pending_leaves")
    @login_required
    def pending_leaves():
        try:
            leaves = container.leave_service.list_pending(current_role=current_role(), approver_id=current_user_id())
        except AuthorizationError as e:
            return jsonify({"message": str(e)}), 403
        return jsonify([lv.to_dict() for lv in leaves])

    @app.route("/api/leaves/<int:request_id>/status", methods=["PUT"], endpoint="decide_leave")
    @login_required
    def decide_leave(request_id: int):
        try:
            body = require_json_object(request.get_json(silent=True))
            leave = container.leave_service.decide_leave(
                current_role=current_role(),
                approver_id=current_user_id(),
                request_id=request_id,
                status=body.get("status", ""),
                notes=body.get("notes"),
            )
        except AuthorizationError as e:
            return jsonify({"message": str(e)}), 403
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        return jsonify(leave.to_dict())
