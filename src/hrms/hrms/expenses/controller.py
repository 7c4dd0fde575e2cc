from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import current_role, current_user_id, login_required
from ..common.validators import require_json_object
from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/expenses", methods=["POST"], endpoint="create_expense")
    @login_required
    def create_expense():
        try:
            body = require_json_object(request.get_json(silent=True))
            claim = container.expense_service.create_claim(
                user_id=current_user_id(),
                title=body.get("title"),
                amount=body.get("amount"),
                category=body.get("category"),
                description=body.get("description"),
                receipt_url=body.get("receipt_url"),
            )
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        return jsonify(claim.to_dict()), 201

    @app.route("/api/expenses/my", methods=["GET"], endpoint="my_expenses")
    @login_required
    def my_expenses():
        claims = container.expense_service.list_my_claims(user_id=current_user_id())
        return jsonify([c.to_dict() for c in claims])

    @app.route("/api/expenses/pending", methods=["GET"], endpoint="pending_expenses")
    @login_required
    def pending_expenses():
        try:
            claims = container.expense_service.list_pending(current_role=current_role(), approver_id=current_user_id())
        except AuthorizationError as e:
            return jsonify({"message": str(e)}), 403
        return jsonify([c.to_dict() for c in claims])

    @app.route("/api/expenses/<int:claim_id>/status", methods=["PUT"], endpoint="decide_expense")
    @login_required
    def decide_expense(claim_id: int):
        try:
            body = require_json_object(request.get_json(silent=True))
            claim = container.expense_service.decide_claim(
                current_role=current_role(),
                approver_id=current_user_id(),
                claim_id=claim_id,
                status=body.get("status", ""),
                notes=body.get("notes"),
            )
        except AuthorizationError as e:
            return jsonify({"message": str(e)}), 403
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        return jsonify(claim.to_dict())
