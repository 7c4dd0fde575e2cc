from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="employees")
    @login_required
    def employees():
        return jsonify(container.user_service.list_directory(department=request.args.get("department")))
