from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.enums import Role


def current_user_id() -> int:
    return int(session["user_id"])


def current_role() -> Role:
    return Role(session.get("role") or Role.EMPLOYEE.value)


def login_required(view):
    """Reject requests without an authenticated session.

    Login itself lives outside this service; it is expected to put
    ``user_id`` and ``role`` into the Flask session.
    """

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"message": "Unauthorized"}), 401
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"message": "Unauthorized"}), 401
            if session.get("role") not in allowed:
                return jsonify({"message": "Access denied"}), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator
