from __future__ import annotations

from typing import Optional

from ..common.validators import optional_text
from .repository import UserRepository


class UserService:
    """Use case: employee directory."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_directory(self, *, department: Optional[str] = None) -> list[dict]:
        department = optional_text(department)
        return [u.to_directory_entry() for u in self._users.list_active(department=department)]
