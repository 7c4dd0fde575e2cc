from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: employee account.

    Plain data object; credentials are handled by the external login service.
    """

    user_id: int
    email: str
    first_name: str
    last_name: str
    role: Role = Role.EMPLOYEE
    department: Optional[str] = None
    position: Optional[str] = None
    manager_id: Optional[int] = None
    profile_image_url: Optional[str] = None
    is_active: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_directory_entry(self) -> dict:
        """Public fields only; used by the employee directory."""
        return {
            "id": self.user_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "department": self.department,
            "position": self.position,
            "profile_image_url": self.profile_image_url,
            "role": self.role.value,
        }
