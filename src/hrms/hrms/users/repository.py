from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def list_active(self, *, department: Optional[str] = None) -> Sequence[User]:
        raise NotImplementedError

    def list_reports(self, manager_id: int) -> Sequence[User]:
        raise NotImplementedError
