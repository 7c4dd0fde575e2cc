from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import ExpenseStatus
from .model import ExpenseClaim


class ExpenseRepository(Protocol):
    def create_claim(
        self,
        *,
        user_id: int,
        title: str,
        amount: Decimal,
        category: str,
        description: Optional[str],
        receipt_url: Optional[str],
        submitted_at: datetime,
    ) -> ExpenseClaim:
        raise NotImplementedError

    def get_claim(self, *, claim_id: int) -> Optional[ExpenseClaim]:
        raise NotImplementedError

    def list_claims(
        self,
        *,
        status: Optional[ExpenseStatus] = None,
        user_ids: Optional[Sequence[int]] = None,
        limit: int = 200,
    ) -> Sequence[ExpenseClaim]:
        """Newest submission first. ``user_ids=None`` means every user."""

        raise NotImplementedError

    def update_status(
        self,
        *,
        claim_id: int,
        from_status: ExpenseStatus,
        to_status: ExpenseStatus,
        approver_id: int,
        approver_notes: Optional[str],
        changed_at: datetime,
    ) -> bool:
        """Moves the claim only if it is still in ``from_status``; False otherwise."""

        raise NotImplementedError
