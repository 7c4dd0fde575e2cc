from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import ExpenseStatus


@dataclass(frozen=True)
class ExpenseClaim:
    """Domain entity: one reimbursement claim filed by an employee."""

    claim_id: int
    user_id: int
    title: str
    amount: Decimal
    category: str
    status: ExpenseStatus
    submitted_at: datetime
    description: Optional[str] = None
    receipt_url: Optional[str] = None
    approver_id: Optional[int] = None
    approver_notes: Optional[str] = None
    approved_at: Optional[datetime] = None
    reimbursed_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.claim_id,
            "user_id": self.user_id,
            "title": self.title,
            "amount": str(self.amount),
            "category": self.category,
            "description": self.description,
            "receipt_url": self.receipt_url,
            "status": self.status.value,
            "approver_id": self.approver_id,
            "approver_notes": self.approver_notes,
            "submission_date": self.submitted_at.isoformat(),
            "approval_date": self.approved_at.isoformat() if self.approved_at else None,
            "reimbursement_date": self.reimbursed_at.isoformat() if self.reimbursed_at else None,
        }
