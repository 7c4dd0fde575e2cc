from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Sequence

from ..common.datetime_utils import Clock, now_local
from ..common.validators import optional_text, require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT, MAX_EXPENSE_AMOUNT
from ..core.enums import ExpenseStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.repository import UserRepository
from .model import ExpenseClaim
from .repository import ExpenseRepository

logger = logging.getLogger(__name__)

_APPROVER_ROLES = {Role.MANAGER, Role.ADMIN}

# Allowed moves: target status -> status the claim must currently have.
_TRANSITIONS = {
    ExpenseStatus.APPROVED: ExpenseStatus.SUBMITTED,
    ExpenseStatus.REJECTED: ExpenseStatus.SUBMITTED,
    ExpenseStatus.REIMBURSED: ExpenseStatus.APPROVED,
}


def parse_amount(value: Any) -> Decimal:
    """Positive money amount, rounded to cents."""
    if isinstance(value, bool):
        raise ValidationError("Amount must be a number")
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError("Amount must be a number")
    if not amount.is_finite():
        raise ValidationError("Amount must be a number")

    if amount > Decimal(str(MAX_EXPENSE_AMOUNT)):
        raise ValidationError("Amount is too large")

    amount = amount.quantize(Decimal("0.01"))
    if amount <= 0:
        raise ValidationError("Amount must be greater than zero")
    return amount


class ExpenseService:
    """Use case: file expense claims and move them through approval."""

    def __init__(self, expenses: ExpenseRepository, users: UserRepository, *, clock: Clock | None = None):
        self._expenses = expenses
        self._users = users
        self._clock = clock or now_local

    def create_claim(
        self,
        *,
        user_id: int,
        title: Any,
        amount: Any,
        category: Any,
        description: Optional[str] = None,
        receipt_url: Optional[str] = None,
    ) -> ExpenseClaim:
        claim = self._expenses.create_claim(
            user_id=int(user_id),
            title=require_non_empty(title, "Title"),
            amount=parse_amount(amount),
            category=require_non_empty(category, "Category"),
            description=optional_text(description),
            receipt_url=optional_text(receipt_url),
            submitted_at=self._clock(),
        )
        logger.info("Expense claim %s submitted by user %s (%s)", claim.claim_id, user_id, claim.amount)
        return claim

    def list_my_claims(self, *, user_id: int) -> Sequence[ExpenseClaim]:
        return self._expenses.list_claims(user_ids=[int(user_id)], limit=DEFAULT_LIST_LIMIT)

    def list_pending(self, *, current_role: Role, approver_id: int) -> Sequence[ExpenseClaim]:
        """Submitted claims: all of them for admins, direct reports' for managers."""
        if current_role not in _APPROVER_ROLES:
            raise AuthorizationError("Access denied")

        user_ids = None
        if current_role == Role.MANAGER:
            user_ids = [u.user_id for u in self._users.list_reports(int(approver_id))]
        return self._expenses.list_claims(status=ExpenseStatus.SUBMITTED, user_ids=user_ids, limit=DEFAULT_LIST_LIMIT)

    def decide_claim(
        self,
        *,
        current_role: Role,
        approver_id: int,
        claim_id: int,
        status: str | ExpenseStatus,
        notes: Optional[str] = None,
    ) -> ExpenseClaim:
        if current_role not in _APPROVER_ROLES:
            raise AuthorizationError("Access denied")

        try:
            target = ExpenseStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown expense status: {status}")
        required = _TRANSITIONS.get(target)
        if required is None:
            raise ValidationError("An expense claim can only be approved, rejected or reimbursed")

        claim = self._expenses.get_claim(claim_id=int(claim_id))
        if not claim:
            raise ValidationError("Expense claim not found")
        if claim.status != required:
            raise ValidationError(f"Only {required.value} claims can be marked {target.value}")

        if current_role == Role.MANAGER:
            owner = self._users.get_by_id(claim.user_id)
            if not owner or owner.manager_id != int(approver_id):
                raise AuthorizationError("You can only decide claims of your own reports")

        ok = self._expenses.update_status(
            claim_id=claim.claim_id,
            from_status=required,
            to_status=target,
            approver_id=int(approver_id),
            approver_notes=optional_text(notes),
            changed_at=self._clock(),
        )
        if not ok:
            raise ValidationError("Expense claim has already been processed")

        logger.info("Expense claim %s %s by user %s", claim.claim_id, target.value, approver_id)
        updated = self._expenses.get_claim(claim_id=claim.claim_id)
        if updated is None:
            raise ValidationError("Expense claim not found")
        return updated
