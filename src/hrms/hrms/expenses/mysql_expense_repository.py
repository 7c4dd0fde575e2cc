from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..core.enums import ExpenseStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_int, db_cursor, fetchall, fetchone
from .model import ExpenseClaim
from .repository import ExpenseRepository

_CLAIM_COLUMNS = """
    claim_id, user_id, title, amount, category, description, receipt_url, status,
    approver_id, approver_notes, submitted_at, approved_at, reimbursed_at
"""


def _to_claim(r: Dict[str, Any]) -> ExpenseClaim:
    return ExpenseClaim(
        claim_id=int(r["claim_id"]),
        user_id=int(r["user_id"]),
        title=r["title"],
        amount=Decimal(str(r["amount"])),
        category=r["category"],
        status=ExpenseStatus(r["status"]),
        submitted_at=r["submitted_at"],
        description=r.get("description"),
        receipt_url=r.get("receipt_url"),
        approver_id=as_int(r.get("approver_id")),
        approver_notes=r.get("approver_notes"),
        approved_at=r.get("approved_at"),
        reimbursed_at=r.get("reimbursed_at"),
    )


class MySQLExpenseRepository(ExpenseRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO expense_claims(
                    user_id, title, amount, category, description, receipt_url, status, submitted_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    title,
                    amount,
                    category,
                    description,
                    receipt_url,
                    ExpenseStatus.SUBMITTED.value,
                    submitted_at,
                ),
            )
            cur.execute(f"SELECT {_CLAIM_COLUMNS} FROM expense_claims WHERE claim_id=%s", (int(cur.lastrowid),))
            return _to_claim(fetchone(cur))

    def get_claim(self, *, claim_id: int) -> Optional[ExpenseClaim]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_CLAIM_COLUMNS} FROM expense_claims WHERE claim_id=%s", (int(claim_id),))
            r = fetchone(cur)
            return _to_claim(r) if r else None

    def list_claims(
        self,
        *,
        status: Optional[ExpenseStatus] = None,
        user_ids: Optional[Sequence[int]] = None,
        limit: int = 200,
    ) -> Sequence[ExpenseClaim]:
        if user_ids is not None and not user_ids:
            return []

        clauses = ["1=1"]
        params: list[object] = []
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if user_ids is not None:
            clauses.append(f"user_id IN ({','.join(['%s'] * len(user_ids))})")
            params.extend(int(u) for u in user_ids)
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_CLAIM_COLUMNS}
                FROM expense_claims
                WHERE {" AND ".join(clauses)}
                ORDER BY submitted_at DESC, claim_id DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_to_claim(r) for r in fetchall(cur)]

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
        if to_status == ExpenseStatus.REIMBURSED:
            stamp_sql = "reimbursed_at=%s"
        else:
            stamp_sql = "approved_at=%s"
        # Rejection keeps approved_at NULL.
        stamp = None if to_status == ExpenseStatus.REJECTED else changed_at

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE expense_claims
                SET status=%s, approver_id=%s, approver_notes=COALESCE(%s, approver_notes), {stamp_sql}
                WHERE claim_id=%s AND status=%s
                """,
                (
                    to_status.value,
                    int(approver_id),
                    approver_notes,
                    stamp,
                    int(claim_id),
                    from_status.value,
                ),
            )
            return cur.rowcount > 0
