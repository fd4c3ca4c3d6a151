# tests/utils.py
"""Shared helpers for the test suite."""
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from stackit.core.security import create_access_token
from stackit.models import User, Vote

TEST_PASSWORD = "Sup3rSecret!"


def bearer(user: User) -> dict[str, str]:
    """Return authorization headers for ``user``."""
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


def ledger_sum(db: Session, target_type: str, target_id: int) -> int:
    """Sum of ledger entries for a target, computed from scratch."""
    return db.scalar(
        select(func.coalesce(func.sum(Vote.value), 0)).where(
            Vote.target_type == target_type,
            Vote.target_id == target_id,
        )
    )


def ledger_rows(db: Session, user_id: int, target_type: str, target_id: int) -> list[Vote]:
    return list(
        db.scalars(
            select(Vote).where(
                Vote.user_id == user_id,
                Vote.target_type == target_type,
                Vote.target_id == target_id,
            )
        )
    )
