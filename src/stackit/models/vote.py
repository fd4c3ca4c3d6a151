# src/stackit/models/vote.py
"""Vote ledger: one entry per user per target."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, SmallInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from stackit.db.session import Base
from stackit.db.time import utcnow

VOTE_TARGET_QUESTION = "question"
VOTE_TARGET_ANSWER = "answer"
VOTE_TARGET_TYPES = (VOTE_TARGET_QUESTION, VOTE_TARGET_ANSWER)

VOTE_UP = 1
VOTE_DOWN = -1


class Vote(Base):
    """A user's current opinion on a question or an answer.

    The composite primary key is the uniqueness guard: concurrent inserts for
    the same (user, target) pair cannot both succeed.
    """

    __tablename__ = "votes"
    __table_args__ = (
        CheckConstraint("value IN (1, -1)", name="ck_votes_value"),
        CheckConstraint("target_type IN ('question', 'answer')", name="ck_votes_target_type"),
        Index("ix_votes_target", "target_type", "target_id"),
    )

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    target_type: Mapped[str] = mapped_column(String(16), primary_key=True)
    # Polymorphic reference to questions.id or answers.id, so no foreign key.
    target_id: Mapped[int] = mapped_column(Integer, primary_key=True)

    # 1 = upvote, -1 = downvote.
    value: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )
