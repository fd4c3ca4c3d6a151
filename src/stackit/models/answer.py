# src/stackit/models/answer.py
"""SQLAlchemy model for answers."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stackit.db.session import Base
from stackit.db.time import utcnow

if TYPE_CHECKING:
    from .question import Question
    from .user import User


class Answer(Base):
    """Answer to exactly one question.

    ``question_id`` is fixed at creation; no code path reassigns it.
    """

    __tablename__ = "answers"
    __table_args__ = (Index("ix_answers_question_id", "question_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    question_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("questions.id"),
        nullable=False,
    )
    votes: Mapped[int] = mapped_column(default=0, nullable=False)
    is_accepted: Mapped[bool] = mapped_column(default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    author: Mapped[User] = relationship("User")
    question: Mapped[Question] = relationship(
        "Question",
        back_populates="answers",
        foreign_keys=[question_id],
    )
