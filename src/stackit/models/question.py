# src/stackit/models/question.py
"""SQLAlchemy models for questions and their tag associations."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stackit.db.session import Base
from stackit.db.time import utcnow

if TYPE_CHECKING:
    from .answer import Answer
    from .tag import Tag
    from .user import User

question_tags = Table(
    "question_tags",
    Base.metadata,
    Column("question_id", Integer, ForeignKey("questions.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id"), primary_key=True),
)


class Question(Base):
    """Question posted by an author, the parent of zero or more answers."""

    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)

    # Sum of ledger entries targeting this question; only changed by atomic deltas.
    votes: Mapped[int] = mapped_column(default=0, nullable=False)
    views: Mapped[int] = mapped_column(default=0, nullable=False)

    # At most one accepted answer; it must belong to this question.
    accepted_answer_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("answers.id", use_alter=True, name="fk_questions_accepted_answer_id"),
        nullable=True,
    )
    is_closed: Mapped[bool] = mapped_column(default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    author: Mapped[User] = relationship("User")
    tags: Mapped[list[Tag]] = relationship("Tag", secondary=question_tags)
    answers: Mapped[list[Answer]] = relationship(
        "Answer",
        back_populates="question",
        foreign_keys="Answer.question_id",
        order_by="[Answer.created_at, Answer.id]",
    )

    @property
    def answer_count(self) -> int:
        """Return the number of answers attached to the question."""
        return len(self.answers)
