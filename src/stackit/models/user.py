# src/stackit/models/user.py
"""SQLAlchemy model for registered accounts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from stackit.db.session import Base
from stackit.db.time import utcnow

ROLE_GUEST = "guest"
ROLE_USER = "user"
ROLE_ADMIN = "admin"
USER_ROLES = (ROLE_GUEST, ROLE_USER, ROLE_ADMIN)


class User(Base):
    """Account that asks, answers and votes."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('guest', 'user', 'admin')", name="ck_users_role"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(30), unique=True, nullable=False)
    # Stored lowercased.
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    # Opaque argon2id hash string, never exposed by the API.
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=ROLE_USER)
    is_banned: Mapped[bool] = mapped_column(default=False, nullable=False)
    reputation: Mapped[int] = mapped_column(default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    @property
    def is_admin(self) -> bool:
        """Return True when the account carries the admin role."""
        return self.role == ROLE_ADMIN
