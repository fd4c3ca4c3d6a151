# src/stackit/models/tag.py
"""Topic labels attached to questions."""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from stackit.db.session import Base


class Tag(Base):
    """Tag identified by its lowercase name. Created on first use, never removed."""

    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
