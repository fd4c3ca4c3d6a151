# src/stackit/models/__init__.py
"""SQLAlchemy models for the StackIt application."""

from .answer import Answer
from .question import Question, question_tags
from .tag import Tag
from .user import User
from .vote import Vote

__all__ = [
    "Answer",
    "Question", "question_tags",
    "Tag",
    "User",
    "Vote",
]
