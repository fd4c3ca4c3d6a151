# src/stackit/services/__init__.py
"""Business logic services for the StackIt application."""

from .acceptance import accept_answer, unaccept_answer
from .lifecycle import create_answer, delete_answer, delete_question
from .voting import VoteOutcome, cast_vote, get_user_vote

__all__ = [
    "accept_answer",
    "unaccept_answer",
    "create_answer",
    "delete_answer",
    "delete_question",
    "VoteOutcome",
    "cast_vote",
    "get_user_vote",
]
