"""Site-wide search over questions, answers, users and tags."""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import Session

from stackit.core.errors import InvalidArgumentError
from stackit.models import Answer, Question, Tag, User

SEARCH_TYPES = ("all", "questions", "answers", "users", "tags")

__all__ = ["SEARCH_TYPES", "SearchResults", "search"]


@dataclass
class SearchResults:
    """Matches per collection; collections that were not searched stay None."""

    query: str
    search_type: str
    total: int = 0
    questions: Sequence[Question] | None = None
    answers: Sequence[Answer] | None = None
    users: Sequence[User] | None = None
    tags: Sequence[Tag] | None = None


def _page(db: Session, stmt: Select, skip: int, limit: int) -> tuple[Sequence, int]:
    total = db.scalar(select(func.count()).select_from(stmt.order_by(None).subquery()))
    return db.scalars(stmt.offset(skip).limit(limit)).all(), total or 0


def search(
    db: Session,
    query: str | None,
    search_type: str = "all",
    skip: int = 0,
    limit: int = 10,
) -> SearchResults:
    """Case-insensitive substring search.

    Questions match on title or description, answers on content, users on
    username or email, tags on name or description. ``total`` counts every
    match across the searched collections, not just the returned page.

    Raises:
        InvalidArgumentError: If the query is blank or the type is unknown.
    """
    term = (query or "").strip()
    if not term:
        raise InvalidArgumentError("Search query is required")
    if search_type not in SEARCH_TYPES:
        raise InvalidArgumentError(f"Unknown search type: {search_type!r}")

    pattern = f"%{term}%"
    results = SearchResults(query=term, search_type=search_type)
    wanted = set(SEARCH_TYPES[1:]) if search_type == "all" else {search_type}

    if "questions" in wanted:
        stmt = (
            select(Question)
            .where(or_(Question.title.ilike(pattern), Question.description.ilike(pattern)))
            .order_by(Question.created_at.desc(), Question.id.desc())
        )
        results.questions, count = _page(db, stmt, skip, limit)
        results.total += count

    if "answers" in wanted:
        stmt = (
            select(Answer)
            .where(Answer.content.ilike(pattern))
            .order_by(Answer.created_at.desc(), Answer.id.desc())
        )
        results.answers, count = _page(db, stmt, skip, limit)
        results.total += count

    if "users" in wanted:
        stmt = (
            select(User)
            .where(or_(User.username.ilike(pattern), User.email.ilike(pattern)))
            .order_by(User.created_at.desc(), User.id.desc())
        )
        results.users, count = _page(db, stmt, skip, limit)
        results.total += count

    if "tags" in wanted:
        stmt = (
            select(Tag)
            .where(or_(Tag.name.ilike(pattern), Tag.description.ilike(pattern)))
            .order_by(Tag.name)
        )
        results.tags, count = _page(db, stmt, skip, limit)
        results.total += count

    return results
