"""Tag lookup and creation."""
from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stackit.core.errors import ConflictError
from stackit.models import Tag

__all__ = [
    "normalize_tag_name",
    "resolve_tags",
    "create_tag",
    "list_tags",
]


def normalize_tag_name(name: str) -> str:
    """Return the canonical (trimmed, lowercase) form of a tag name."""
    return name.strip().lower()


def _get_by_name(db: Session, name: str) -> Tag | None:
    return db.scalar(select(Tag).where(Tag.name == name))


def _get_or_create(db: Session, name: str) -> Tag:
    tag = _get_by_name(db, name)
    if tag is not None:
        return tag
    try:
        with db.begin_nested():
            tag = Tag(name=name, description=f"Tag for {name}")
            db.add(tag)
    except IntegrityError:
        # Created concurrently under the same name.
        tag = _get_by_name(db, name)
        if tag is None:
            raise
    return tag


def resolve_tags(db: Session, names: Iterable[str]) -> list[Tag]:
    """Map tag names to Tag rows, creating missing tags on first use.

    Names are normalized and deduplicated; input order is preserved.
    The caller owns the surrounding transaction.
    """
    tags: list[Tag] = []
    seen: set[str] = set()
    for raw in names:
        name = normalize_tag_name(raw)
        if not name or name in seen:
            continue
        seen.add(name)
        tags.append(_get_or_create(db, name))
    return tags


def create_tag(db: Session, name: str, description: str) -> Tag:
    """Create a tag explicitly; duplicates are rejected."""
    name = normalize_tag_name(name)
    if _get_by_name(db, name) is not None:
        raise ConflictError("Tag already exists")
    tag = Tag(name=name, description=description)
    db.add(tag)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise ConflictError("Tag already exists") from err
    db.refresh(tag)
    return tag


def list_tags(
    db: Session,
    search: str | None = None,
    skip: int = 0,
    limit: int = 20,
) -> Sequence[Tag]:
    """Return tags sorted by name, optionally filtered by substring."""
    stmt = select(Tag)
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(or_(Tag.name.ilike(pattern), Tag.description.ilike(pattern)))
    return db.scalars(stmt.order_by(Tag.name).offset(skip).limit(limit)).all()
