# src/stackit/api/v1/endpoints/tags.py
"""Tag endpoints for the StackIt API."""

from collections.abc import Sequence

from fastapi import APIRouter, Query, status

from stackit.models import Tag
from stackit.schemas.tag import TagCreate, TagResponse
from stackit.services import tags as tag_service

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("/", response_model=list[TagResponse])
def list_tags(
    db: SessionDep,
    search: str | None = Query(None, description="Substring filter on name or description"),
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
) -> Sequence[Tag]:
    """List tags alphabetically."""
    return tag_service.list_tags(db, search=search, skip=skip, limit=limit)


@router.post("/", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
def create_tag(payload: TagCreate, current_user: CurrentUserDep, db: SessionDep) -> Tag:
    """Create a tag ahead of first use."""
    return tag_service.create_tag(db, payload.name, payload.description)
