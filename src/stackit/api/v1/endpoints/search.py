# src/stackit/api/v1/endpoints/search.py
"""Site-wide search endpoint for the StackIt API."""

from typing import Literal

from fastapi import APIRouter, Query

from stackit.schemas.search import SearchResponse
from stackit.services import search as search_service

from ..dependencies import SessionDep

router = APIRouter(prefix="/search", tags=["search"])


@router.get("/", response_model=SearchResponse)
def search(
    db: SessionDep,
    q: str | None = Query(None, description="Case-insensitive substring to look for"),
    search_type: Literal["all", "questions", "answers", "users", "tags"] = Query(
        "all", alias="type", description="Collection to search"
    ),
    skip: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
) -> SearchResponse:
    """Search questions, answers, users and tags; a blank query is rejected."""
    results = search_service.search(db, q, search_type=search_type, skip=skip, limit=limit)
    return SearchResponse.model_validate(results)
