# src/stackit/api/v1/endpoints/answers.py
"""Answer-related endpoints for the StackIt API."""

from collections.abc import Sequence
from typing import Literal

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from stackit.models import Answer
from stackit.schemas.answer import AnswerCreate, AnswerResponse, AnswerUpdate
from stackit.services import lifecycle

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/answers", tags=["answers"])


def _get_answer_or_404(db: Session, answer_id: int) -> Answer:
    answer = db.get(Answer, answer_id)
    if answer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Answer not found")
    return answer


@router.get("/", response_model=list[AnswerResponse])
def list_answers(
    db: SessionDep,
    question_id: int | None = Query(None, description="Only answers to this question"),
    skip: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
    sort_by: Literal["created_at", "votes"] = Query("created_at"),
    sort_order: Literal["asc", "desc"] = Query("desc"),
) -> Sequence[Answer]:
    """List answers, newest first unless another order is requested."""
    stmt = select(Answer)
    if question_id is not None:
        stmt = stmt.where(Answer.question_id == question_id)
    column = getattr(Answer, sort_by)
    if sort_order == "desc":
        stmt = stmt.order_by(column.desc(), Answer.id.desc())
    else:
        stmt = stmt.order_by(column.asc(), Answer.id.asc())
    stmt = stmt.offset(skip).limit(limit)
    return db.scalars(stmt).all()


@router.post("/", response_model=AnswerResponse, status_code=status.HTTP_201_CREATED)
def create_answer(
    payload: AnswerCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Answer:
    """Answer an existing question."""
    return lifecycle.create_answer(db, payload.question_id, current_user.id, payload.content)


@router.get("/{answer_id}", response_model=AnswerResponse)
def get_answer(answer_id: int, db: SessionDep) -> Answer:
    """Return a single answer."""
    return _get_answer_or_404(db, answer_id)


@router.put("/{answer_id}", response_model=AnswerResponse)
def update_answer(
    answer_id: int,
    payload: AnswerUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Answer:
    """Edit an answer's content (author only); its question never changes."""
    answer = _get_answer_or_404(db, answer_id)
    if answer.author_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only edit your own answers",
        )
    answer.content = payload.content
    db.commit()
    db.refresh(answer)
    return answer


@router.delete("/{answer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_answer(
    answer_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> None:
    """Delete an answer and detach it from its question (author or admin)."""
    answer = _get_answer_or_404(db, answer_id)
    if answer.author_id != current_user.id and not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only delete your own answers",
        )
    lifecycle.delete_answer(db, answer_id)
