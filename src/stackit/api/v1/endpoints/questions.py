# src/stackit/api/v1/endpoints/questions.py
"""Question-related endpoints for the StackIt API."""

from collections.abc import Sequence
from typing import Literal

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy import or_, select, update
from sqlalchemy.orm import Session

from stackit.models import Question, Tag, User
from stackit.schemas.common import MessageResponse
from stackit.schemas.question import (
    AcceptAnswerRequest,
    QuestionCreate,
    QuestionDetail,
    QuestionSummary,
    QuestionUpdate,
)
from stackit.services import acceptance, lifecycle
from stackit.services.tags import normalize_tag_name, resolve_tags

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/questions", tags=["questions"])


def _get_question_or_404(db: Session, question_id: int) -> Question:
    question = db.get(Question, question_id)
    if question is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Question not found")
    return question


def _ensure_author_or_admin(question: Question, user: User, action: str) -> None:
    if question.author_id != user.id and not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"You can only {action} your own questions",
        )


def _to_detail(question: Question) -> QuestionDetail:
    detail = QuestionDetail.model_validate(question)
    detail.answers.sort(key=lambda answer: (-answer.votes, answer.created_at, answer.id))
    return detail


@router.get("/", response_model=list[QuestionSummary])
def list_questions(
    db: SessionDep,
    tag: str | None = Query(None, description="Only questions carrying this tag"),
    search: str | None = Query(None, description="Substring filter on title or description"),
    skip: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
    sort_by: Literal["created_at", "votes", "views"] = Query("created_at"),
    sort_order: Literal["asc", "desc"] = Query("desc"),
) -> Sequence[Question]:
    """List questions, newest first unless another order is requested.

    Args:
        db: Database session
        tag: Tag name filter (case-insensitive)
        search: Case-insensitive substring matched against title and description
        skip: Number of questions to skip
        limit: Maximum number of questions to return (max 100)
        sort_by: Column to order by
        sort_order: Direction of the ordering; ties fall back to id
    """
    stmt = select(Question)
    if tag:
        stmt = stmt.where(Question.tags.any(Tag.name == normalize_tag_name(tag)))
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(
            or_(Question.title.ilike(pattern), Question.description.ilike(pattern))
        )
    column = getattr(Question, sort_by)
    if sort_order == "desc":
        stmt = stmt.order_by(column.desc(), Question.id.desc())
    else:
        stmt = stmt.order_by(column.asc(), Question.id.asc())
    stmt = stmt.offset(skip).limit(limit)
    return db.scalars(stmt).all()


@router.post("/", response_model=QuestionDetail, status_code=status.HTTP_201_CREATED)
def create_question(
    payload: QuestionCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> QuestionDetail:
    """Ask a question; unknown tags are created on first use."""
    question = Question(
        title=payload.title,
        description=payload.description,
        author_id=current_user.id,
        tags=resolve_tags(db, payload.tags),
    )
    db.add(question)
    db.commit()
    db.refresh(question)
    return _to_detail(question)


@router.get("/{question_id}", response_model=QuestionDetail)
def get_question(question_id: int, db: SessionDep) -> QuestionDetail:
    """Return a question with its answers and count the view."""
    result = db.execute(
        update(Question).where(Question.id == question_id).values(views=Question.views + 1)
    )
    if result.rowcount == 0:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Question not found")
    db.commit()
    question = _get_question_or_404(db, question_id)
    db.refresh(question)
    return _to_detail(question)


@router.put("/{question_id}", response_model=QuestionDetail)
def update_question(
    question_id: int,
    payload: QuestionUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> QuestionDetail:
    """Edit title, description and tags (author only)."""
    question = _get_question_or_404(db, question_id)
    if question.author_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only edit your own questions",
        )
    question.title = payload.title
    question.description = payload.description
    question.tags = resolve_tags(db, payload.tags)
    db.commit()
    db.refresh(question)
    return _to_detail(question)


@router.delete("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_question(
    question_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> None:
    """Delete a question and all of its answers (author or admin)."""
    question = _get_question_or_404(db, question_id)
    _ensure_author_or_admin(question, current_user, "delete")
    lifecycle.delete_question(db, question_id)


@router.post("/{question_id}/accept-answer", response_model=MessageResponse)
def accept_answer(
    question_id: int,
    payload: AcceptAnswerRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageResponse:
    """Mark one answer as accepted (question author only)."""
    acceptance.accept_answer(db, question_id, payload.answer_id, current_user.id)
    return MessageResponse(message="Answer accepted successfully")


@router.delete("/{question_id}/accept-answer", response_model=MessageResponse)
def unaccept_answer(
    question_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageResponse:
    """Withdraw the accepted answer (question author only)."""
    acceptance.unaccept_answer(db, question_id, current_user.id)
    return MessageResponse(message="Acceptance withdrawn")
