# src/stackit/api/v1/endpoints/votes.py
"""Vote-related endpoints for the StackIt API."""

from typing import Literal

from fastapi import APIRouter
from sqlalchemy.orm import Session

from stackit.models.vote import VOTE_TARGET_ANSWER, VOTE_TARGET_QUESTION
from stackit.schemas.vote import VoteCreate, VoteResponse
from stackit.services import voting

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(tags=["votes"])


def _vote(db: Session, user_id: int, target_id: int, target_type: str, value: int) -> VoteResponse:
    outcome = voting.cast_vote(db, user_id, target_id, target_type, value)
    return VoteResponse(votes=outcome.votes, user_vote=outcome.user_vote)


@router.post("/questions/{question_id}/vote", response_model=VoteResponse)
def vote_question(
    question_id: int,
    vote_data: VoteCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> VoteResponse:
    """Up- or down-vote a question; repeating the same direction retracts it."""
    return _vote(db, current_user.id, question_id, VOTE_TARGET_QUESTION, vote_data.value)


@router.post("/answers/{answer_id}/vote", response_model=VoteResponse)
def vote_answer(
    answer_id: int,
    vote_data: VoteCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> VoteResponse:
    """Up- or down-vote an answer; repeating the same direction retracts it."""
    return _vote(db, current_user.id, answer_id, VOTE_TARGET_ANSWER, vote_data.value)


@router.get("/votes/{target_type}/{target_id}/mine")
def get_my_vote(
    target_type: Literal["question", "answer"],
    target_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> dict[str, int]:
    """Get the current user's vote on a question or answer (0 when none)."""
    return {"value": voting.get_user_vote(db, current_user.id, target_id, target_type)}
