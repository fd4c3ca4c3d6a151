"""Answer acceptance for questions."""

from __future__ import annotations

import logging

from sqlalchemy import update
from sqlalchemy.orm import Session

from stackit.core.errors import (
    ForbiddenError,
    InvalidArgumentError,
    NotFoundError,
    UnauthorizedError,
)
from stackit.models import Answer, Question

logger = logging.getLogger(__name__)


def _get_owned_question(db: Session, question_id: int, caller_id: int | None) -> Question:
    if caller_id is None:
        raise UnauthorizedError("Authentication required")
    question = db.get(Question, question_id)
    if question is None:
        raise NotFoundError("Question not found")
    if question.author_id != caller_id:
        raise ForbiddenError("Only the question author can accept answers")
    return question


def _clear_accepted_flags(db: Session, question_id: int, keep_answer_id: int | None = None) -> None:
    stmt = update(Answer).where(
        Answer.question_id == question_id,
        Answer.is_accepted.is_(True),
    )
    if keep_answer_id is not None:
        stmt = stmt.where(Answer.id != keep_answer_id)
    db.execute(stmt.values(is_accepted=False))


def accept_answer(
    db: Session,
    question_id: int,
    answer_id: int,
    caller_id: int | None,
) -> Question:
    """Mark ``answer_id`` as the accepted answer of ``question_id``.

    Any previously accepted answer of the question loses its flag, so at most
    one answer per question is accepted at a time.

    Raises:
        UnauthorizedError: If no caller identity is supplied.
        NotFoundError: If the question or the answer does not exist.
        ForbiddenError: If the caller did not author the question.
        InvalidArgumentError: If the answer belongs to another question.
    """
    question = _get_owned_question(db, question_id, caller_id)

    answer = db.get(Answer, answer_id)
    if answer is None:
        raise NotFoundError("Answer not found")
    if answer.question_id != question.id:
        raise InvalidArgumentError("Answer does not belong to this question")

    previous_id = question.accepted_answer_id
    _clear_accepted_flags(db, question.id, keep_answer_id=answer.id)
    question.accepted_answer_id = answer.id
    answer.is_accepted = True
    db.commit()

    if previous_id not in (None, answer.id):
        logger.info(
            "Question %s acceptance moved from answer %s to %s",
            question.id,
            previous_id,
            answer.id,
        )
    return question


def unaccept_answer(db: Session, question_id: int, caller_id: int | None) -> Question:
    """Withdraw the acceptance on ``question_id``; a no-op when none is set."""
    question = _get_owned_question(db, question_id, caller_id)
    _clear_accepted_flags(db, question.id)
    question.accepted_answer_id = None
    db.commit()
    return question
