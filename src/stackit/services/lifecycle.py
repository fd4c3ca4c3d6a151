"""Creation and cascade deletion of questions and answers.

Deletions run child-first: ledger entries, then answers, then the question,
so a partially applied deletion never leaves an answer pointing at a missing
question.
"""

from __future__ import annotations

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from stackit.core.errors import InvalidArgumentError, NotFoundError
from stackit.models import Answer, Question, Vote, question_tags
from stackit.models.vote import VOTE_TARGET_ANSWER, VOTE_TARGET_QUESTION

logger = logging.getLogger(__name__)


def create_answer(db: Session, question_id: int, author_id: int, content: str) -> Answer:
    """Attach a new answer to an existing, open question."""
    question = db.get(Question, question_id)
    if question is None:
        raise NotFoundError("Question not found")
    if question.is_closed:
        raise InvalidArgumentError("Question is closed to new answers")

    answer = Answer(content=content, author_id=author_id, question_id=question.id)
    db.add(answer)
    db.commit()
    db.refresh(answer)
    return answer


def delete_question(db: Session, question_id: int) -> None:
    """Delete a question together with its answers and their votes.

    Raises:
        NotFoundError: If the question does not exist.
    """
    question = db.get(Question, question_id)
    if question is None:
        raise NotFoundError("Question not found")

    answer_ids = list(db.scalars(select(Answer.id).where(Answer.question_id == question_id)))

    # Drop the accepted-answer reference before the answer rows disappear.
    db.execute(
        update(Question).where(Question.id == question_id).values(accepted_answer_id=None)
    )
    if answer_ids:
        db.execute(
            delete(Vote).where(
                Vote.target_type == VOTE_TARGET_ANSWER,
                Vote.target_id.in_(answer_ids),
            )
        )
    db.execute(
        delete(Vote).where(
            Vote.target_type == VOTE_TARGET_QUESTION,
            Vote.target_id == question_id,
        )
    )
    db.execute(delete(Answer).where(Answer.question_id == question_id))
    db.execute(question_tags.delete().where(question_tags.c.question_id == question_id))
    db.execute(delete(Question).where(Question.id == question_id))
    db.commit()
    logger.info("Deleted question %s with %s answer(s)", question_id, len(answer_ids))


def delete_answer(db: Session, answer_id: int) -> None:
    """Delete an answer and detach it from its question.

    If the question is already gone the detach step matches nothing.

    Raises:
        NotFoundError: If the answer does not exist.
    """
    answer = db.get(Answer, answer_id)
    if answer is None:
        raise NotFoundError("Answer not found")
    question_id = answer.question_id

    db.execute(
        update(Question)
        .where(Question.id == question_id, Question.accepted_answer_id == answer_id)
        .values(accepted_answer_id=None)
    )
    db.execute(
        delete(Vote).where(
            Vote.target_type == VOTE_TARGET_ANSWER,
            Vote.target_id == answer_id,
        )
    )
    db.execute(delete(Answer).where(Answer.id == answer_id))

    question = db.get(Question, question_id)
    if question is not None:
        # Reload the answer list on next access.
        db.expire(question, ["answers"])
    db.commit()
    logger.info("Deleted answer %s from question %s", answer_id, question_id)
