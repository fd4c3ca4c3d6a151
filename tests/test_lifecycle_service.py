# tests/test_lifecycle_service.py
"""Tests for answer creation and cascade deletion."""

import pytest
from sqlalchemy import func, select

from stackit.core.errors import InvalidArgumentError, NotFoundError
from stackit.models import Answer, Question, Tag, Vote, question_tags
from stackit.models.vote import VOTE_TARGET_ANSWER, VOTE_TARGET_QUESTION
from stackit.services.acceptance import accept_answer
from stackit.services.lifecycle import create_answer, delete_answer, delete_question
from stackit.services.voting import cast_vote
from tests.utils import ledger_sum


def _count(db_session, stmt) -> int:
    return db_session.scalar(select(func.count()).select_from(stmt.subquery()))


def test_create_answer_attaches_to_question(db_session, question, other_user) -> None:
    answer = create_answer(db_session, question.id, other_user.id, "Slice it with [::-1].")

    assert answer.id is not None
    assert answer.question_id == question.id
    assert answer.votes == 0
    assert answer.is_accepted is False


def test_create_answer_for_missing_question(db_session, other_user) -> None:
    with pytest.raises(NotFoundError):
        create_answer(db_session, 9999, other_user.id, "Nobody will read this.")


def test_create_answer_for_closed_question(db_session, question, other_user) -> None:
    question.is_closed = True
    db_session.flush()

    with pytest.raises(InvalidArgumentError):
        create_answer(db_session, question.id, other_user.id, "Too late for this one.")


def test_delete_question_cascades(
    db_session, question, answer, second_answer, test_user, other_user, third_user
) -> None:
    cast_vote(db_session, other_user.id, question.id, VOTE_TARGET_QUESTION, 1)
    cast_vote(db_session, test_user.id, answer.id, VOTE_TARGET_ANSWER, 1)
    cast_vote(db_session, other_user.id, second_answer.id, VOTE_TARGET_ANSWER, -1)
    accept_answer(db_session, question.id, answer.id, test_user.id)
    question_id = question.id
    answer_ids = [answer.id, second_answer.id]

    delete_question(db_session, question_id)

    assert db_session.scalar(select(Question).where(Question.id == question_id)) is None
    assert _count(db_session, select(Answer).where(Answer.id.in_(answer_ids))) == 0
    assert _count(db_session, select(Vote)) == 0
    assert (
        _count(db_session, select(question_tags).where(question_tags.c.question_id == question_id))
        == 0
    )
    # Tags outlive the questions that used them.
    assert db_session.scalar(select(Tag).where(Tag.name == "python")) is not None


def test_delete_question_leaves_other_questions_alone(
    db_session, question, other_question, answer, test_user
) -> None:
    other_answer = create_answer(db_session, other_question.id, test_user.id, "Use a profiler.")
    cast_vote(db_session, test_user.id, other_question.id, VOTE_TARGET_QUESTION, 1)
    cast_vote(db_session, test_user.id, other_answer.id, VOTE_TARGET_ANSWER, 1)

    delete_question(db_session, question.id)

    assert db_session.scalar(select(Answer).where(Answer.id == other_answer.id)) is not None
    assert ledger_sum(db_session, VOTE_TARGET_QUESTION, other_question.id) == 1
    assert ledger_sum(db_session, VOTE_TARGET_ANSWER, other_answer.id) == 1


def test_delete_missing_question(db_session) -> None:
    with pytest.raises(NotFoundError):
        delete_question(db_session, 9999)


def test_delete_accepted_answer_clears_acceptance(
    db_session, question, answer, second_answer, test_user, third_user
) -> None:
    cast_vote(db_session, third_user.id, answer.id, VOTE_TARGET_ANSWER, 1)
    accept_answer(db_session, question.id, answer.id, test_user.id)
    answer_id = answer.id

    delete_answer(db_session, answer_id)

    db_session.refresh(question)
    assert question.accepted_answer_id is None
    assert db_session.scalar(select(Answer).where(Answer.id == answer_id)) is None
    assert ledger_sum(db_session, VOTE_TARGET_ANSWER, answer_id) == 0
    assert [a.id for a in question.answers] == [second_answer.id]


def test_delete_unaccepted_answer_keeps_acceptance(
    db_session, question, answer, second_answer, test_user
) -> None:
    accept_answer(db_session, question.id, answer.id, test_user.id)

    delete_answer(db_session, second_answer.id)

    db_session.refresh(question)
    assert question.accepted_answer_id == answer.id
    assert question.answer_count == 1


def test_delete_missing_answer(db_session) -> None:
    with pytest.raises(NotFoundError):
        delete_answer(db_session, 9999)
