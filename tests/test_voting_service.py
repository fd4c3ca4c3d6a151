# tests/test_voting_service.py
"""Tests for the vote ledger service."""

import pytest
from sqlalchemy import insert, update

from stackit.core.errors import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    UnauthorizedError,
)
from stackit.core.settings import settings
from stackit.models import Question, Vote
from stackit.models.vote import VOTE_TARGET_ANSWER, VOTE_TARGET_QUESTION
from stackit.services import voting
from stackit.services.voting import VoteOutcome, cast_vote, get_user_vote
from tests.utils import ledger_rows, ledger_sum


def test_first_upvote_creates_ledger_entry(db_session, question, other_user) -> None:
    outcome = cast_vote(db_session, other_user.id, question.id, VOTE_TARGET_QUESTION, 1)

    assert outcome == VoteOutcome(votes=1, user_vote=1)
    rows = ledger_rows(db_session, other_user.id, VOTE_TARGET_QUESTION, question.id)
    assert [row.value for row in rows] == [1]
    assert question.votes == 1


def test_repeated_direction_retracts_vote(db_session, question, other_user) -> None:
    cast_vote(db_session, other_user.id, question.id, VOTE_TARGET_QUESTION, 1)
    outcome = cast_vote(db_session, other_user.id, question.id, VOTE_TARGET_QUESTION, 1)

    assert outcome == VoteOutcome(votes=0, user_vote=0)
    assert ledger_rows(db_session, other_user.id, VOTE_TARGET_QUESTION, question.id) == []


def test_opposite_direction_flips_vote(db_session, question, other_user) -> None:
    cast_vote(db_session, other_user.id, question.id, VOTE_TARGET_QUESTION, 1)
    outcome = cast_vote(db_session, other_user.id, question.id, VOTE_TARGET_QUESTION, -1)

    # The flip moves the counter by two in one step.
    assert outcome == VoteOutcome(votes=-1, user_vote=-1)
    rows = ledger_rows(db_session, other_user.id, VOTE_TARGET_QUESTION, question.id)
    assert [row.value for row in rows] == [-1]


def test_counter_matches_ledger_across_voters(
    db_session, question, test_user, other_user, third_user
) -> None:
    sequence = [
        (other_user, 1),
        (third_user, -1),
        (test_user, 1),
        (third_user, 1),
        (other_user, 1),
        (test_user, -1),
    ]
    for user, value in sequence:
        outcome = cast_vote(db_session, user.id, question.id, VOTE_TARGET_QUESTION, value)
        assert outcome.votes == ledger_sum(db_session, VOTE_TARGET_QUESTION, question.id)

    assert question.votes == 0
    assert get_user_vote(db_session, other_user.id, question.id, VOTE_TARGET_QUESTION) == 0
    assert get_user_vote(db_session, third_user.id, question.id, VOTE_TARGET_QUESTION) == 1
    assert get_user_vote(db_session, test_user.id, question.id, VOTE_TARGET_QUESTION) == -1


def test_answer_votes_are_separate_from_question_votes(
    db_session, question, answer, test_user
) -> None:
    cast_vote(db_session, test_user.id, answer.id, VOTE_TARGET_ANSWER, 1)

    assert answer.votes == 1
    assert question.votes == 0
    assert get_user_vote(db_session, test_user.id, answer.id, VOTE_TARGET_ANSWER) == 1
    assert get_user_vote(db_session, test_user.id, answer.id, VOTE_TARGET_QUESTION) == 0


@pytest.mark.parametrize("value", [0, 2, 5, -2, True, "1", None])
def test_invalid_value_is_rejected_without_mutation(
    db_session, question, other_user, value
) -> None:
    with pytest.raises(InvalidArgumentError):
        cast_vote(db_session, other_user.id, question.id, VOTE_TARGET_QUESTION, value)

    assert ledger_rows(db_session, other_user.id, VOTE_TARGET_QUESTION, question.id) == []
    assert question.votes == 0


def test_unknown_target_type_is_rejected(db_session, question, other_user) -> None:
    with pytest.raises(InvalidArgumentError):
        cast_vote(db_session, other_user.id, question.id, "comment", 1)


def test_missing_target_raises_not_found(db_session, other_user) -> None:
    with pytest.raises(NotFoundError):
        cast_vote(db_session, other_user.id, 9999, VOTE_TARGET_QUESTION, 1)
    with pytest.raises(NotFoundError):
        cast_vote(db_session, other_user.id, 9999, VOTE_TARGET_ANSWER, -1)


def test_anonymous_vote_is_unauthorized(db_session, question) -> None:
    with pytest.raises(UnauthorizedError):
        cast_vote(db_session, None, question.id, VOTE_TARGET_QUESTION, 1)

    assert question.votes == 0


def test_lost_insert_race_is_retried_as_existing_vote(
    db_session, question, other_user, monkeypatch
) -> None:
    """A concurrent downvote lands between our read and our insert."""
    real_scalar = db_session.scalar
    raced = []

    def racing_scalar(statement, *args, **kwargs):
        result = real_scalar(statement, *args, **kwargs)
        if not raced and str(statement).startswith("SELECT votes.value"):
            raced.append(True)
            db_session.execute(
                insert(Vote).values(
                    user_id=other_user.id,
                    target_type=VOTE_TARGET_QUESTION,
                    target_id=question.id,
                    value=-1,
                )
            )
            db_session.execute(
                update(Question)
                .where(Question.id == question.id)
                .values(votes=Question.votes - 1)
            )
        return result

    monkeypatch.setattr(db_session, "scalar", racing_scalar)

    outcome = cast_vote(db_session, other_user.id, question.id, VOTE_TARGET_QUESTION, 1)

    assert raced
    # The insert lost, so the retry flipped the concurrent downvote.
    assert outcome == VoteOutcome(votes=1, user_vote=1)
    rows = ledger_rows(db_session, other_user.id, VOTE_TARGET_QUESTION, question.id)
    assert [row.value for row in rows] == [1]
    assert ledger_sum(db_session, VOTE_TARGET_QUESTION, question.id) == 1


def test_lost_compare_and_set_is_retried(db_session, question, other_user, monkeypatch) -> None:
    cast_vote(db_session, other_user.id, question.id, VOTE_TARGET_QUESTION, 1)

    real_apply = voting._apply_vote
    attempts = []

    def flaky_apply(*args, **kwargs):
        attempts.append(True)
        if len(attempts) == 1:
            return None
        return real_apply(*args, **kwargs)

    monkeypatch.setattr(voting, "_apply_vote", flaky_apply)

    outcome = cast_vote(db_session, other_user.id, question.id, VOTE_TARGET_QUESTION, -1)

    assert len(attempts) == 2
    assert outcome == VoteOutcome(votes=-1, user_vote=-1)


def test_exhausted_retries_raise_conflict(db_session, question, other_user, monkeypatch) -> None:
    attempts = []
    rollbacks = []

    def always_contended(*args, **kwargs):
        attempts.append(True)
        return None

    monkeypatch.setattr(voting, "_apply_vote", always_contended)
    monkeypatch.setattr(db_session, "rollback", lambda: rollbacks.append(True))
    monkeypatch.setattr(settings, "vote_max_retries", 2)

    with pytest.raises(ConflictError):
        cast_vote(db_session, other_user.id, question.id, VOTE_TARGET_QUESTION, 1)

    assert len(attempts) == 2
    assert rollbacks == [True]


def test_get_user_vote_defaults_to_zero(db_session, question, other_user) -> None:
    assert get_user_vote(db_session, other_user.id, question.id, VOTE_TARGET_QUESTION) == 0


def test_get_user_vote_rejects_unknown_target_type(db_session, question, other_user) -> None:
    with pytest.raises(InvalidArgumentError):
        get_user_vote(db_session, other_user.id, question.id, "comment")


def test_committed_votes_survive_later_rollback(
    db_session, question, test_user, other_user
) -> None:
    cast_vote(db_session, other_user.id, question.id, VOTE_TARGET_QUESTION, 1)
    cast_vote(db_session, test_user.id, question.id, VOTE_TARGET_QUESTION, 1)

    db_session.rollback()

    assert ledger_sum(db_session, VOTE_TARGET_QUESTION, question.id) == 2
    assert db_session.get(Question, question.id).votes == 2
