"""Vote ledger for questions and answers.

Every user holds at most one vote per target. Casting the same direction twice
retracts the vote, casting the opposite direction flips it. The target's
``votes`` counter is kept equal to the sum of its ledger entries by applying
deltas in the same transaction as the ledger change.

Concurrency rules:

* the insert of a new ledger entry runs inside a SAVEPOINT and relies on the
  composite primary key; a losing concurrent insert is retried through the
  existing-vote path;
* retracting and flipping are compare-and-set statements conditioned on the
  value that was read, so a concurrent change makes them match zero rows and
  the attempt is retried;
* counters only move through ``UPDATE ... SET votes = votes + :delta``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stackit.core.errors import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    UnauthorizedError,
)
from stackit.core.settings import settings
from stackit.models import Answer, Question, Vote
from stackit.models.vote import (
    VOTE_DOWN,
    VOTE_TARGET_ANSWER,
    VOTE_TARGET_QUESTION,
    VOTE_UP,
)

logger = logging.getLogger(__name__)

_TARGET_MODELS: dict[str, type[Question] | type[Answer]] = {
    VOTE_TARGET_QUESTION: Question,
    VOTE_TARGET_ANSWER: Answer,
}


@dataclass(frozen=True)
class VoteOutcome:
    """Result of a vote: the target's counter and the caller's vote state."""

    votes: int
    user_vote: int


def _target_model(target_type: str) -> type[Question] | type[Answer]:
    try:
        return _TARGET_MODELS[target_type]
    except KeyError as err:
        raise InvalidArgumentError(f"Unknown vote target type: {target_type!r}") from err


def _validate_value(value: object) -> int:
    # bool is an int subclass; True must not count as an upvote.
    if isinstance(value, bool) or value not in (VOTE_UP, VOTE_DOWN):
        raise InvalidArgumentError("Vote value must be 1 (upvote) or -1 (downvote)")
    return int(value)  # type: ignore[call-overload]


def _ledger_key(user_id: int, target_id: int, target_type: str) -> tuple:
    return (
        Vote.user_id == user_id,
        Vote.target_type == target_type,
        Vote.target_id == target_id,
    )


def _read_counter(db: Session, model: type[Question] | type[Answer], target_id: int) -> int | None:
    return db.scalar(select(model.votes).where(model.id == target_id))


def _apply_delta(
    db: Session,
    model: type[Question] | type[Answer],
    target_id: int,
    delta: int,
) -> None:
    if delta:
        db.execute(
            update(model).where(model.id == target_id).values(votes=model.votes + delta)
        )


def _try_insert(db: Session, user_id: int, target_id: int, target_type: str, value: int) -> bool:
    """Insert a ledger entry; return False if a concurrent insert won."""
    try:
        with db.begin_nested():
            db.add(
                Vote(
                    user_id=user_id,
                    target_id=target_id,
                    target_type=target_type,
                    value=value,
                )
            )
    except IntegrityError:
        return False
    return True


def _apply_vote(
    db: Session,
    model: type[Question] | type[Answer],
    *,
    user_id: int,
    target_id: int,
    target_type: str,
    value: int,
) -> int | None:
    """Run one attempt of the ledger state machine.

    Returns:
        The caller's resulting vote state, or None when a concurrent writer
        changed the ledger entry between the read and the write.
    """
    key = _ledger_key(user_id, target_id, target_type)
    existing = db.scalar(select(Vote.value).where(*key))

    if existing is None:
        if not _try_insert(db, user_id, target_id, target_type, value):
            return None
        _apply_delta(db, model, target_id, value)
        return value

    if existing == value:
        result = db.execute(delete(Vote).where(*key, Vote.value == existing))
        if result.rowcount != 1:
            return None
        _apply_delta(db, model, target_id, -existing)
        return 0

    result = db.execute(update(Vote).where(*key, Vote.value == existing).values(value=value))
    if result.rowcount != 1:
        return None
    _apply_delta(db, model, target_id, value - existing)
    return value


def cast_vote(
    db: Session,
    user_id: int | None,
    target_id: int,
    target_type: str,
    value: object,
) -> VoteOutcome:
    """Record ``user_id``'s vote on a question or answer.

    Args:
        db: Database session.
        user_id: Authenticated voter.
        target_id: Primary key of the question or answer.
        target_type: ``"question"`` or ``"answer"``.
        value: 1 for an upvote, -1 for a downvote.

    Returns:
        The target's counter after the vote and the caller's vote state
        (1, -1, or 0 when the vote was retracted).

    Raises:
        UnauthorizedError: If no caller identity is supplied.
        InvalidArgumentError: If ``value`` or ``target_type`` is invalid.
        NotFoundError: If the target does not exist.
        ConflictError: If concurrent writers kept winning for every retry.
    """
    if user_id is None:
        raise UnauthorizedError("Authentication required")
    vote_value = _validate_value(value)
    model = _target_model(target_type)

    if _read_counter(db, model, target_id) is None:
        raise NotFoundError(f"{target_type.capitalize()} not found")

    for attempt in range(1, settings.vote_max_retries + 1):
        user_vote = _apply_vote(
            db,
            model,
            user_id=user_id,
            target_id=target_id,
            target_type=target_type,
            value=vote_value,
        )
        if user_vote is None:
            logger.debug(
                "Vote ledger contention on %s %s for user %s (attempt %s)",
                target_type,
                target_id,
                user_id,
                attempt,
            )
            continue

        votes = _read_counter(db, model, target_id)
        if votes is None:
            # Target removed by a concurrent delete.
            db.rollback()
            raise NotFoundError(f"{target_type.capitalize()} not found")
        db.commit()
        return VoteOutcome(votes=votes, user_vote=user_vote)

    db.rollback()
    raise ConflictError("Vote could not be recorded because of concurrent updates")


def get_user_vote(db: Session, user_id: int, target_id: int, target_type: str) -> int:
    """Return the caller's current vote on a target, 0 when none is recorded."""
    _target_model(target_type)
    value = db.scalar(select(Vote.value).where(*_ledger_key(user_id, target_id, target_type)))
    return value or 0
