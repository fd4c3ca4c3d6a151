# src/stackit/scripts/reconcile_votes.py
"""
Maintenance job comparing stored vote counters with the vote ledger.

Request handlers only ever apply deltas; this script is the offline audit.
Run it after restoring backups or manual data fixes:

    python -m stackit.scripts.reconcile_votes          # report only
    python -m stackit.scripts.reconcile_votes --repair # rewrite drifted counters
"""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from stackit.core.log_config import configure_logging
from stackit.db.session import SessionLocal
from stackit.models import Answer, Question, Vote
from stackit.models.vote import VOTE_TARGET_ANSWER, VOTE_TARGET_QUESTION

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CounterDrift:
    """A target whose stored counter disagrees with its ledger entries."""

    target_type: str
    target_id: int
    stored: int
    ledger: int


def find_counter_drift(db: Session) -> list[CounterDrift]:
    """Return every question or answer whose counter differs from its ledger sum."""
    drift: list[CounterDrift] = []
    for target_type, model in ((VOTE_TARGET_QUESTION, Question), (VOTE_TARGET_ANSWER, Answer)):
        ledger_sum = (
            select(func.coalesce(func.sum(Vote.value), 0))
            .where(Vote.target_type == target_type, Vote.target_id == model.id)
            .scalar_subquery()
        )
        rows = db.execute(
            select(model.id, model.votes, ledger_sum).where(model.votes != ledger_sum)
        ).all()
        drift.extend(
            CounterDrift(target_type, target_id, stored, int(ledger))
            for target_id, stored, ledger in rows
        )
    return drift


def repair_counter_drift(db: Session, drift: list[CounterDrift]) -> None:
    """Overwrite drifted counters with their ledger sums."""
    models = {VOTE_TARGET_QUESTION: Question, VOTE_TARGET_ANSWER: Answer}
    for item in drift:
        model = models[item.target_type]
        db.execute(update(model).where(model.id == item.target_id).values(votes=item.ledger))
    db.commit()


def main() -> None:
    parser = argparse.ArgumentParser(description="Audit vote counters against the vote ledger")
    parser.add_argument(
        "--repair",
        action="store_true",
        help="Rewrite drifted counters from the ledger instead of only reporting them.",
    )
    args = parser.parse_args()
    configure_logging()

    db = SessionLocal()
    try:
        drift = find_counter_drift(db)
        for item in drift:
            logger.warning(
                "%s %s: stored=%s ledger=%s",
                item.target_type,
                item.target_id,
                item.stored,
                item.ledger,
            )
        if drift and args.repair:
            repair_counter_drift(db, drift)
            logger.info("Repaired %s counter(s)", len(drift))
        elif not drift:
            logger.info("All vote counters match the ledger")
    finally:
        db.close()

    if drift and not args.repair:
        sys.exit(1)


if __name__ == "__main__":
    main()
