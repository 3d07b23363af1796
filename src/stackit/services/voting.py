"""Vote ledger operations for questions and answers.

Each ledger entry is its own row keyed by ``(entity_id, voter_id)``. A vote is
applied as one keyed insert, delete or conditional update on that row, and
the entity's ``vote_count`` moves by the matching signed delta in SQL, so two
voters acting at the same time never overwrite each other's entries.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stackit.core.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from stackit.models import Answer, AnswerVote, Question, QuestionVote, User
from stackit.models.notification import NOTIFICATION_VOTE
from stackit.models.vote import VOTE_DOWN, VOTE_UP
from stackit.services import reputation
from stackit.services.notifications import notify

logger = logging.getLogger(__name__)

KIND_QUESTION = "question"
KIND_ANSWER = "answer"

DIRECTIONS = {"up": VOTE_UP, "down": VOTE_DOWN}
DIRECTION_NAMES = {VOTE_UP: "up", VOTE_DOWN: "down"}


@dataclass(frozen=True)
class VoteResult:
    """Outcome of a vote: the new aggregate and the voter's resulting direction."""

    vote_count: int
    user_vote: str | None


@dataclass(frozen=True)
class _Ledger:
    label: str
    target: Any
    vote: Any
    key: Any


_LEDGERS = {
    KIND_QUESTION: _Ledger("question", Question, QuestionVote, QuestionVote.question_id),
    KIND_ANSWER: _Ledger("answer", Answer, AnswerVote, AnswerVote.answer_id),
}


def _ledger(kind: str) -> _Ledger:
    try:
        return _LEDGERS[kind]
    except KeyError as err:
        raise ValidationError(f"Unknown vote target: {kind}") from err


def _parse_direction(direction: str) -> int:
    try:
        return DIRECTIONS[direction]
    except KeyError as err:
        raise ValidationError('Vote type must be "up" or "down"', code="invalid_vote_type") from err


def get_live_target(db: Session, kind: str, target_id: int) -> Question | Answer:
    """Return the question or answer, raising NotFoundError if missing or soft-deleted.

    An answer whose question was soft-deleted counts as deleted too.
    """
    ledger = _ledger(kind)
    stmt = select(ledger.target).where(
        ledger.target.id == target_id,
        ledger.target.is_deleted.is_(False),
    )
    if kind == KIND_ANSWER:
        stmt = stmt.join(Question, Question.id == Answer.question_id).where(
            Question.is_deleted.is_(False)
        )
    target = db.scalar(stmt)
    if target is None:
        raise NotFoundError(f"{ledger.label.capitalize()} not found")
    return target


def _current_direction(db: Session, ledger: _Ledger, entry: tuple[Any, ...]) -> int | None:
    """Read the voter's ledger entry, locking the row where the database supports it."""
    return db.scalar(select(ledger.vote.direction).where(*entry).with_for_update())


def _conflict(db: Session, err: Exception | None = None) -> ConflictError:
    db.rollback()
    conflict = ConflictError(
        "Your vote changed while it was being recorded, please retry",
        code="vote_conflict",
    )
    if err is not None:
        conflict.__cause__ = err
    return conflict


def apply_vote(
    db: Session,
    *,
    kind: str,
    target_id: int,
    voter: User,
    direction: str,
) -> VoteResult:
    """Record ``voter``'s vote on a question or answer.

    No previous entry adds one, the same direction again removes it, and the
    opposite direction flips it. The ledger row, the aggregate, the author's
    reputation and any notification are committed together.

    Raises:
        NotFoundError: The target does not exist or was soft-deleted.
        AuthorizationError: The voter authored the target.
        ConflictError: A concurrent request changed the same ledger entry.
    """
    ledger = _ledger(kind)
    new_sign = _parse_direction(direction)
    target = get_live_target(db, kind, target_id)

    if target.author_id == voter.id:
        raise AuthorizationError(
            f"You cannot vote on your own {ledger.label}",
            code="self_vote",
        )

    entry = (ledger.key == target.id, ledger.vote.voter_id == voter.id)
    old_sign = _current_direction(db, ledger, entry)

    try:
        if old_sign is None:
            db.execute(
                insert(ledger.vote).values(
                    {ledger.key.key: target.id, "voter_id": voter.id, "direction": new_sign}
                )
            )
            result_sign: int | None = new_sign
        elif old_sign == new_sign:
            result = db.execute(
                delete(ledger.vote).where(*entry, ledger.vote.direction == old_sign)
            )
            if result.rowcount != 1:
                raise _conflict(db)
            result_sign = None
        else:
            result = db.execute(
                update(ledger.vote)
                .where(*entry, ledger.vote.direction == old_sign)
                .values(direction=new_sign)
            )
            if result.rowcount != 1:
                raise _conflict(db)
            result_sign = new_sign
    except IntegrityError as err:
        raise _conflict(db, err) from err

    score_delta = (result_sign or 0) - (old_sign or 0)
    db.execute(
        update(ledger.target)
        .where(ledger.target.id == target.id)
        .values(vote_count=ledger.target.vote_count + score_delta)
    )

    reputation_delta, upvote_delta = reputation.vote_deltas(old_sign, result_sign)
    reputation.apply_delta(
        db,
        target.author_id,
        reputation=reputation_delta,
        upvotes_received=upvote_delta,
    )

    if old_sign is None and new_sign == VOTE_UP:
        notify(
            db,
            recipient_id=target.author_id,
            sender=voter,
            type=NOTIFICATION_VOTE,
            message=f"{voter.username} upvoted your {ledger.label}",
            question_id=target.id if kind == KIND_QUESTION else target.question_id,
            answer_id=target.id if kind == KIND_ANSWER else None,
        )

    vote_count = db.scalar(
        select(ledger.target.vote_count).where(ledger.target.id == target.id)
    )
    db.commit()

    logger.info(
        "User %s voted %s on %s %s: %s -> %s (score %+d)",
        voter.id,
        direction,
        ledger.label,
        target.id,
        DIRECTION_NAMES.get(old_sign) if old_sign else None,
        DIRECTION_NAMES.get(result_sign) if result_sign else None,
        score_delta,
    )
    return VoteResult(
        vote_count=int(vote_count or 0),
        user_vote=DIRECTION_NAMES[result_sign] if result_sign else None,
    )


def user_votes(
    db: Session,
    kind: str,
    target_ids: Iterable[int],
    voter_id: int,
) -> dict[int, str]:
    """Map each target id the voter has voted on to ``"up"`` or ``"down"``."""
    ids = list(target_ids)
    if not ids:
        return {}
    ledger = _ledger(kind)
    rows = db.execute(
        select(ledger.key, ledger.vote.direction).where(
            ledger.key.in_(ids),
            ledger.vote.voter_id == voter_id,
        )
    ).all()
    return {entity_id: DIRECTION_NAMES[sign] for entity_id, sign in rows}


def recount_votes(db: Session, kind: str, target_id: int) -> int:
    """Recompute ``count(up) - count(down)`` directly from the ledger."""
    ledger = _ledger(kind)
    total = db.scalar(
        select(func.coalesce(func.sum(ledger.vote.direction), 0)).where(ledger.key == target_id)
    )
    return int(total or 0)
