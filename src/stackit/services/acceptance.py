"""Accepted-answer state machine.

A question is either in ``NoneAccepted`` or ``OneAccepted(answer_id)``, held
in ``questions.accepted_answer_id``. Every transition is applied as a
compare-and-set on that column, so two concurrent accept calls on the same
question cannot both win, and the partial unique index on
``answers(question_id) WHERE is_accepted`` backs the invariant in storage.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stackit.core.errors import AuthorizationError, ConflictError, NotFoundError
from stackit.core.settings import settings
from stackit.db.time import utcnow
from stackit.models import Answer, Question, User
from stackit.models.notification import NOTIFICATION_ACCEPT
from stackit.services import reputation
from stackit.services.notifications import notify

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AcceptResult:
    """Outcome of toggling acceptance on an answer."""

    answer_id: int
    question_id: int
    is_accepted: bool


def _swap_accepted(db: Session, question_id: int, previous: int | None, new: int | None) -> bool:
    """Move ``accepted_answer_id`` from ``previous`` to ``new`` if nobody beat us to it."""
    current = (
        Question.accepted_answer_id.is_(None)
        if previous is None
        else Question.accepted_answer_id == previous
    )
    result = db.execute(
        update(Question)
        .where(Question.id == question_id, current)
        .values(accepted_answer_id=new)
    )
    return result.rowcount == 1


def clear_acceptance(db: Session, question_id: int) -> None:
    """Unflag every accepted answer of the question and drop its audit fields."""
    db.execute(
        update(Answer)
        .where(Answer.question_id == question_id, Answer.is_accepted.is_(True))
        .values(is_accepted=False, accepted_at=None, accepted_by_id=None)
    )


def toggle_acceptance(db: Session, *, answer_id: int, caller: User) -> AcceptResult:
    """Accept ``answer_id``, or un-accept it if it is already the accepted answer.

    Accepting a different answer of the same question un-accepts the previous
    one first. Reputation moves by ``settings.reputation_accept`` for every
    answer author whose answer gains or loses acceptance.

    Raises:
        NotFoundError: The answer or its question is missing or soft-deleted.
        AuthorizationError: The caller did not ask the question.
        ConflictError: Another acceptance change on this question landed first.
    """
    answer = db.scalar(select(Answer).where(Answer.id == answer_id, Answer.is_deleted.is_(False)))
    if answer is None:
        raise NotFoundError("Answer not found")

    question = db.scalar(
        select(Question).where(Question.id == answer.question_id, Question.is_deleted.is_(False))
    )
    if question is None:
        raise NotFoundError("Associated question not found")

    if question.author_id != caller.id:
        raise AuthorizationError(
            "Only the question author can accept answers",
            code="not_question_author",
        )

    previous_id = question.accepted_answer_id
    new_id = None if previous_id == answer.id else answer.id

    if not _swap_accepted(db, question.id, previous_id, new_id):
        db.rollback()
        raise ConflictError(
            "The accepted answer changed while processing your request",
            code="acceptance_conflict",
        )

    previous_author_id: int | None = None
    if previous_id is not None:
        previous_author_id = db.scalar(select(Answer.author_id).where(Answer.id == previous_id))

    try:
        clear_acceptance(db, question.id)
        if new_id is not None:
            db.execute(
                update(Answer)
                .where(Answer.id == new_id)
                .values(is_accepted=True, accepted_at=utcnow(), accepted_by_id=caller.id)
            )
    except IntegrityError as err:
        db.rollback()
        raise ConflictError(
            "The accepted answer changed while processing your request",
            code="acceptance_conflict",
        ) from err

    if previous_author_id is not None:
        reputation.apply_delta(db, previous_author_id, reputation=-settings.reputation_accept)
    if new_id is not None:
        reputation.apply_delta(db, answer.author_id, reputation=settings.reputation_accept)
        notify(
            db,
            recipient_id=answer.author_id,
            sender=caller,
            type=NOTIFICATION_ACCEPT,
            message=f"{caller.username} accepted your answer",
            question_id=question.id,
            answer_id=answer.id,
        )

    db.commit()

    logger.info(
        "Question %s acceptance: %s -> %s (by user %s)",
        question.id,
        previous_id,
        new_id,
        caller.id,
    )
    return AcceptResult(
        answer_id=answer.id,
        question_id=question.id,
        is_accepted=new_id is not None,
    )
