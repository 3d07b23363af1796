"""Administrator actions: soft deletes, account status and tag management."""

from __future__ import annotations

import logging
import math

from sqlalchemy import func, or_, select, update
from sqlalchemy.orm import Session

from stackit.core.errors import ConflictError, NotFoundError, ValidationError
from stackit.core.settings import settings
from stackit.db.time import utcnow
from stackit.models import Answer, Question, Tag, User
from stackit.models.tag import DEFAULT_TAG_COLOR
from stackit.models.user import STATUS_BLOCKED, USER_STATUSES
from stackit.services import reputation
from stackit.services import tags as tag_service
from stackit.services.acceptance import clear_acceptance

logger = logging.getLogger(__name__)


def _pagination(page: int, limit: int, total: int, total_key: str) -> dict[str, int | bool]:
    total_pages = math.ceil(total / limit) if limit else 0
    return {
        "page": page,
        "total_pages": total_pages,
        total_key: total,
        "has_next": page < total_pages,
        "has_prev": page > 1,
    }


def list_users(
    db: Session,
    *,
    page: int = 1,
    limit: int = 20,
    search: str | None = None,
) -> tuple[list[User], dict[str, int | bool]]:
    """Return users newest first, optionally filtered by username or email."""
    condition = None
    if search and search.strip():
        term = search.strip()
        condition = or_(
            User.username.icontains(term, autoescape=True),
            User.email.icontains(term, autoescape=True),
        )

    stmt = select(User)
    count_stmt = select(func.count(User.id))
    if condition is not None:
        stmt = stmt.where(condition)
        count_stmt = count_stmt.where(condition)

    rows = db.scalars(
        stmt.order_by(User.created_at.desc(), User.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    ).all()
    total = db.scalar(count_stmt) or 0
    return list(rows), _pagination(page, limit, total, "total_users")


def list_questions(
    db: Session,
    *,
    page: int = 1,
    limit: int = 20,
    include_deleted: bool = False,
) -> tuple[list[Question], dict[str, int | bool]]:
    """Return questions newest first, soft-deleted ones only when asked for."""
    stmt = select(Question)
    count_stmt = select(func.count(Question.id))
    if not include_deleted:
        stmt = stmt.where(Question.is_deleted.is_(False))
        count_stmt = count_stmt.where(Question.is_deleted.is_(False))

    rows = db.scalars(
        stmt.order_by(Question.created_at.desc(), Question.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    ).all()
    total = db.scalar(count_stmt) or 0
    return list(rows), _pagination(page, limit, total, "total_questions")


def soft_delete_question(db: Session, question_id: int, actor: User) -> Question:
    """Hide a question and release its tags.

    Votes, answers and acceptance are retained for the audit trail.

    Raises:
        NotFoundError: No question has this id.
        ValidationError: The question is already deleted.
    """
    question = db.get(Question, question_id)
    if question is None:
        raise NotFoundError("Question not found")
    if question.is_deleted:
        raise ValidationError("Question is already deleted", code="already_deleted")

    result = db.execute(
        update(Question)
        .where(Question.id == question.id, Question.is_deleted.is_(False))
        .values(is_deleted=True, deleted_at=utcnow(), deleted_by_id=actor.id)
    )
    if result.rowcount != 1:
        db.rollback()
        raise ValidationError("Question is already deleted", code="already_deleted")

    tag_service.release_usage(db, question.tags)
    db.commit()

    logger.info("Admin %s deleted question %s", actor.id, question.id)
    return question


def soft_delete_answer(db: Session, answer_id: int, actor: User) -> Answer:
    """Hide an answer, fix its question's counters and drop its acceptance.

    Raises:
        NotFoundError: No answer has this id.
        ValidationError: The answer is already deleted.
    """
    answer = db.get(Answer, answer_id)
    if answer is None:
        raise NotFoundError("Answer not found")
    if answer.is_deleted:
        raise ValidationError("Answer is already deleted", code="already_deleted")

    result = db.execute(
        update(Answer)
        .where(Answer.id == answer.id, Answer.is_deleted.is_(False))
        .values(is_deleted=True, deleted_at=utcnow(), deleted_by_id=actor.id)
    )
    if result.rowcount != 1:
        db.rollback()
        raise ValidationError("Answer is already deleted", code="already_deleted")

    db.execute(
        update(Question)
        .where(Question.id == answer.question_id, Question.answer_count > 0)
        .values(answer_count=Question.answer_count - 1)
    )

    # Only the transaction that actually clears the pointer reverses the reward.
    unaccepted = db.execute(
        update(Question)
        .where(Question.id == answer.question_id, Question.accepted_answer_id == answer.id)
        .values(accepted_answer_id=None)
    )
    if unaccepted.rowcount == 1:
        clear_acceptance(db, answer.question_id)
        reputation.apply_delta(db, answer.author_id, reputation=-settings.reputation_accept)

    db.commit()

    logger.info(
        "Admin %s deleted answer %s on question %s%s",
        actor.id,
        answer.id,
        answer.question_id,
        " (acceptance cleared)" if unaccepted.rowcount == 1 else "",
    )
    return answer


def set_user_status(db: Session, user_id: int, status: str, actor: User) -> User:
    """Block or unblock a user.

    Raises:
        NotFoundError: No user has this id.
        ValidationError: The status is unknown, the target is an admin being
            blocked, or the actor targets their own account.
    """
    if status not in USER_STATUSES:
        raise ValidationError("Status must be active or blocked", code="invalid_status")

    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    if user.is_admin and status == STATUS_BLOCKED:
        raise ValidationError("Cannot block admin users", code="cannot_block_admin")
    if user.id == actor.id:
        raise ValidationError("Cannot change your own status", code="cannot_change_self")

    user.status = status
    db.commit()
    db.refresh(user)

    logger.info("Admin %s set user %s status to %s", actor.id, user.id, status)
    return user


def create_tag(
    db: Session,
    *,
    name: str,
    actor: User,
    description: str = "",
    color: str | None = None,
) -> Tag:
    """Create a curated tag.

    Raises:
        ConflictError: A tag with this name already exists.
    """
    name = name.strip().lower()
    if db.scalar(select(Tag.id).where(Tag.name == name)) is not None:
        raise ConflictError("Tag already exists", code="tag_exists")

    tag = Tag(
        name=name,
        description=description or "",
        color=color or DEFAULT_TAG_COLOR,
        created_by_id=actor.id,
    )
    db.add(tag)
    db.commit()
    db.refresh(tag)

    logger.info("Admin %s created tag %r", actor.id, name)
    return tag


def deactivate_tag(db: Session, tag_id: int, actor: User) -> Tag:
    """Hide a tag from tag listings; questions keep their tag names."""
    tag = db.get(Tag, tag_id)
    if tag is None:
        raise NotFoundError("Tag not found")

    tag.is_active = False
    db.commit()

    logger.info("Admin %s deactivated tag %r", actor.id, tag.name)
    return tag
