"""Notification creation and inbox management."""

from __future__ import annotations

import logging
import math

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from stackit.core.errors import NotFoundError
from stackit.db.time import utcnow
from stackit.models import Notification, User
from stackit.models.notification import MAX_MESSAGE_LENGTH

logger = logging.getLogger(__name__)


def notify(
    db: Session,
    *,
    recipient_id: int,
    sender: User | None,
    type: str,
    message: str,
    question_id: int | None = None,
    answer_id: int | None = None,
) -> Notification | None:
    """Queue a notification in the caller's transaction.

    Nothing is created when the recipient is also the sender.
    """
    if sender is not None and sender.id == recipient_id:
        return None
    notification = Notification(
        recipient_id=recipient_id,
        sender_id=sender.id if sender is not None else None,
        type=type,
        message=message[:MAX_MESSAGE_LENGTH],
        related_question_id=question_id,
        related_answer_id=answer_id,
    )
    db.add(notification)
    logger.debug("Queued %s notification for user %s", type, recipient_id)
    return notification


def list_notifications(
    db: Session,
    user: User,
    *,
    page: int,
    limit: int,
) -> tuple[list[Notification], dict[str, int | bool]]:
    """Return one page of the user's notifications, newest first, with counters."""
    base = select(Notification).where(Notification.recipient_id == user.id)
    rows = db.scalars(
        base.order_by(Notification.created_at.desc(), Notification.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    ).all()

    total = db.scalar(
        select(func.count()).select_from(Notification).where(Notification.recipient_id == user.id)
    ) or 0
    unread = db.scalar(
        select(func.count())
        .select_from(Notification)
        .where(Notification.recipient_id == user.id, Notification.is_read.is_(False))
    ) or 0
    total_pages = math.ceil(total / limit) if limit else 0
    pagination = {
        "page": page,
        "total_pages": total_pages,
        "total_notifications": total,
        "unread_count": unread,
        "has_next": page < total_pages,
        "has_prev": page > 1,
    }
    return list(rows), pagination


def mark_read(db: Session, user: User, notification_id: int) -> Notification:
    """Mark one of the user's notifications as read."""
    notification = db.scalar(
        select(Notification).where(
            Notification.id == notification_id,
            Notification.recipient_id == user.id,
        )
    )
    if notification is None:
        raise NotFoundError("Notification not found")
    if not notification.is_read:
        notification.is_read = True
        notification.read_at = utcnow()
        db.commit()
    return notification


def mark_all_read(db: Session, user: User) -> int:
    """Mark every unread notification of the user as read; return how many changed."""
    result = db.execute(
        update(Notification)
        .where(Notification.recipient_id == user.id, Notification.is_read.is_(False))
        .values(is_read=True, read_at=utcnow())
    )
    db.commit()
    return result.rowcount or 0
