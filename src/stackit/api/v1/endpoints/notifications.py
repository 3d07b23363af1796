"""Notification inbox endpoints."""

from fastapi import APIRouter, Query

from stackit.core.settings import settings
from stackit.models import Notification
from stackit.schemas.common import MessageResponse
from stackit.schemas.notification import (
    NotificationListResponse,
    NotificationPagination,
    NotificationResponse,
    RelatedQuestion,
)
from stackit.schemas.user import UserSummary
from stackit.services import notifications as notification_service

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _payload(notification: Notification) -> NotificationResponse:
    sender = notification.sender
    question = notification.related_question
    return NotificationResponse(
        id=notification.id,
        type=notification.type,
        message=notification.message,
        timestamp=notification.created_at,
        is_read=notification.is_read,
        sender=UserSummary.model_validate(sender) if sender is not None else None,
        related_question=(
            RelatedQuestion(id=question.id, title=question.title) if question is not None else None
        ),
        related_answer_id=notification.related_answer_id,
    )


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    current_user: CurrentUserDep,
    db: SessionDep,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.notifications_page_size, ge=1, le=50),
) -> NotificationListResponse:
    """Return the caller's notifications, newest first."""
    rows, pagination = notification_service.list_notifications(
        db, current_user, page=page, limit=limit
    )
    return NotificationListResponse(
        notifications=[_payload(row) for row in rows],
        pagination=NotificationPagination(**pagination),
    )


@router.post("/{notification_id}/read", response_model=MessageResponse)
async def mark_notification_read(
    notification_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageResponse:
    """Mark one notification as read."""
    notification_service.mark_read(db, current_user, notification_id)
    return MessageResponse(message="Notification marked as read")


@router.post("/mark-all-read", response_model=MessageResponse)
async def mark_all_notifications_read(
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageResponse:
    """Mark every unread notification of the caller as read."""
    notification_service.mark_all_read(db, current_user)
    return MessageResponse(message="All notifications marked as read")
