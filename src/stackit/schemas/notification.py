"""Notification schemas."""

from datetime import datetime

from .common import APIModel, Pagination
from .user import UserSummary


class RelatedQuestion(APIModel):
    """Title reference to the question a notification concerns."""

    id: int
    title: str


class NotificationResponse(APIModel):
    """A single notification."""

    id: int
    type: str
    message: str
    timestamp: datetime
    is_read: bool
    sender: UserSummary | None = None
    related_question: RelatedQuestion | None = None
    related_answer_id: int | None = None


class NotificationPagination(Pagination):
    """Pagination metadata for the notification feed."""

    total_notifications: int
    unread_count: int


class NotificationListResponse(APIModel):
    """Paginated notification feed."""

    success: bool = True
    notifications: list[NotificationResponse]
    pagination: NotificationPagination
