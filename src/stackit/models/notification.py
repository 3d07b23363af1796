"""SQLAlchemy model for user notifications."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stackit.db.session import Base
from stackit.db.time import utcnow

if TYPE_CHECKING:
    from .question import Question
    from .user import User

NOTIFICATION_ANSWER = "answer"
NOTIFICATION_COMMENT = "comment"
NOTIFICATION_MENTION = "mention"
NOTIFICATION_VOTE = "vote"
NOTIFICATION_ACCEPT = "accept"
NOTIFICATION_TYPES = (
    NOTIFICATION_ANSWER,
    NOTIFICATION_COMMENT,
    NOTIFICATION_MENTION,
    NOTIFICATION_VOTE,
    NOTIFICATION_ACCEPT,
)

MAX_MESSAGE_LENGTH = 500


class Notification(Base):
    """Message delivered to a user as a side effect of forum activity.

    Rows are only ever updated to flip the read flag.
    """

    __tablename__ = "notifications"
    __table_args__ = (
        CheckConstraint(
            "type IN ('answer', 'comment', 'mention', 'vote', 'accept')",
            name="ck_notifications_type",
        ),
        Index("ix_notifications_recipient_read", "recipient_id", "is_read"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recipient_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    sender_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("users.id"), nullable=True)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    message: Mapped[str] = mapped_column(String(MAX_MESSAGE_LENGTH), nullable=False)
    related_question_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("questions.id"), nullable=True
    )
    related_answer_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("answers.id"), nullable=True
    )
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    read_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    sender: Mapped[User | None] = relationship("User", foreign_keys=[sender_id])
    related_question: Mapped[Question | None] = relationship("Question")
