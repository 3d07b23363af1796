"""SQLAlchemy model for registered accounts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from stackit.db.session import Base
from stackit.db.time import utcnow

ROLE_USER = "user"
ROLE_ADMIN = "admin"
USER_ROLES = (ROLE_USER, ROLE_ADMIN)

STATUS_ACTIVE = "active"
STATUS_BLOCKED = "blocked"
USER_STATUSES = (STATUS_ACTIVE, STATUS_BLOCKED)


class User(Base):
    """A forum member.

    The counters at the bottom are derived values maintained by the service
    layer; ``reputation`` and ``upvotes_received`` only move through signed
    deltas applied alongside votes and acceptance changes.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('user', 'admin')", name="ck_users_role"),
        CheckConstraint("status IN ('active', 'blocked')", name="ck_users_status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(30), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(254), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    role: Mapped[str] = mapped_column(String(16), nullable=False, default=ROLE_USER)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=STATUS_ACTIVE)

    bio: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    location: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    website: Mapped[str] = mapped_column(String(200), nullable=False, default="")

    reputation: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    questions_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    answers_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    upvotes_received: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    @property
    def is_admin(self) -> bool:
        """Return True for administrator accounts."""
        return self.role == ROLE_ADMIN

    @property
    def is_blocked(self) -> bool:
        """Return True when an administrator has blocked the account."""
        return self.status == STATUS_BLOCKED
