"""SQLAlchemy models for questions and their tag links."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stackit.db.session import Base
from stackit.db.time import utcnow

if TYPE_CHECKING:
    from .user import User


class Question(Base):
    """A question posted by a user.

    ``accepted_answer_id`` is the single source of truth for which answer, if
    any, is accepted. The per-answer ``is_accepted`` flag mirrors it for
    reads and is only written together with it.
    """

    __tablename__ = "questions"
    __table_args__ = (
        Index("ix_questions_created_at", "created_at"),
        Index("ix_questions_vote_count", "vote_count"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    # Sanitized HTML produced by the rich text editor.
    description: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True
    )
    accepted_answer_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("answers.id", use_alter=True, name="fk_questions_accepted_answer_id"),
        nullable=True,
    )

    vote_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    answer_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    deleted_by_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    author: Mapped[User] = relationship("User", foreign_keys=[author_id], lazy="joined")
    deleted_by: Mapped[User | None] = relationship("User", foreign_keys=[deleted_by_id])
    tag_links: Mapped[list[QuestionTag]] = relationship(
        "QuestionTag",
        back_populates="question",
        cascade="all, delete-orphan",
        order_by="QuestionTag.position",
        lazy="selectin",
    )

    @property
    def tags(self) -> list[str]:
        """Return tag names in the order the author supplied them."""
        return [link.name for link in self.tag_links]


class QuestionTag(Base):
    """Ordered tag name attached to a question."""

    __tablename__ = "question_tags"
    __table_args__ = (Index("ix_question_tags_name", "name"),)

    question_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("questions.id", ondelete="CASCADE"),
        primary_key=True,
    )
    name: Mapped[str] = mapped_column(String(30), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    question: Mapped[Question] = relationship("Question", back_populates="tag_links")
