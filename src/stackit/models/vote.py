"""Vote ledger models for questions and answers."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, SmallInteger
from sqlalchemy.orm import Mapped, mapped_column

from stackit.db.session import Base
from stackit.db.time import utcnow

VOTE_UP = 1
VOTE_DOWN = -1


class QuestionVote(Base):
    """Per-user vote on a question.

    The composite primary key keeps at most one ledger entry per voter.
    """

    __tablename__ = "question_votes"
    __table_args__ = (
        CheckConstraint("direction IN (1, -1)", name="ck_question_votes_direction"),
    )

    question_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("questions.id", ondelete="CASCADE"),
        primary_key=True,
    )
    voter_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        primary_key=True,
        index=True,
    )
    # 1 = upvote, -1 = downvote.
    direction: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class AnswerVote(Base):
    """Per-user vote on an answer."""

    __tablename__ = "answer_votes"
    __table_args__ = (
        CheckConstraint("direction IN (1, -1)", name="ck_answer_votes_direction"),
    )

    answer_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("answers.id", ondelete="CASCADE"),
        primary_key=True,
    )
    voter_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        primary_key=True,
        index=True,
    )
    direction: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
