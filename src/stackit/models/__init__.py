# src/stackit/models/__init__.py
"""SQLAlchemy models for the StackIt application."""

from .answer import Answer
from .notification import Notification
from .question import Question, QuestionTag
from .tag import Tag
from .user import User
from .vote import AnswerVote, QuestionVote

__all__ = [
    "Answer",
    "Notification",
    "Question", "QuestionTag",
    "Tag",
    "User",
    "AnswerVote", "QuestionVote",
]
