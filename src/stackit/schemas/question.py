"""Question and answer schemas."""

from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from .common import APIModel, Pagination
from .user import UserSummary

QuestionSort = Literal["newest", "unanswered", "votes"]
UserVote = Literal["up", "down"]


class QuestionCreate(APIModel):
    """Payload for asking a question."""

    title: str = Field(..., description="Question title (10-200 characters)")
    description: str = Field(..., min_length=20, description="Rich text HTML body")
    tags: list[str] = Field(..., min_length=1, max_length=5, description="1-5 tags")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Trim the title before enforcing its length bounds."""
        v = v.strip()
        if not 10 <= len(v) <= 200:
            raise ValueError("Title must be between 10 and 200 characters")
        return v


class AnswerCreate(APIModel):
    """Payload for answering a question."""

    content: str = Field(..., min_length=10, description="Rich text HTML body")


class AnswerResponse(APIModel):
    """An answer as rendered under its question."""

    id: int
    content: str
    author: UserSummary
    question_id: int
    vote_count: int
    is_accepted: bool
    accepted_at: datetime | None = None
    created_at: datetime
    user_vote: UserVote | None = None


class QuestionResponse(APIModel):
    """A question with its full body."""

    id: int
    title: str
    description: str
    tags: list[str]
    author: UserSummary
    vote_count: int
    answer_count: int
    view_count: int
    accepted_answer_id: int | None = None
    created_at: datetime


class QuestionDetail(QuestionResponse):
    """A question together with its live answers."""

    answers: list[AnswerResponse] = Field(default_factory=list)
    user_vote: UserVote | None = None


class QuestionListItem(APIModel):
    """A question summary as shown in listings."""

    id: int
    title: str
    description: str
    tags: list[str]
    author: UserSummary
    vote_count: int
    answer_count: int
    created_at: datetime


class QuestionPagination(Pagination):
    """Pagination metadata for question listings."""

    total_questions: int


class QuestionListResponse(APIModel):
    """Paginated question listing."""

    success: bool = True
    questions: list[QuestionListItem]
    pagination: QuestionPagination


class QuestionEnvelope(APIModel):
    """Wrapper for a single question."""

    success: bool = True
    message: str | None = None
    question: QuestionDetail


class AnswerEnvelope(APIModel):
    """Wrapper for a single answer."""

    success: bool = True
    message: str | None = None
    answer: AnswerResponse
