"""Admin moderation schemas."""

from datetime import datetime
from typing import Literal

from .common import APIModel, Pagination
from .user import UserResponse, UserSummary


class UserStatusUpdate(APIModel):
    """Block or unblock a user."""

    status: Literal["active", "blocked"]


class AdminUserPagination(Pagination):
    """Pagination metadata for the admin user listing."""

    total_users: int


class AdminUserListResponse(APIModel):
    """Paginated user listing for administrators."""

    success: bool = True
    users: list[UserResponse]
    pagination: AdminUserPagination


class AdminUserStatusResponse(APIModel):
    """Result of a status change."""

    success: bool = True
    message: str
    user: UserResponse


class AdminQuestionItem(APIModel):
    """Question row including soft-delete audit data."""

    id: int
    title: str
    tags: list[str]
    author: UserSummary
    vote_count: int
    answer_count: int
    is_deleted: bool
    deleted_at: datetime | None = None
    deleted_by: UserSummary | None = None
    created_at: datetime


class AdminQuestionPagination(Pagination):
    """Pagination metadata for the admin question listing."""

    total_questions: int


class AdminQuestionListResponse(APIModel):
    """Paginated question listing for administrators."""

    success: bool = True
    questions: list[AdminQuestionItem]
    pagination: AdminQuestionPagination
