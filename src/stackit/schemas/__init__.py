"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .admin import (
    AdminQuestionListResponse,
    AdminUserListResponse,
    AdminUserStatusResponse,
    UserStatusUpdate,
)
from .common import APIModel, MessageResponse, Pagination
from .notification import NotificationListResponse, NotificationResponse
from .question import (
    AnswerCreate,
    AnswerEnvelope,
    AnswerResponse,
    QuestionCreate,
    QuestionDetail,
    QuestionEnvelope,
    QuestionListResponse,
)
from .tag import PopularTagsResponse, TagCreate, TagEnvelope, TagListResponse, TagResponse
from .user import (
    AuthResponse,
    LoginRequest,
    ProfileUpdateRequest,
    SignupRequest,
    UserEnvelope,
    UserResponse,
    UserStatsEnvelope,
)
from .vote import AcceptResponse, VoteCreate, VoteResponse

__all__ = [
    "AdminQuestionListResponse", "AdminUserListResponse",
    "AdminUserStatusResponse", "UserStatusUpdate",
    "APIModel", "MessageResponse", "Pagination",
    "NotificationListResponse", "NotificationResponse",
    "AnswerCreate", "AnswerEnvelope", "AnswerResponse",
    "QuestionCreate", "QuestionDetail", "QuestionEnvelope", "QuestionListResponse",
    "PopularTagsResponse", "TagCreate", "TagEnvelope", "TagListResponse", "TagResponse",
    "AuthResponse", "LoginRequest", "ProfileUpdateRequest", "SignupRequest",
    "UserEnvelope", "UserResponse", "UserStatsEnvelope",
    "AcceptResponse", "VoteCreate", "VoteResponse",
]
