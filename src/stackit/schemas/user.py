"""User and authentication schemas."""

import re
from datetime import datetime

from pydantic import Field, field_validator

from stackit.core.security import MAX_PASSWORD_BYTES, password_too_long

from .common import APIModel

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")
EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")


class SignupRequest(APIModel):
    """Registration payload."""

    username: str = Field(..., min_length=3, max_length=30)
    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=6, max_length=MAX_PASSWORD_BYTES)

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        """Multibyte characters count against the byte limit."""
        if password_too_long(v):
            raise ValueError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
        return v

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Allow letters, digits and underscores only."""
        v = v.strip()
        if not USERNAME_PATTERN.match(v):
            raise ValueError("Username can only contain letters, numbers, and underscores")
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Normalize and sanity-check the email address."""
        v = v.strip().lower()
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Please provide a valid email address")
        return v


class LoginRequest(APIModel):
    """Credentials submitted at login."""

    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Emails are stored lowercased."""
        return v.strip().lower()


class UserSummary(APIModel):
    """Public identity shown next to authored content."""

    id: int
    username: str
    avatar_url: str | None = None


class UserResponse(APIModel):
    """Full profile of a user, as seen by that user or an admin."""

    id: int
    username: str
    email: str
    avatar_url: str | None = None
    role: str
    status: str
    bio: str
    location: str
    website: str
    reputation: int
    questions_count: int
    answers_count: int
    upvotes_received: int
    created_at: datetime


class AuthResponse(APIModel):
    """Response returned after signup or login."""

    success: bool = True
    message: str
    user: UserResponse
    token: str


class UserEnvelope(APIModel):
    """Wrapper for a single user payload."""

    success: bool = True
    user: UserResponse


class ProfileUpdateRequest(APIModel):
    """Editable profile fields; omitted fields are left unchanged."""

    bio: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=100)
    website: str | None = Field(None, max_length=200)
    avatar_url: str | None = Field(None, max_length=500)


class UserStats(APIModel):
    """Public activity counters for a user."""

    id: int
    username: str
    avatar_url: str | None = None
    reputation: int
    questions_count: int
    answers_count: int
    upvotes_received: int
    accepted_answers: int
    created_at: datetime


class UserStatsEnvelope(APIModel):
    """Wrapper for user statistics."""

    success: bool = True
    stats: UserStats
