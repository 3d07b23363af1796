"""Vote and acceptance schemas."""

from typing import Literal

from pydantic import Field

from .common import APIModel


class VoteCreate(APIModel):
    """Schema for casting a vote."""

    type: Literal["up", "down"] = Field(..., description='Vote type must be "up" or "down"')


class VoteResponse(APIModel):
    """Result of a vote: the new aggregate and the caller's resulting vote."""

    success: bool = True
    message: str = "Vote recorded successfully"
    vote_count: int
    user_vote: Literal["up", "down"] | None


class AcceptResponse(APIModel):
    """Result of toggling acceptance on an answer."""

    success: bool = True
    message: str
    is_accepted: bool
