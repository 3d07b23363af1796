"""Profile endpoints for the signed-in user and public user statistics."""

from fastapi import APIRouter

from stackit.schemas.user import (
    ProfileUpdateRequest,
    UserEnvelope,
    UserResponse,
    UserStats,
    UserStatsEnvelope,
)
from stackit.services import accounts

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserEnvelope)
async def read_me(current_user: CurrentUserDep) -> UserEnvelope:
    """Return the caller's own profile."""
    return UserEnvelope(user=UserResponse.model_validate(current_user))


@router.put("/me", response_model=UserEnvelope)
async def update_me(
    payload: ProfileUpdateRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> UserEnvelope:
    """Update the caller's editable profile fields."""
    user = accounts.update_profile(db, current_user, payload.model_dump(exclude_unset=True))
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.get("/{user_id}/stats", response_model=UserStatsEnvelope)
async def read_user_stats(user_id: int, db: SessionDep) -> UserStatsEnvelope:
    """Return public activity counters for any user."""
    return UserStatsEnvelope(stats=UserStats.model_validate(accounts.user_stats(db, user_id)))
