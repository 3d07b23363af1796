# src/stackit/api/v1/endpoints/auth.py
"""Authentication endpoints for the StackIt API."""

from fastapi import APIRouter, status

from stackit.core.security import create_access_token
from stackit.schemas.user import AuthResponse, LoginRequest, SignupRequest, UserResponse
from stackit.services import accounts

from ..dependencies import SessionDep

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(payload: SignupRequest, db: SessionDep) -> AuthResponse:
    """Register a new account and return an access token for it."""
    user = accounts.register_user(
        db,
        username=payload.username,
        email=payload.email,
        password=payload.password,
    )
    return AuthResponse(
        message="User registered successfully",
        user=UserResponse.model_validate(user),
        token=create_access_token(user.id),
    )


@router.post("/login", response_model=AuthResponse)
async def login(payload: LoginRequest, db: SessionDep) -> AuthResponse:
    """Exchange email and password for an access token."""
    user = accounts.authenticate_user(db, email=payload.email, password=payload.password)
    return AuthResponse(
        message="Login successful",
        user=UserResponse.model_validate(user),
        token=create_access_token(user.id),
    )
