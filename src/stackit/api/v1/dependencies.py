"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from stackit.core.errors import AuthenticationError, AuthorizationError
from stackit.core.security import decode_access_token
from stackit.db.session import get_db
from stackit.models import User
from stackit.services.accounts import BLOCKED_MESSAGE

# Missing credentials are reported by get_current_user so the response
# carries the JSON error envelope.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def _resolve_user(db: Session, token: str) -> User | None:
    user_id = decode_access_token(token)
    if user_id is None:
        return None
    return db.get(User, user_id)


def get_current_user(credentials: CredentialsDep, db: SessionDep) -> User:
    """Get the current authenticated user from the bearer token.

    Args:
        credentials: HTTP Bearer token credentials, if any were sent
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        AuthenticationError: If the token is missing, invalid or expired, the
            user no longer exists, or the account is blocked
    """
    if credentials is None:
        raise AuthenticationError("Access denied. No token provided.", code="missing_token")

    user = _resolve_user(db, credentials.credentials)
    if user is None:
        raise AuthenticationError("Invalid or expired token", code="invalid_token")
    if user.is_blocked:
        raise AuthenticationError(BLOCKED_MESSAGE, code="account_blocked")
    return user


def get_optional_user(credentials: CredentialsDep, db: SessionDep) -> User | None:
    """Return the caller if a valid token for an active user was sent, else None."""
    if credentials is None:
        return None
    user = _resolve_user(db, credentials.credentials)
    if user is None or user.is_blocked:
        return None
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]


def require_admin(current_user: CurrentUserDep) -> User:
    """Allow only administrators through."""
    if not current_user.is_admin:
        raise AuthorizationError("Access denied. Insufficient permissions.")
    return current_user


AdminDep = Annotated[User, Depends(require_admin)]
