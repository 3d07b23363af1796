"""Account registration, login and profile helpers."""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stackit.core import security
from stackit.core.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from stackit.core.settings import settings
from stackit.models import Answer, User

logger = logging.getLogger(__name__)

__all__ = [
    "register_user",
    "authenticate_user",
    "update_profile",
    "user_stats",
    "get_user",
]

BLOCKED_MESSAGE = "Account has been blocked. Please contact support."

PROFILE_FIELDS = ("bio", "location", "website", "avatar_url")


def get_user(db: Session, user_id: int) -> User | None:
    """Return a single user by primary key."""
    return db.get(User, user_id)


def register_user(db: Session, *, username: str, email: str, password: str) -> User:
    """Create a regular user account with a hashed password.

    Raises:
        ValidationError: The password is longer than bcrypt accepts.
        ConflictError: The username or email is already taken.
    """
    if security.password_too_long(password):
        raise ValidationError(
            f"Password cannot be longer than {security.MAX_PASSWORD_BYTES} bytes",
            code="password_too_long",
            errors=[{"field": "password", "message": "Password is too long"}],
        )
    email = email.strip().lower()
    username = username.strip()
    taken = db.scalar(
        select(User.id).where(or_(User.email == email, User.username == username))
    )
    if taken is not None:
        raise ConflictError("User with this email or username already exists", code="user_exists")

    user = User(
        username=username,
        email=email,
        password_hash=security.hash_password(password),
        avatar_url=settings.default_avatar_url,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise ConflictError(
            "User with this email or username already exists",
            code="user_exists",
        ) from err
    db.refresh(user)

    logger.info("Registered user %s (%s)", user.id, user.username)
    return user


def authenticate_user(db: Session, *, email: str, password: str) -> User:
    """Return the user owning these credentials.

    Raises:
        AuthenticationError: Unknown email, wrong password, or blocked account.
    """
    user = db.scalar(select(User).where(User.email == email.strip().lower()))
    if user is None or not security.verify_password(password, user.password_hash):
        logger.info("Failed login attempt for %s", email)
        raise AuthenticationError("Invalid credentials", code="invalid_credentials")
    if user.is_blocked:
        logger.info("Blocked user %s attempted to log in", user.id)
        raise AuthenticationError(BLOCKED_MESSAGE, code="account_blocked")
    return user


def update_profile(db: Session, user: User, changes: dict[str, Any]) -> User:
    """Apply partial profile updates; keys outside the editable fields are ignored."""
    for key, value in changes.items():
        if key in PROFILE_FIELDS and value is not None:
            setattr(user, key, value.strip() if isinstance(value, str) else value)

    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def user_stats(db: Session, user_id: int) -> dict[str, Any]:
    """Return the public activity counters of a user.

    Raises:
        NotFoundError: No user has this id.
    """
    user = get_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found")

    accepted = db.scalar(
        select(func.count(Answer.id)).where(
            Answer.author_id == user.id,
            Answer.is_accepted.is_(True),
            Answer.is_deleted.is_(False),
        )
    ) or 0
    return {
        "id": user.id,
        "username": user.username,
        "avatar_url": user.avatar_url,
        "reputation": user.reputation,
        "questions_count": user.questions_count,
        "answers_count": user.answers_count,
        "upvotes_received": user.upvotes_received,
        "accepted_answers": accepted,
        "created_at": user.created_at,
    }
