# src/stackit/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    admin_router,
    answers_router,
    auth_router,
    notifications_router,
    questions_router,
    tags_router,
    users_router,
)

__all__ = [
    "admin_router",
    "answers_router",
    "auth_router",
    "notifications_router",
    "questions_router",
    "tags_router",
    "users_router",
]
