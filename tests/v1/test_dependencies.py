# tests/v1/test_dependencies.py
"""Tests for API dependencies module."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from stackit.api.v1.dependencies import get_current_user, get_optional_user, require_admin
from stackit.core.errors import AuthenticationError, AuthorizationError
from stackit.core.security import create_access_token
from stackit.core.settings import settings
from stackit.models.user import STATUS_BLOCKED


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestGetCurrentUser:
    """Bearer token resolution for protected routes."""

    def test_valid_token_returns_user(self, db_session, voter):
        user = get_current_user(_credentials(create_access_token(voter.id)), db_session)
        assert user.id == voter.id

    def test_missing_token(self, db_session):
        with pytest.raises(AuthenticationError) as excinfo:
            get_current_user(None, db_session)
        assert excinfo.value.code == "missing_token"

    def test_garbage_token(self, db_session):
        with pytest.raises(AuthenticationError, match="Invalid or expired token"):
            get_current_user(_credentials("not-a-jwt"), db_session)

    def test_expired_token(self, db_session, voter):
        token = jwt.encode(
            {"sub": str(voter.id), "exp": datetime.now(UTC) - timedelta(minutes=1)},
            settings.secret_key,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(AuthenticationError):
            get_current_user(_credentials(token), db_session)

    def test_token_for_unknown_user(self, db_session):
        with pytest.raises(AuthenticationError):
            get_current_user(_credentials(create_access_token(424242)), db_session)

    def test_blocked_user(self, db_session, make_user):
        user = make_user("blocked_one", status=STATUS_BLOCKED)
        with pytest.raises(AuthenticationError, match="Account has been blocked"):
            get_current_user(_credentials(create_access_token(user.id)), db_session)


class TestOptionalUser:
    """Optional authentication treats bad tokens as anonymous."""

    def test_no_credentials(self, db_session):
        assert get_optional_user(None, db_session) is None

    def test_bad_token(self, db_session):
        assert get_optional_user(_credentials("nope"), db_session) is None

    def test_valid_token(self, db_session, voter):
        user = get_optional_user(_credentials(create_access_token(voter.id)), db_session)
        assert user.id == voter.id


def test_require_admin(voter, admin_user) -> None:
    assert require_admin(admin_user) is admin_user
    with pytest.raises(AuthorizationError, match="Insufficient permissions"):
        require_admin(voter)
