# tests/v1/test_users.py
"""Tests for profile and statistics endpoints."""

from datetime import UTC, datetime, timedelta

from fastapi import status
from jose import jwt

from stackit.core.settings import settings


def test_read_me_requires_auth(client) -> None:
    response = client.get("/api/users/me")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["success"] is False


def test_read_me_rejects_expired_token(client, author) -> None:
    token = jwt.encode(
        {"sub": str(author.id), "exp": datetime.now(UTC) - timedelta(minutes=5)},
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    response = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    body = response.json()
    assert body["code"] == "invalid_token"
    assert body["message"] == "Invalid or expired token"


def test_read_me(client, author, author_headers) -> None:
    response = client.get("/api/users/me", headers=author_headers)

    assert response.status_code == status.HTTP_200_OK
    user = response.json()["user"]
    assert user["username"] == "asker"
    assert user["questionsCount"] == 0


def test_update_me_accepts_camel_case(client, author_headers) -> None:
    response = client.put(
        "/api/users/me",
        json={"bio": "Ledger enthusiast", "avatarUrl": "https://img.example.com/me.png"},
        headers=author_headers,
    )

    assert response.status_code == status.HTTP_200_OK
    user = response.json()["user"]
    assert user["bio"] == "Ledger enthusiast"
    assert user["avatarUrl"] == "https://img.example.com/me.png"
    assert user["location"] == ""


def test_update_me_rejects_long_bio(client, author_headers) -> None:
    response = client.put("/api/users/me", json={"bio": "x" * 501}, headers=author_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_user_stats_are_public(client, answerer) -> None:
    response = client.get(f"/api/users/{answerer.id}/stats")

    assert response.status_code == status.HTTP_200_OK
    stats = response.json()["stats"]
    assert stats["username"] == "answerer"
    assert stats["acceptedAnswers"] == 0


def test_user_stats_unknown_user(client) -> None:
    response = client.get("/api/users/999/stats")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["message"] == "User not found"
