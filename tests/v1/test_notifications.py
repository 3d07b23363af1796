# tests/v1/test_notifications.py
"""Tests for notification endpoints."""

from fastapi import status


def _upvote(client, answer, headers):
    return client.post(f"/api/answers/{answer.id}/vote", json={"type": "up"}, headers=headers)


def test_upvote_notifies_author(client, answer, answerer, voter_headers, auth_headers) -> None:
    _upvote(client, answer, voter_headers)

    response = client.get("/api/notifications", headers=auth_headers(answerer))

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["pagination"]["unreadCount"] == 1
    assert body["pagination"]["totalNotifications"] == 1
    notification = body["notifications"][0]
    assert notification["type"] == "vote"
    assert notification["message"] == "voter upvoted your answer"
    assert notification["sender"]["username"] == "voter"
    assert notification["isRead"] is False
    assert notification["relatedAnswerId"] == answer.id


def test_mark_read_and_mark_all(client, make_user, answer, answerer, auth_headers) -> None:
    for _ in range(3):
        _upvote(client, answer, auth_headers(make_user()))
    headers = auth_headers(answerer)
    first_id = client.get("/api/notifications", headers=headers).json()["notifications"][0]["id"]

    response = client.post(f"/api/notifications/{first_id}/read", headers=headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"success": True, "message": "Notification marked as read"}
    assert client.get("/api/notifications", headers=headers).json()["pagination"]["unreadCount"] == 2

    response = client.post("/api/notifications/mark-all-read", headers=headers)
    assert response.json()["message"] == "All notifications marked as read"
    assert client.get("/api/notifications", headers=headers).json()["pagination"]["unreadCount"] == 0


def test_cannot_read_someone_elses_notification(
    client, answer, voter_headers, author_headers, auth_headers, answerer
) -> None:
    _upvote(client, answer, voter_headers)
    notification_id = client.get(
        "/api/notifications", headers=auth_headers(answerer)
    ).json()["notifications"][0]["id"]

    response = client.post(f"/api/notifications/{notification_id}/read", headers=author_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_notifications_require_auth(client) -> None:
    assert client.get("/api/notifications").status_code == status.HTTP_401_UNAUTHORIZED
