# tests/services/test_notifications_service.py
"""Tests for the notification inbox service."""

import pytest

from stackit.core.errors import NotFoundError
from stackit.services import notifications


def _notify(db_session, recipient, sender, message="hello") -> None:
    notifications.notify(
        db_session, recipient_id=recipient.id, sender=sender, type="answer", message=message
    )


def test_notify_skips_self(db_session, author) -> None:
    assert notifications.notify(
        db_session, recipient_id=author.id, sender=author, type="vote", message="self"
    ) is None


def test_notify_truncates_message(db_session, author, voter) -> None:
    created = notifications.notify(
        db_session, recipient_id=author.id, sender=voter, type="vote", message="x" * 600
    )
    assert len(created.message) == 500


def test_list_and_mark_read(db_session, author, voter, answerer) -> None:
    _notify(db_session, author, voter, "first")
    _notify(db_session, author, answerer, "second")
    _notify(db_session, voter, author, "not yours")
    db_session.commit()

    rows, pagination = notifications.list_notifications(db_session, author, page=1, limit=20)
    assert {row.message for row in rows} == {"first", "second"}
    assert pagination["total_notifications"] == 2
    assert pagination["unread_count"] == 2

    notifications.mark_read(db_session, author, rows[0].id)
    _, pagination = notifications.list_notifications(db_session, author, page=1, limit=20)
    assert pagination["unread_count"] == 1

    assert notifications.mark_all_read(db_session, author) == 1
    _, pagination = notifications.list_notifications(db_session, author, page=1, limit=20)
    assert pagination["unread_count"] == 0


def test_mark_read_of_foreign_notification_is_not_found(db_session, author, voter) -> None:
    _notify(db_session, voter, author)
    db_session.commit()
    rows, _ = notifications.list_notifications(db_session, voter, page=1, limit=20)

    with pytest.raises(NotFoundError, match="Notification not found"):
        notifications.mark_read(db_session, author, rows[0].id)
