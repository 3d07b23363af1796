# tests/services/test_reputation_service.py
"""Tests for reputation weights and deltas."""

import pytest

from stackit.services import reputation
from stackit.services.reputation import vote_contribution, vote_deltas


@pytest.mark.parametrize(
    ("old", "new", "expected"),
    [
        (None, 1, (10, 1)),
        (None, -1, (-2, 0)),
        (1, None, (-10, -1)),
        (-1, None, (2, 0)),
        (1, -1, (-12, -1)),
        (-1, 1, (12, 1)),
        (None, None, (0, 0)),
    ],
)
def test_vote_deltas(old, new, expected) -> None:
    assert vote_deltas(old, new) == expected


def test_contribution_of_no_vote_is_zero() -> None:
    assert vote_contribution(None) == 0


def test_apply_delta_increments_in_sql(db_session, make_user) -> None:
    user = make_user()
    reputation.apply_delta(db_session, user.id, reputation=10, upvotes_received=1)
    reputation.apply_delta(db_session, user.id, reputation=-2)
    db_session.commit()

    db_session.refresh(user)
    assert user.reputation == 8
    assert user.upvotes_received == 1


def test_apply_delta_skips_empty_changes(db_session, make_user) -> None:
    user = make_user()
    reputation.apply_delta(db_session, user.id)
    db_session.refresh(user)
    assert user.reputation == 0
