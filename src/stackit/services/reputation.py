"""Reputation bookkeeping.

Reputation is only ever moved by signed deltas applied in the same
transaction as the vote or acceptance change that earns it. The weights come
from settings so the sum of contributions can always be reconstructed from
the ledgers and acceptance flags.
"""

from __future__ import annotations

import logging

from sqlalchemy import update
from sqlalchemy.orm import Session

from stackit.core.settings import settings
from stackit.models import User
from stackit.models.vote import VOTE_DOWN, VOTE_UP

logger = logging.getLogger(__name__)


def vote_contribution(direction: int | None) -> int:
    """Reputation a single ledger entry is worth to the content author."""
    if direction == VOTE_UP:
        return settings.reputation_upvote
    if direction == VOTE_DOWN:
        return settings.reputation_downvote
    return 0


def vote_deltas(old: int | None, new: int | None) -> tuple[int, int]:
    """Return ``(reputation_delta, upvotes_received_delta)`` for a ledger transition."""
    reputation_delta = vote_contribution(new) - vote_contribution(old)
    upvote_delta = int(new == VOTE_UP) - int(old == VOTE_UP)
    return reputation_delta, upvote_delta


def apply_delta(
    db: Session,
    user_id: int,
    *,
    reputation: int = 0,
    upvotes_received: int = 0,
) -> None:
    """Increment the author's counters in SQL so concurrent deltas never overwrite each other."""
    if not reputation and not upvotes_received:
        return
    db.execute(
        update(User)
        .where(User.id == user_id)
        .values(
            reputation=User.reputation + reputation,
            upvotes_received=User.upvotes_received + upvotes_received,
        )
    )
    logger.debug(
        "User %s reputation %+d, upvotes received %+d",
        user_id,
        reputation,
        upvotes_received,
    )
