"""Business logic services for the StackIt application."""

from .acceptance import AcceptResult, toggle_acceptance
from .voting import KIND_ANSWER, KIND_QUESTION, VoteResult, apply_vote, recount_votes

__all__ = [
    "AcceptResult",
    "VoteResult",
    "KIND_ANSWER",
    "KIND_QUESTION",
    "apply_vote",
    "recount_votes",
    "toggle_acceptance",
]
