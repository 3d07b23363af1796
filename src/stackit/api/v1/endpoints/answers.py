# src/stackit/api/v1/endpoints/answers.py
"""Answer endpoints: voting and acceptance."""

from fastapi import APIRouter

from stackit.schemas.vote import AcceptResponse, VoteCreate, VoteResponse
from stackit.services.acceptance import toggle_acceptance
from stackit.services.voting import KIND_ANSWER, apply_vote

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/answers", tags=["answers"])


@router.post("/{answer_id}/vote", response_model=VoteResponse)
async def vote_answer(
    answer_id: int,
    payload: VoteCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> VoteResponse:
    """Vote on an answer; repeating the same vote removes it."""
    result = apply_vote(
        db,
        kind=KIND_ANSWER,
        target_id=answer_id,
        voter=current_user,
        direction=payload.type,
    )
    return VoteResponse(vote_count=result.vote_count, user_vote=result.user_vote)


@router.post("/{answer_id}/accept", response_model=AcceptResponse)
async def accept_answer(
    answer_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> AcceptResponse:
    """Accept an answer, or withdraw acceptance if it is already accepted.

    Only the author of the question may do this.
    """
    result = toggle_acceptance(db, answer_id=answer_id, caller=current_user)
    message = (
        "Answer accepted successfully" if result.is_accepted else "Answer acceptance removed"
    )
    return AcceptResponse(message=message, is_accepted=result.is_accepted)
