"""
Review vote API endpoints

Casting the same vote twice withdraws it; casting the opposite vote switches
it. The response carries the review's updated counter so clients never need
to recompute it.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import SessionUser
from app.core.database import get_db
from app.schemas.vote import CastVoteResponse, CurrentVoteResponse, ReviewCounter, VoteRequest
from app.services.votes import VoteEngine

router = APIRouter(prefix="/votes", tags=["votes"])


def get_vote_engine(db: Annotated[AsyncSession, Depends(get_db)]) -> VoteEngine:
    return VoteEngine(db)


@router.post("", response_model=CastVoteResponse)
async def cast_vote(
    session_user: SessionUser,
    data: VoteRequest,
    engine: Annotated[VoteEngine, Depends(get_vote_engine)],
) -> CastVoteResponse:
    """
    Cast, withdraw or switch a vote on a review.

    - no previous vote: the vote is recorded
    - same value as before: the vote is withdrawn (`vote` is null)
    - opposite value: the vote is switched

    Authors cannot vote on their own reviews.
    """
    result = await engine.cast_vote(data.review_id, session_user.user_id, data.value)
    return CastVoteResponse(
        review=ReviewCounter(id=result.review_id, counter=result.counter),
        vote=result.vote,
    )


@router.get("", response_model=CurrentVoteResponse)
async def get_current_vote(
    session_user: SessionUser,
    review_id: Annotated[int, Query(alias="reviewId", ge=1)],
    engine: Annotated[VoteEngine, Depends(get_vote_engine)],
) -> CurrentVoteResponse:
    """The caller's current vote on a review: 1, -1 or null."""
    return CurrentVoteResponse(vote=await engine.get_vote(review_id, session_user.user_id))
