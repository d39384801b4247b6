"""
Pydantic schemas for the vote endpoints.

``VoteRequest`` is the one contract for casting a vote: it is validated once
at the HTTP boundary and hands the engine a checked ``review_id``/``value``.
"""

from pydantic import Field, StrictInt, field_validator

from app.config import VoteValue
from app.schemas.base import APIModel, OkResponse


class VoteRequest(APIModel):
    """Schema for POST /votes"""

    review_id: StrictInt = Field(ge=1, description="ID of the review to vote on")
    value: StrictInt = Field(description="1 (upvote) or -1 (downvote)")

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: int) -> int:
        if v not in VoteValue.ALL:
            raise ValueError("value must be 1 (upvote) or -1 (downvote)")
        return v


class ReviewCounter(APIModel):
    """Updated counter of the voted review."""

    id: int
    counter: int


class CastVoteResponse(OkResponse):
    """Response for POST /votes"""

    review: ReviewCounter
    vote: int | None = Field(description="Caller's vote after this call (null if toggled off)")


class CurrentVoteResponse(OkResponse):
    """Response for GET /votes"""

    vote: int | None
