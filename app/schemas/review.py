"""
Pydantic schemas for Review endpoints
"""

from pydantic import Field, model_validator

from app.config import ReviewLimits
from app.schemas.base import APIModel, OkResponse, UTCDatetime, UTCDatetimeOptional


class ReviewCreate(APIModel):
    """Schema for creating a review"""

    book_id: str = Field(min_length=1, max_length=64, description="Google Books volume ID")
    content: str = Field(
        min_length=ReviewLimits.MIN_CONTENT_LENGTH,
        max_length=ReviewLimits.MAX_CONTENT_LENGTH,
        description="Review text",
    )
    rating: int = Field(ge=ReviewLimits.MIN_RATING, le=ReviewLimits.MAX_RATING)


class ReviewUpdate(APIModel):
    """Schema for editing a review; at least one field is required"""

    content: str | None = Field(
        default=None,
        min_length=ReviewLimits.MIN_CONTENT_LENGTH,
        max_length=ReviewLimits.MAX_CONTENT_LENGTH,
    )
    rating: int | None = Field(default=None, ge=ReviewLimits.MIN_RATING, le=ReviewLimits.MAX_RATING)

    @model_validator(mode="after")
    def require_a_change(self) -> "ReviewUpdate":
        if self.content is None and self.rating is None:
            raise ValueError("Provide content or rating")
        return self


class ReviewResponse(APIModel):
    """
    Schema for review response - what API returns.

    ``votes`` is the review's vote counter.
    """

    id: int
    book_id: str
    user_id: int
    user_name: str | None = None
    content: str
    rating: int
    votes: int
    created_at: UTCDatetime
    updated_at: UTCDatetimeOptional = None


class ReviewEnvelope(OkResponse):
    review: ReviewResponse


class ReviewListResponse(OkResponse):
    reviews: list[ReviewResponse]
