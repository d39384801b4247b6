"""
SQLModel-based Review models with inheritance for security

ReviewBase (shared public fields)
    ├─> Reviews (database table, adds keys, content, counter and timestamps)
    └─> ReviewCreate/ReviewUpdate/ReviewResponse (API schemas, defined in app/schemas)

``vote_count`` is the denormalized sum of all vote values for the review.
Only the vote engine writes it, always in the same transaction as the vote
row it accounts for.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, Text, text
from sqlmodel import Field, SQLModel

from app.models.base import utcnow


class ReviewBase(SQLModel):
    """Base model with shared public fields for Reviews."""

    # External catalog (Google Books volume) identifier
    book_id: str = Field(max_length=64)

    # 1-5 stars
    rating: int


class Reviews(ReviewBase, table=True):
    """
    Database table for reviews.

    Owned by its author (user_id). Deleting the author deletes the review,
    and deleting a review deletes its votes.
    """

    __tablename__ = "reviews"

    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_reviews_rating"),
        Index("idx_reviews_book_id", "book_id"),
        Index("fk_reviews_user_id", "user_id"),
    )

    review_id: int | None = Field(default=None, primary_key=True)

    content: str = Field(sa_column=Column(Text, nullable=False))

    user_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("users.user_id", ondelete="CASCADE", onupdate="CASCADE"),
            nullable=False,
        ),
    )

    vote_count: int = Field(default=0, sa_column_kwargs={"server_default": text("0")})

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP")),
    )
    updated_at: datetime | None = Field(default=None, sa_column=Column(DateTime, nullable=True))
