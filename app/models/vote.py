"""
SQLModel-based Vote models

VoteBase (shared public fields)
    ├─> Votes (database table)
    └─> VoteRequest/VoteResponse (API schemas, defined in app/schemas)

One row per (review, voter). A row exists only while the voter's state is
UP (+1) or DOWN (-1); toggling the same value off deletes it.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, text
from sqlmodel import Field, SQLModel

from app.models.base import utcnow


class VoteBase(SQLModel):
    """Base model with shared public fields for Votes."""

    # +1 = upvote, -1 = downvote
    value: int


class Votes(VoteBase, table=True):
    """
    Database table for review votes.

    Constraints:
    - Unique on (review_id, user_id). The vote engine already guarantees a
      single row per pair under a row lock on the review; the index only
      backs that up at the storage level.
    """

    __tablename__ = "votes"

    __table_args__ = (
        CheckConstraint("value IN (-1, 1)", name="ck_votes_value"),
        Index("idx_votes_review_user", "review_id", "user_id", unique=True),
        Index("fk_votes_user_id", "user_id"),
    )

    vote_id: int | None = Field(default=None, primary_key=True)

    review_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("reviews.review_id", ondelete="CASCADE", onupdate="CASCADE"),
            nullable=False,
        ),
    )
    user_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("users.user_id", ondelete="CASCADE", onupdate="CASCADE"),
            nullable=False,
        ),
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP")),
    )
    updated_at: datetime | None = Field(default=None, sa_column=Column(DateTime, nullable=True))
