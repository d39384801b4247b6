"""
SQLModel-based Favorite model

Favorites are a set of external book IDs per user; the composite primary
key makes adding the same book twice impossible.
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKeyConstraint, text
from sqlmodel import Field, SQLModel

from app.models.base import utcnow


class Favorites(SQLModel, table=True):
    """Database table for favorite books."""

    __tablename__ = "favorites"

    __table_args__ = (
        ForeignKeyConstraint(
            ["user_id"],
            ["users.user_id"],
            ondelete="CASCADE",
            onupdate="CASCADE",
            name="fk_favorites_user_id",
        ),
    )

    # Composite primary key (user_id, book_id)
    user_id: int = Field(primary_key=True)
    book_id: str = Field(primary_key=True, max_length=64)

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP")),
    )

    # Note: Relationships are intentionally omitted.
    # The user's favorites are always queried by user_id.
