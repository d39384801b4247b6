"""
SQLModel-based User models with inheritance for security

UserBase (shared public fields)
    ├─> Users (database table, adds credentials)
    └─> ProfileResponse (API schema, defined in app/schemas)
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, Index, text
from sqlmodel import Field, SQLModel

from app.models.base import utcnow


class UserBase(SQLModel):
    """
    Base model with shared public fields for Users.

    These fields are safe to expose to the user themselves via the profile
    endpoint.
    """

    name: str = Field(max_length=100)
    email: str = Field(max_length=255)


class Users(UserBase, table=True):
    """
    Database table for users.

    Internal/sensitive fields (should NOT be exposed via public API):
    - password: bcrypt hash
    """

    __tablename__ = "users"

    __table_args__ = (Index("idx_users_email", "email", unique=True),)

    user_id: int | None = Field(default=None, primary_key=True)

    password: str = Field(max_length=255)

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP")),
    )
