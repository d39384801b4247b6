"""
Pydantic schemas for the profile endpoint
"""

from app.models.user import UserBase
from app.schemas.base import OkResponse


class ProfileUser(UserBase):
    """Public view of the caller's own account."""


class ProfileResponse(OkResponse):
    user_id: int
    user: ProfileUser
    favorites: list[str]
    review_count: int
