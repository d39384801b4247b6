"""
Pydantic schemas for Favorite endpoints
"""

from pydantic import Field

from app.schemas.base import APIModel, OkResponse


class FavoriteCreate(APIModel):
    book_id: str = Field(min_length=1, max_length=64, description="Google Books volume ID")


class FavoriteListResponse(OkResponse):
    favorites: list[str]
