"""
Profile API endpoint
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import CurrentUser
from app.core.database import get_db
from app.schemas.user import ProfileResponse, ProfileUser
from app.services.favorites import list_favorite_book_ids
from app.services.reviews import count_user_reviews

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileResponse)
async def get_profile(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ProfileResponse:
    """The logged-in user's name, email, favorites and review count."""
    if current_user.user_id is None:
        raise ValueError("User ID cannot be None")

    return ProfileResponse(
        user_id=current_user.user_id,
        user=ProfileUser(name=current_user.name, email=current_user.email),
        favorites=await list_favorite_book_ids(db, current_user.user_id),
        review_count=await count_user_reviews(db, current_user.user_id),
    )
