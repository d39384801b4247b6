"""
Favorites API endpoints
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import SessionUser
from app.core.database import get_db
from app.schemas.base import OkResponse
from app.schemas.favorite import FavoriteCreate, FavoriteListResponse
from app.services import favorites as favorite_service

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("", response_model=FavoriteListResponse)
async def get_favorites(
    session_user: SessionUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> FavoriteListResponse:
    """Book IDs the caller has favorited, oldest first."""
    return FavoriteListResponse(
        favorites=await favorite_service.list_favorite_book_ids(db, session_user.user_id)
    )


@router.post("", response_model=OkResponse)
async def add_favorite(
    data: FavoriteCreate,
    session_user: SessionUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OkResponse:
    """Add a book to the caller's favorites. Adding it again is a no-op."""
    await favorite_service.add_favorite(db, session_user.user_id, data.book_id)
    return OkResponse()


@router.delete("/{book_id}", response_model=OkResponse)
async def remove_favorite(
    book_id: Annotated[str, Path(min_length=1, max_length=64, description="Google Books volume ID")],
    session_user: SessionUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OkResponse:
    """Remove a book from the caller's favorites. Removing a missing one is a no-op."""
    await favorite_service.remove_favorite(db, session_user.user_id, book_id)
    return OkResponse()
