"""
Review API endpoints
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import CurrentUser, SessionUser
from app.core.database import get_db
from app.schemas.base import OkResponse
from app.schemas.review import (
    ReviewCreate,
    ReviewEnvelope,
    ReviewListResponse,
    ReviewUpdate,
)
from app.services import reviews as review_service

router = APIRouter(prefix="/reviews", tags=["reviews"])

ReviewId = Annotated[int, Path(ge=1, description="Review ID")]


@router.get("", response_model=ReviewListResponse)
async def list_reviews(
    book_id: Annotated[str, Query(alias="bookId", min_length=1, max_length=64)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ReviewListResponse:
    """
    List reviews for a book, newest first.

    Public endpoint. Each review carries its author's name and vote counter.
    """
    rows = await review_service.list_book_reviews(db, book_id)
    return ReviewListResponse(
        reviews=[review_service.to_response(review, user_name) for review, user_name in rows]
    )


@router.post("", response_model=ReviewEnvelope)
async def create_review(
    data: ReviewCreate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ReviewEnvelope:
    review = await review_service.create_review(db, current_user, data)
    return ReviewEnvelope(review=review_service.to_response(review, current_user.name))


@router.get("/{review_id}", response_model=ReviewEnvelope)
async def get_review(
    review_id: ReviewId,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ReviewEnvelope:
    review, user_name = await review_service.get_review_with_author(db, review_id)
    return ReviewEnvelope(review=review_service.to_response(review, user_name))


@router.patch("/{review_id}", response_model=ReviewEnvelope)
async def update_review(
    review_id: ReviewId,
    data: ReviewUpdate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ReviewEnvelope:
    """
    Edit a review's content and/or rating.

    Only the author may edit. The vote counter is left untouched.
    """
    if current_user.user_id is None:
        raise ValueError("User ID cannot be None")
    review = await review_service.update_review(db, review_id, current_user.user_id, data)
    return ReviewEnvelope(review=review_service.to_response(review, current_user.name))


@router.delete("/{review_id}", response_model=OkResponse)
async def delete_review(
    review_id: ReviewId,
    session_user: SessionUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OkResponse:
    """Delete a review and every vote cast on it. Only the author may delete."""
    await review_service.delete_review(db, review_id, session_user.user_id)
    return OkResponse()
