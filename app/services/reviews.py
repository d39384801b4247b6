"""
Review persistence helpers.

Ownership checks live here so that the router stays a thin mapping from
HTTP to these calls.
"""

from collections.abc import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import Forbidden, NotFound
from app.core.logging import get_logger
from app.models import Reviews, Users, Votes
from app.models.base import utcnow
from app.schemas.review import ReviewCreate, ReviewResponse, ReviewUpdate

logger = get_logger(__name__)


def to_response(review: Reviews, user_name: str | None = None) -> ReviewResponse:
    if review.review_id is None:
        raise ValueError("Review must be persisted before it is serialized")
    return ReviewResponse(
        id=review.review_id,
        book_id=review.book_id,
        user_id=review.user_id,
        user_name=user_name,
        content=review.content,
        rating=review.rating,
        votes=review.vote_count,
        created_at=review.created_at,
        updated_at=review.updated_at,
    )


async def create_review(db: AsyncSession, author: Users, data: ReviewCreate) -> Reviews:
    review = Reviews(
        book_id=data.book_id,
        user_id=author.user_id,
        content=data.content,
        rating=data.rating,
        vote_count=0,
    )
    db.add(review)
    await db.commit()
    await db.refresh(review)
    logger.info("review_created", review_id=review.review_id, book_id=review.book_id)
    return review


async def list_book_reviews(db: AsyncSession, book_id: str) -> Sequence[tuple[Reviews, str | None]]:
    """Reviews for a book, newest first, paired with the author's name."""
    result = await db.execute(
        select(Reviews, Users.name)
        .outerjoin(Users, Users.user_id == Reviews.user_id)  # type: ignore[arg-type]
        .where(Reviews.book_id == book_id)  # type: ignore[arg-type]
        .order_by(Reviews.created_at.desc(), Reviews.review_id.desc())  # type: ignore[union-attr, attr-defined]
    )
    return [(review, name) for review, name in result.all()]


async def get_review_with_author(db: AsyncSession, review_id: int) -> tuple[Reviews, str | None]:
    result = await db.execute(
        select(Reviews, Users.name)
        .outerjoin(Users, Users.user_id == Reviews.user_id)  # type: ignore[arg-type]
        .where(Reviews.review_id == review_id)  # type: ignore[arg-type]
    )
    row = result.first()
    if row is None:
        raise NotFound("Review not found")
    return row[0], row[1]


async def _get_owned_review(db: AsyncSession, review_id: int, user_id: int) -> Reviews:
    result = await db.execute(select(Reviews).where(Reviews.review_id == review_id))  # type: ignore[arg-type]
    review = result.scalar_one_or_none()
    if review is None:
        raise NotFound("Review not found")
    if review.user_id != user_id:
        raise Forbidden("Only the author can change this review")
    return review


async def update_review(
    db: AsyncSession, review_id: int, user_id: int, data: ReviewUpdate
) -> Reviews:
    """Edit content and/or rating. The vote counter is never touched here."""
    review = await _get_owned_review(db, review_id, user_id)
    if data.content is not None:
        review.content = data.content
    if data.rating is not None:
        review.rating = data.rating
    review.updated_at = utcnow()
    await db.commit()
    await db.refresh(review)
    logger.info("review_updated", review_id=review_id)
    return review


async def delete_review(db: AsyncSession, review_id: int, user_id: int) -> None:
    """Delete a review and its votes in one transaction."""
    review = await _get_owned_review(db, review_id, user_id)
    await db.execute(delete(Votes).where(Votes.review_id == review_id))  # type: ignore[arg-type]
    await db.delete(review)
    await db.commit()
    logger.info("review_deleted", review_id=review_id)


async def count_user_reviews(db: AsyncSession, user_id: int) -> int:
    result = await db.execute(
        select(func.count()).select_from(Reviews).where(Reviews.user_id == user_id)  # type: ignore[arg-type]
    )
    return int(result.scalar_one())
