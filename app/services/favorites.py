"""
Favorite book helpers.

A user's favorites are a set of Google Books volume IDs; adding and removing
are both idempotent.
"""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.models import Favorites

logger = get_logger(__name__)


async def list_favorite_book_ids(db: AsyncSession, user_id: int) -> list[str]:
    """Book IDs the user has favorited, oldest first."""
    result = await db.execute(
        select(Favorites.book_id)
        .where(Favorites.user_id == user_id)  # type: ignore[arg-type]
        .order_by(Favorites.created_at, Favorites.book_id)  # type: ignore[arg-type]
    )
    return list(result.scalars().all())


async def add_favorite(db: AsyncSession, user_id: int, book_id: str) -> None:
    if await db.get(Favorites, (user_id, book_id)) is not None:
        return
    db.add(Favorites(user_id=user_id, book_id=book_id))
    await db.commit()
    logger.info("favorite_added", book_id=book_id)


async def remove_favorite(db: AsyncSession, user_id: int, book_id: str) -> None:
    await db.execute(
        delete(Favorites).where(
            Favorites.user_id == user_id,  # type: ignore[arg-type]
            Favorites.book_id == book_id,  # type: ignore[arg-type]
        )
    )
    await db.commit()
