"""
Database engine construction and session management.

Nothing here opens a connection at import time. The application lifespan
builds the engine and session factory, keeps them on ``app.state`` and
disposes the engine on shutdown; request handlers get sessions through the
``get_db`` dependency.
"""

from collections.abc import AsyncGenerator
from typing import Any

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel

from app.config import settings


def create_engine_from_settings(url: str | None = None) -> AsyncEngine:
    """
    Create the async engine.

    Pool sizing only applies to server databases; SQLite uses its own pool
    classes which reject those arguments.
    """
    database_url = url or settings.DATABASE_URL
    kwargs: dict[str, Any] = {"echo": settings.DB_ECHO}
    if not database_url.startswith("sqlite"):
        kwargs.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_pre_ping=True,  # Verify connections before using
            pool_recycle=3600,  # MariaDB wait_timeout is 8 hours
        )
    return create_async_engine(database_url, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create all tables registered on SQLModel.metadata."""
    import app.models  # noqa: F401  (registers tables)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting async database sessions.

    Usage in FastAPI:
        @router.get("/reviews")
        async def list_reviews(db: AsyncSession = Depends(get_db)):
            result = await db.execute(select(Reviews))
            return result.scalars().all()
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
