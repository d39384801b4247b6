"""
Pytest configuration and shared fixtures.

This file provides common fixtures for all tests.

Tests run against an in-memory SQLite database created from the SQLModel
metadata, so no database server is needed. Settings are read at import
time, so the environment is prepared before anything from ``app`` is
imported.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production-use")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["BCRYPT_ROUNDS"] = "4"  # Minimum cost, keeps hashing fast
os.environ["ENVIRONMENT"] = "development"
os.environ["LOG_FORMAT"] = "json"

from collections.abc import AsyncGenerator, Awaitable, Callable  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import select  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402

from app.config import settings  # noqa: E402
from app.core.database import create_session_factory, get_db  # noqa: E402
from app.core.security import create_session_token, get_password_hash  # noqa: E402
from app.main import app as main_app  # noqa: E402
from app.models import Reviews, Users  # noqa: E402  (registers tables)
from app.services.books import GoogleBooksClient, get_books_client  # noqa: E402

TEST_PASSWORD = "testpassword"


@pytest.fixture(scope="session")
def anyio_backend():
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest.fixture(scope="session")
def password_hash() -> str:
    """One bcrypt hash of TEST_PASSWORD shared by all seeded users."""
    return get_password_hash(TEST_PASSWORD)


@pytest.fixture(scope="function")
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    Create a fresh in-memory database for each test function.

    StaticPool keeps a single connection alive so every session sees the
    same in-memory database.
    """
    test_engine = create_async_engine(
        settings.DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine

    await test_engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(engine)


@pytest.fixture(scope="function")
async def db_session(
    session_factory: async_sessionmaker[AsyncSession], password_hash: str
) -> AsyncGenerator[AsyncSession, None]:
    """
    Create a new database session for each test.

    Creates test users (1, 2, 3) that are committed to the database for use
    in tests with foreign key constraints. All of them use TEST_PASSWORD.
    """
    async with session_factory() as session:
        session.add(
            Users(user_id=1, name="Test User", email="test@example.com", password=password_hash)
        )
        for i in [2, 3]:
            session.add(
                Users(
                    user_id=i,
                    name=f"Test User {i}",
                    email=f"test{i}@example.com",
                    password=password_hash,
                )
            )
        await session.commit()

        yield session

        # Cleanup - rollback any changes made during the test
        await session.rollback()


def _unreachable_catalog(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("catalog disabled in tests", request=request)


@pytest.fixture(scope="function")
def books_transport() -> httpx.MockTransport:
    """
    Transport backing the Google Books client in API tests.

    Override this fixture in a test module to serve canned responses.
    """
    return httpx.MockTransport(_unreachable_catalog)


@pytest.fixture(scope="function")
async def books_client(
    books_transport: httpx.MockTransport,
) -> AsyncGenerator[GoogleBooksClient, None]:
    async with httpx.AsyncClient(transport=books_transport) as http:
        yield GoogleBooksClient(
            http,
            base_url="https://books.test/v1",
            api_key=None,
            max_results=20,
        )


@pytest.fixture(scope="function")
def app(
    db_session: AsyncSession,
    session_factory: async_sessionmaker[AsyncSession],
    books_client: GoogleBooksClient,
) -> FastAPI:
    """
    Create FastAPI app wired to the test database and a stubbed catalog.

    Each request gets its own session, as in production, so the test's
    db_session never hands stale identity-map objects to the app.
    """

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    main_app.dependency_overrides[get_db] = override_get_db
    main_app.dependency_overrides[get_books_client] = lambda: books_client

    yield main_app

    main_app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    Create async HTTP client for testing API endpoints.

    Usage:
        async def test_endpoint(client):
            response = await client.get("/api/v1/reviews", params={"bookId": "abc"})
            assert response.status_code == 200
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def login_as(client: AsyncClient) -> Callable[[int], None]:
    """
    Put a valid session cookie for a seeded user on the client.

    Usage:
        async def test_vote(client, login_as):
            login_as(2)
            await client.post("/api/v1/votes", json={...})
    """

    def _login(user_id: int) -> None:
        email = "test@example.com" if user_id == 1 else f"test{user_id}@example.com"
        client.cookies.set(settings.SESSION_COOKIE_NAME, create_session_token(user_id, email))

    return _login


# =============================================================================
# Test Data Fixtures
# =============================================================================


@pytest.fixture
async def test_review(db_session: AsyncSession) -> Reviews:
    """
    A review written by user 1 with no votes.

    Usage:
        async def test_vote(test_review, db_session):
            assert test_review.vote_count == 0
    """
    review = Reviews(
        book_id="zyTCAlFPjgYC",
        user_id=1,
        content="A thoughtful and well paced novel.",
        rating=4,
        vote_count=0,
    )
    db_session.add(review)
    await db_session.commit()
    await db_session.refresh(review)
    return review


@pytest.fixture
def stored_counter(db_session: AsyncSession) -> Callable[[int], Awaitable[int]]:
    """
    Read a review's counter straight from the database.

    Usage:
        assert await stored_counter(review_id) == 1
    """

    async def _read(review_id: int) -> int:
        result = await db_session.execute(
            select(Reviews.vote_count).where(Reviews.review_id == review_id)  # type: ignore[arg-type]
        )
        return int(result.scalar_one())

    return _read


@pytest.fixture
def sample_review_data() -> dict:
    """Sample review payload for API requests."""
    return {
        "bookId": "zyTCAlFPjgYC",
        "content": "Sharp dialogue and a satisfying ending.",
        "rating": 5,
    }
