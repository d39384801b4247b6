"""
Authentication API endpoints.

This module provides endpoints for:
- User registration
- Login (issues the session cookie)
- Logout (clears the session cookie)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.database import get_db
from app.core.exceptions import InvalidInput, Unauthenticated
from app.core.logging import get_logger
from app.core.security import create_session_token, get_password_hash, verify_password
from app.models.user import Users
from app.schemas.auth import AuthResponse, LoginRequest, UserRegisterRequest
from app.schemas.base import OkResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])

INVALID_CREDENTIALS = "Incorrect email or password"


def _set_session_cookie(response: Response, token: str) -> None:
    """
    Set the session cookie in the response.

    HttpOnly keeps the token away from JavaScript; SameSite=Lax still lets
    top-level navigations from links carry it.
    """
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        path="/",
        httponly=True,
        secure=settings.ENVIRONMENT == "production",  # HTTPS only in production
        samesite="lax",
        max_age=settings.SESSION_EXPIRE_DAYS * 24 * 60 * 60,  # seconds
    )


def _clear_session_cookies(response: Response) -> None:
    # Match set_cookie params so browsers drop the cookie
    for key in (settings.SESSION_COOKIE_NAME, settings.LEGACY_SESSION_COOKIE_NAME):
        response.delete_cookie(
            key=key,
            path="/",
            httponly=True,
            secure=settings.ENVIRONMENT == "production",
            samesite="lax",
        )


@router.post("/register", response_model=AuthResponse)
async def register(
    data: UserRegisterRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthResponse:
    """
    Create an account.

    Does not log the user in; clients call /auth/login afterwards.
    """
    existing = await db.execute(select(Users.user_id).where(Users.email == data.email))  # type: ignore[arg-type]
    if existing.scalar_one_or_none() is not None:
        raise InvalidInput("Email already registered")

    user = Users(
        name=data.name,
        email=data.email,
        password=get_password_hash(data.password),
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration of the same email
        await db.rollback()
        raise InvalidInput("Email already registered") from None
    await db.refresh(user)

    if user.user_id is None:
        raise ValueError("User ID cannot be None")

    logger.info("user_registered", user_id=user.user_id)
    return AuthResponse(user_id=user.user_id)


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: LoginRequest,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthResponse:
    """
    Authenticate with email and password.

    On success the signed session token is set as an HttpOnly cookie; the
    body only carries the user ID.
    """
    result = await db.execute(select(Users).where(Users.email == credentials.email))  # type: ignore[arg-type]
    user = result.scalar_one_or_none()

    if user is None or user.user_id is None:
        logger.info("login_failed", reason="unknown_email")
        raise Unauthenticated(INVALID_CREDENTIALS)

    if not verify_password(credentials.password, user.password):
        logger.info("login_failed", reason="bad_password", target_user_id=user.user_id)
        raise Unauthenticated(INVALID_CREDENTIALS)

    _set_session_cookie(response, create_session_token(user.user_id, user.email))
    logger.info("user_logged_in", target_user_id=user.user_id)
    return AuthResponse(user_id=user.user_id)


@router.post("/logout", response_model=OkResponse)
async def logout(response: Response) -> OkResponse:
    """Clear the session cookie. Works whether or not the caller is logged in."""
    _clear_session_cookies(response)
    return OkResponse()
