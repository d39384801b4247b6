"""
Authentication dependencies for FastAPI route protection.

This module provides dependency functions for:
- Extracting and verifying the session token from cookies
- Loading the current user from the database
"""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.database import get_db
from app.core.exceptions import NotFound, Unauthenticated
from app.core.logging import set_user_context
from app.core.security import SessionClaims, verify_session_token
from app.models.user import Users

# Declares the cookie scheme in the OpenAPI docs; resolution happens below
session_cookie_scheme = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)


def _read_session_cookie(request: Request) -> str | None:
    return request.cookies.get(settings.SESSION_COOKIE_NAME) or request.cookies.get(
        settings.LEGACY_SESSION_COOKIE_NAME
    )


async def get_session_user(
    request: Request,
    _cookie: Annotated[str | None, Depends(session_cookie_scheme)] = None,
) -> SessionClaims:
    """
    Verify the session cookie and return the caller's identity.

    Reads the ``session`` cookie, falling back to the legacy ``token``
    cookie. Does not touch the database.

    Raises:
        Unauthenticated: cookie missing, expired or invalid
    """
    token = _read_session_cookie(request)
    if not token:
        raise Unauthenticated("Not authenticated")

    claims = verify_session_token(token)
    if claims is None:
        raise Unauthenticated("Invalid or expired session")

    set_user_context(claims.user_id)
    return claims


async def get_current_user(
    claims: Annotated[SessionClaims, Depends(get_session_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Users:
    """
    Load current user from database using the verified session.

    Raises:
        NotFound: the session refers to a user that no longer exists
    """
    result = await db.execute(select(Users).where(Users.user_id == claims.user_id))  # type: ignore[arg-type]
    user = result.scalar_one_or_none()

    if user is None:
        raise NotFound("User not found")

    return user


# Type aliases for dependency injection
SessionUser = Annotated[SessionClaims, Depends(get_session_user)]
CurrentUser = Annotated[Users, Depends(get_current_user)]
