"""
Security utilities for authentication.

This module provides:
- Password hashing and verification using bcrypt
- JWT session token generation and verification
"""

import base64
import hashlib
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import bcrypt
import jwt

from app.config import settings

SESSION_TOKEN_TYPE = "session"


@dataclass(frozen=True)
class SessionClaims:
    """Identity carried by a verified session token."""

    user_id: int
    email: str


def _prepare_password_for_bcrypt(password: str) -> str:
    """
    Prepare password for bcrypt by handling long passwords.

    Bcrypt has a 72 byte limit. For passwords longer than 72 bytes,
    we SHA256 hash them first and encode as base64.
    """
    password_bytes = password.encode("utf-8")

    if len(password_bytes) <= 72:
        return password

    # SHA256 produces 32 bytes, base64 encoding produces 44 chars (well under 72)
    hashed = hashlib.sha256(password_bytes).digest()
    return base64.b64encode(hashed).decode("ascii")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a bcrypt hash.

    Returns False for malformed hashes instead of raising.
    """
    prepared_password = _prepare_password_for_bcrypt(plain_password)
    try:
        return bcrypt.checkpw(prepared_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt with the configured cost factor."""
    prepared_password = _prepare_password_for_bcrypt(password)
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(prepared_password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def create_session_token(
    user_id: int, email: str, expires_delta: timedelta | None = None
) -> str:
    """
    Create a signed JWT session token.

    Args:
        user_id: The user ID to encode in the token
        email: The user's email, echoed back to callers as part of the identity
        expires_delta: Optional custom lifetime (defaults to settings.SESSION_EXPIRE_DAYS)

    Returns:
        Encoded JWT token string
    """
    if expires_delta is None:
        expires_delta = timedelta(days=settings.SESSION_EXPIRE_DAYS)

    payload = {
        "sub": str(user_id),
        "email": email,
        "exp": datetime.now(UTC) + expires_delta,
        "type": SESSION_TOKEN_TYPE,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_session_token(token: str) -> SessionClaims | None:
    """
    Verify and decode a session token.

    Returns:
        The claims if the token is valid, None if it is expired, tampered
        with, of the wrong type or missing required claims.
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"verify_exp": True, "verify_signature": True},
        )
    except jwt.PyJWTError:
        return None

    if payload.get("type") != SESSION_TOKEN_TYPE:
        return None

    subject = payload.get("sub")
    email = payload.get("email")
    if subject is None or not isinstance(email, str):
        return None

    try:
        return SessionClaims(user_id=int(subject), email=email)
    except ValueError:
        return None
