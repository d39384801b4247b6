"""
Pydantic schemas for API responses and requests
"""
from app.models.user import UserBase  # Re-export from models
from app.schemas.auth import AuthResponse, LoginRequest, UserRegisterRequest
from app.schemas.base import APIModel, OkResponse
from app.schemas.book import Book, BookEnvelope, BookSearchResponse
from app.schemas.favorite import FavoriteCreate, FavoriteListResponse
from app.schemas.review import (
    ReviewCreate,
    ReviewEnvelope,
    ReviewListResponse,
    ReviewResponse,
    ReviewUpdate,
)
from app.schemas.user import ProfileResponse, ProfileUser
from app.schemas.vote import (
    CastVoteResponse,
    CurrentVoteResponse,
    ReviewCounter,
    VoteRequest,
)

__all__ = [
    # Shared
    "APIModel",
    "OkResponse",
    # Auth schemas
    "UserRegisterRequest",
    "LoginRequest",
    "AuthResponse",
    # Profile schemas
    "UserBase",
    "ProfileUser",
    "ProfileResponse",
    # Book schemas
    "Book",
    "BookSearchResponse",
    "BookEnvelope",
    # Review schemas
    "ReviewCreate",
    "ReviewUpdate",
    "ReviewResponse",
    "ReviewEnvelope",
    "ReviewListResponse",
    # Vote schemas
    "VoteRequest",
    "ReviewCounter",
    "CastVoteResponse",
    "CurrentVoteResponse",
    # Favorite schemas
    "FavoriteCreate",
    "FavoriteListResponse",
]
