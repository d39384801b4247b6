"""
Authentication schemas for request/response validation.

This module defines Pydantic models for authentication-related API operations:
- User registration
- Login credentials
- Login/registration responses
"""

from pydantic import EmailStr, Field, field_validator

from app.schemas.base import APIModel, OkResponse


class UserRegisterRequest(APIModel):
    """Request schema for user registration."""

    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=255)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class LoginRequest(APIModel):
    """Request schema for user login."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=255)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class AuthResponse(OkResponse):
    """Response schema for successful login or registration."""

    user_id: int
