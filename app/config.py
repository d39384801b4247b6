"""
Application Configuration
Uses Pydantic Settings for environment-based configuration
"""

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra env vars like MARIADB_* used by docker-compose
    )

    # Application
    PROJECT_NAME: str = "Book Reviews API"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = Field(default="development", pattern="^(development|staging|production)$")
    API_V1_STR: str = "/api/v1"

    # Security
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    SESSION_EXPIRE_DAYS: int = 7
    SESSION_COOKIE_NAME: str = "session"
    # Older clients stored the session under "token"
    LEGACY_SESSION_COOKIE_NAME: str = "token"
    BCRYPT_ROUNDS: int = Field(default=12, ge=4, le=31)

    # CORS
    # Allow str because it can be a comma-separated string in .env
    CORS_ORIGINS: str | list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"]
    )

    # Database
    DATABASE_URL: str
    DB_POOL_SIZE: int = 20
    DB_MAX_OVERFLOW: int = 10
    DB_ECHO: bool = False
    # Create tables from model metadata on startup
    DB_CREATE_TABLES: bool = False

    # Google Books
    GOOGLE_BOOKS_API_URL: str = "https://www.googleapis.com/books/v1"
    GOOGLE_BOOKS_API_KEY: str | None = None
    GOOGLE_BOOKS_TIMEOUT: float = 10.0
    BOOK_SEARCH_MAX_RESULTS: int = Field(default=20, ge=1, le=40)

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from comma-separated string"""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v


# Create global settings instance
load_dotenv()
settings = Settings()  # type: ignore[call-arg]


class VoteValue:
    """Review vote polarity constants"""

    UP = 1
    DOWN = -1

    ALL = (UP, DOWN)


class BookSearchType:
    """Book search modes and their Google Books query prefixes"""

    TITLE = "title"
    AUTHOR = "author"
    ISBN = "isbn"

    PREFIXES = {
        TITLE: "",
        AUTHOR: "inauthor:",
        ISBN: "isbn:",
    }


class ReviewLimits:
    """Review validation limits"""

    MIN_RATING = 1
    MAX_RATING = 5
    MIN_CONTENT_LENGTH = 10
    MAX_CONTENT_LENGTH = 5000
