"""
Pydantic schemas for the book catalog proxy.
"""

from pydantic import Field

from app.schemas.base import APIModel, OkResponse


class Book(APIModel):
    """
    A single catalog volume.

    Only the fields needed to render a result card are kept; everything
    else in the Google Books payload is dropped.
    """

    id: str
    title: str
    authors: list[str] = Field(default_factory=list)
    description: str | None = None
    thumbnail: str | None = None
    published_date: str | None = None


class BookSearchResponse(OkResponse):
    books: list[Book]


class BookEnvelope(OkResponse):
    book: Book
