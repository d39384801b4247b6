"""
Book catalog API endpoints

Thin proxy over Google Books so the browser never talks to the catalog
directly. Search degrades to an empty list; single-volume lookups surface
catalog outages as 503.
"""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Path, Query

from app.core.exceptions import NotFound
from app.schemas.book import BookEnvelope, BookSearchResponse
from app.services.books import GoogleBooksClient, get_books_client

router = APIRouter(prefix="/books", tags=["books"])


@router.get("/search", response_model=BookSearchResponse)
async def search_books(
    client: Annotated[GoogleBooksClient, Depends(get_books_client)],
    q: Annotated[str, Query(max_length=200, description="Search text")] = "",
    search_type: Annotated[
        Literal["title", "author", "isbn"],
        Query(alias="type", description="What the query matches against"),
    ] = "title",
) -> BookSearchResponse:
    """
    Search the catalog.

    - **q**: Title words, an author name, or an ISBN
    - **type**: `title` (default), `author` or `isbn`
    """
    return BookSearchResponse(books=await client.search(q.strip(), search_type))


@router.get("/{book_id}", response_model=BookEnvelope)
async def get_book(
    book_id: Annotated[str, Path(min_length=1, max_length=64, description="Google Books volume ID")],
    client: Annotated[GoogleBooksClient, Depends(get_books_client)],
) -> BookEnvelope:
    book = await client.get_volume(book_id)
    if book is None:
        raise NotFound("Book not found")
    return BookEnvelope(book=book)
