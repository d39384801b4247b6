"""Google Books catalog client."""

from typing import Any
from urllib.parse import quote

import httpx
from fastapi import Request

from app.config import BookSearchType, settings
from app.core.exceptions import InvalidInput, ServiceUnavailable
from app.core.logging import get_logger
from app.schemas.book import Book

logger = get_logger(__name__)


def build_query(query: str, search_type: str = BookSearchType.TITLE) -> str:
    """Map a search mode onto a Google Books ``q`` expression."""
    try:
        prefix = BookSearchType.PREFIXES[search_type]
    except KeyError:
        raise InvalidInput(f"Unknown search type: {search_type}") from None
    return f"{prefix}{query.strip()}"


def parse_volume(item: dict[str, Any]) -> Book | None:
    """Convert a Google Books volume resource into a Book, or None if it has no ID."""
    volume_id = item.get("id")
    if not isinstance(volume_id, str) or not volume_id:
        return None
    info = item.get("volumeInfo") or {}
    authors = info.get("authors") or []
    image_links = info.get("imageLinks") or {}
    return Book(
        id=volume_id,
        title=info.get("title") or "",
        authors=[a for a in authors if isinstance(a, str)],
        description=info.get("description"),
        thumbnail=image_links.get("thumbnail") or image_links.get("smallThumbnail"),
        published_date=info.get("publishedDate"),
    )


class GoogleBooksClient:
    """
    Thin async wrapper over the Google Books volumes API.

    The underlying ``httpx.AsyncClient`` is owned by the application
    lifespan; this class never closes it.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        base_url: str = settings.GOOGLE_BOOKS_API_URL,
        api_key: str | None = settings.GOOGLE_BOOKS_API_KEY,
        max_results: int = settings.BOOK_SEARCH_MAX_RESULTS,
    ) -> None:
        self.http = http
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.max_results = max_results

    def _params(self, **params: Any) -> dict[str, Any]:
        if self.api_key:
            params["key"] = self.api_key
        return params

    async def search(self, query: str, search_type: str = BookSearchType.TITLE) -> list[Book]:
        """
        Search volumes.

        An empty query returns no results without calling out. Upstream
        failures are logged and also yield an empty list, so a catalog
        outage degrades search instead of breaking the page.
        """
        q = build_query(query, search_type)
        if not query.strip():
            return []

        try:
            response = await self.http.get(
                f"{self.base_url}/volumes",
                params=self._params(q=q, maxResults=self.max_results),
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "book_search_upstream_error",
                status_code=e.response.status_code,
                search_type=search_type,
            )
            return []
        except (httpx.HTTPError, ValueError) as e:
            logger.error("book_search_failed", error=str(e), search_type=search_type)
            return []

        books = [parse_volume(item) for item in data.get("items") or []]
        return [book for book in books if book is not None]

    async def get_volume(self, volume_id: str) -> Book | None:
        """
        Fetch one volume.

        Returns:
            The book, or None if the catalog does not know the ID

        Raises:
            ServiceUnavailable: the catalog could not be reached
        """
        try:
            response = await self.http.get(
                f"{self.base_url}/volumes/{quote(volume_id, safe='')}", params=self._params()
            )
            if response.status_code in (400, 404):
                return None
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("book_lookup_failed", volume_id=volume_id, error=str(e))
            raise ServiceUnavailable("Book catalog temporarily unavailable") from e

        return parse_volume(data)


def get_books_client(request: Request) -> GoogleBooksClient:
    """Dependency returning a client bound to the lifespan's HTTP client."""
    return GoogleBooksClient(request.app.state.http_client)
