"""Tests for the Google Books client."""

import httpx
import pytest

from app.core.exceptions import InvalidInput, ServiceUnavailable
from app.services.books import GoogleBooksClient, build_query, parse_volume

BASE_URL = "https://books.test/v1"

VOLUME = {
    "id": "zyTCAlFPjgYC",
    "volumeInfo": {
        "title": "The Google Story",
        "authors": ["David A. Vise", "Mark Malseed"],
        "description": "Inside the company.",
        "publishedDate": "2005-11-15",
        "imageLinks": {
            "smallThumbnail": "http://books.test/small.jpg",
            "thumbnail": "http://books.test/thumb.jpg",
        },
    },
}


def make_client(handler, api_key: str | None = None) -> GoogleBooksClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GoogleBooksClient(http, base_url=BASE_URL, api_key=api_key, max_results=5)


@pytest.mark.unit
class TestBuildQuery:
    @pytest.mark.parametrize(
        ("search_type", "expected"),
        [
            ("title", "dune"),
            ("author", "inauthor:dune"),
            ("isbn", "isbn:dune"),
        ],
    )
    def test_prefixes(self, search_type: str, expected: str) -> None:
        assert build_query("  dune ", search_type) == expected

    def test_unknown_type(self) -> None:
        with pytest.raises(InvalidInput):
            build_query("dune", "publisher")


@pytest.mark.unit
class TestParseVolume:
    def test_full_volume(self) -> None:
        book = parse_volume(VOLUME)

        assert book is not None
        assert book.id == "zyTCAlFPjgYC"
        assert book.title == "The Google Story"
        assert book.authors == ["David A. Vise", "Mark Malseed"]
        assert book.thumbnail == "http://books.test/thumb.jpg"
        assert book.published_date == "2005-11-15"

    def test_sparse_volume(self) -> None:
        book = parse_volume({"id": "abc", "volumeInfo": {"imageLinks": {"smallThumbnail": "s.jpg"}}})

        assert book is not None
        assert book.title == ""
        assert book.authors == []
        assert book.description is None
        assert book.thumbnail == "s.jpg"

    def test_volume_without_id(self) -> None:
        assert parse_volume({"volumeInfo": {"title": "Nameless"}}) is None


@pytest.mark.unit
class TestSearch:
    async def test_author_search_request(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"items": [VOLUME, {"volumeInfo": {}}]})

        client = make_client(handler, api_key="k123")
        books = await client.search("Frank Herbert", "author")

        assert [book.id for book in books] == ["zyTCAlFPjgYC"]
        assert len(seen) == 1
        request = seen[0]
        assert request.url.path == "/v1/volumes"
        assert request.url.params["q"] == "inauthor:Frank Herbert"
        assert request.url.params["maxResults"] == "5"
        assert request.url.params["key"] == "k123"

    async def test_empty_query_makes_no_request(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        client = make_client(handler)
        assert await client.search("   ") == []

    async def test_no_items(self) -> None:
        client = make_client(lambda request: httpx.Response(200, json={"totalItems": 0}))
        assert await client.search("zzzz") == []

    async def test_upstream_error_degrades_to_empty(self) -> None:
        client = make_client(lambda request: httpx.Response(503, text="busy"))
        assert await client.search("dune") == []

    async def test_transport_failure_degrades_to_empty(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        client = make_client(handler)
        assert await client.search("dune", "isbn") == []

    async def test_invalid_json_degrades_to_empty(self) -> None:
        client = make_client(lambda request: httpx.Response(200, text="<html>"))
        assert await client.search("dune") == []


@pytest.mark.unit
class TestGetVolume:
    async def test_found(self) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            return httpx.Response(200, json=VOLUME)

        book = await make_client(handler).get_volume("zyTCAlFPjgYC")

        assert book is not None
        assert book.title == "The Google Story"
        assert seen == ["/v1/volumes/zyTCAlFPjgYC"]

    @pytest.mark.parametrize("status_code", [400, 404])
    async def test_unknown_volume(self, status_code: int) -> None:
        client = make_client(lambda request: httpx.Response(status_code, json={"error": {}}))
        assert await client.get_volume("missing") is None

    async def test_upstream_outage(self) -> None:
        client = make_client(lambda request: httpx.Response(500))
        with pytest.raises(ServiceUnavailable):
            await client.get_volume("zyTCAlFPjgYC")

    async def test_transport_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ServiceUnavailable):
            await make_client(handler).get_volume("zyTCAlFPjgYC")
