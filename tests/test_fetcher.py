"""Tests for fetcher.fetch_url / scrape_webpage.

Network traffic is served by ``httpx.MockTransport`` so nothing leaves the
process; each transport records the requests it saw.  The overall-deadline
test runs a small asyncio server on 127.0.0.1 that trickles its body.
"""

import asyncio
import time

import httpx
import pytest

from app.services import fetcher
from app.services.errors import (
    EmptyContentError,
    FetchTimeoutError,
    InvalidUrlError,
    NetworkError,
    ScraperError,
)
from app.services.fetcher import TIMEOUT, fetch_url, get_webpage_content, scrape_webpage

_PAGE = "<html><head><title>Lamingtons</title></head><body>1 cup flour, 2 eggs.</body></html>"


def make_client(status=200, body=_PAGE, exc=None, seen=None):
    async def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if exc is not None:
            raise exc(f"boom: {request.url}", request=request)
        return httpx.Response(status, text=body)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestFetchUrl:
    @pytest.mark.asyncio
    async def test_empty_url_fails_without_network(self):
        seen = []
        async with make_client(seen=seen) as client:
            with pytest.raises(InvalidUrlError) as info:
                await fetch_url("", client)
        assert seen == []
        assert str(info.value) == "Invalid URL: URL cannot be empty"

    @pytest.mark.asyncio
    async def test_empty_url_without_client(self):
        with pytest.raises(InvalidUrlError):
            await fetch_url("")

    @pytest.mark.asyncio
    async def test_returns_body(self):
        seen = []
        async with make_client(seen=seen) as client:
            body = await fetch_url("https://example.com/lamingtons", client)
        assert body == _PAGE
        assert len(seen) == 1
        assert seen[0].method == "GET"

    @pytest.mark.asyncio
    async def test_request_uses_fixed_timeout(self):
        seen = []
        async with make_client(seen=seen) as client:
            await fetch_url("https://example.com/", client)
        timeouts = seen[0].extensions["timeout"]
        assert timeouts["connect"] == TIMEOUT
        assert timeouts["read"] == TIMEOUT

    @pytest.mark.asyncio
    async def test_timeout_maps_to_timeout_error(self):
        async with make_client(exc=httpx.ReadTimeout) as client:
            with pytest.raises(FetchTimeoutError) as info:
                await fetch_url("https://example.com/slow", client)
        assert str(info.value) == "Request timeout"

    @pytest.mark.asyncio
    async def test_connect_error_maps_to_network_error(self):
        async with make_client(exc=httpx.ConnectError) as client:
            with pytest.raises(NetworkError) as info:
                await fetch_url("https://unreachable.invalid/", client)
        assert "boom" in info.value.detail
        assert str(info.value).startswith("Network error: ")

    @pytest.mark.asyncio
    async def test_malformed_url_is_invalid_url(self):
        seen = []
        async with make_client(seen=seen) as client:
            with pytest.raises(InvalidUrlError):
                await fetch_url("https://example.com:notaport/", client)
        assert seen == []

    @pytest.mark.asyncio
    async def test_whitespace_body_is_empty_content(self):
        async with make_client(body="  \n\t ") as client:
            with pytest.raises(EmptyContentError) as info:
                await fetch_url("https://example.com/blank", client)
        assert str(info.value) == "No content found"

    @pytest.mark.asyncio
    async def test_error_status_with_body_is_not_rejected(self):
        """The page status is not validated; a 404 page is still content."""
        body = "<html><body>Not Found</body></html>"
        async with make_client(status=404, body=body) as client:
            assert await fetch_url("https://example.com/missing", client) == body

    @pytest.mark.asyncio
    async def test_errors_belong_to_scraper_family(self):
        async with make_client(exc=httpx.ConnectError) as client:
            with pytest.raises(ScraperError):
                await fetch_url("https://example.com/", client)


class TestScrapeWebpage:
    @pytest.mark.asyncio
    async def test_builds_webpage(self):
        async with make_client() as client:
            page = await scrape_webpage("https://example.com/lamingtons", client)
        assert page.url == "https://example.com/lamingtons"
        assert page.title == "Lamingtons"
        assert page.content == "1 cup flour, 2 eggs."
        assert page.html == _PAGE

    @pytest.mark.asyncio
    async def test_get_webpage_content(self):
        async with make_client() as client:
            content = await get_webpage_content("https://example.com/lamingtons", client)
        assert content == "1 cup flour, 2 eggs."

    @pytest.mark.asyncio
    async def test_get_webpage_content_propagates_errors(self):
        with pytest.raises(InvalidUrlError):
            await get_webpage_content("")


async def _trickle_handler(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
    """Answer any request with a chunked body that arrives one byte every 0.1 s."""
    await reader.readuntil(b"\r\n\r\n")
    try:
        writer.write(
            b"HTTP/1.1 200 OK\r\n"
            b"Content-Type: text/html\r\n"
            b"Transfer-Encoding: chunked\r\n\r\n"
        )
        await writer.drain()
        for _ in range(20):
            await asyncio.sleep(0.1)
            if reader.at_eof():
                break
            writer.write(b"1\r\nx\r\n")
            await writer.drain()
        writer.write(b"0\r\n\r\n")
        await writer.drain()
    except ConnectionError:
        pass
    finally:
        writer.close()


class TestOverallDeadline:
    @pytest.mark.asyncio
    async def test_slow_body_hits_total_timeout(self, monkeypatch):
        """Each read is quick, but the whole response takes longer than TIMEOUT."""
        monkeypatch.setattr(fetcher, "TIMEOUT", 0.5)
        server = await asyncio.start_server(_trickle_handler, "127.0.0.1", 0)
        port = server.sockets[0].getsockname()[1]
        try:
            started = time.monotonic()
            with pytest.raises(FetchTimeoutError):
                await fetch_url(f"http://127.0.0.1:{port}/slow")
            assert time.monotonic() - started < 1.5
        finally:
            server.close()
            await server.wait_closed()
