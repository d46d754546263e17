import asyncio
import logging

import httpx

from app.models.page import WebPage
from app.services.errors import (
    EmptyContentError,
    FetchTimeoutError,
    InvalidUrlError,
    NetworkError,
)
from app.services.parser import parse_page

TIMEOUT = 30  # seconds, for the whole request including the body

logger = logging.getLogger(__name__)


async def _get(client: httpx.AsyncClient, url: str) -> httpx.Response:
    try:
        return await asyncio.wait_for(
            client.get(url, timeout=TIMEOUT, follow_redirects=True), TIMEOUT
        )
    except httpx.InvalidURL as exc:
        raise InvalidUrlError(str(exc)) from exc
    except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
        logger.error("Timeout fetching URL: %s", url)
        raise FetchTimeoutError() from exc
    except httpx.HTTPError as exc:
        logger.error("Error fetching URL %s: %s", url, exc)
        raise NetworkError(str(exc)) from exc


async def fetch_url(url: str, client: httpx.AsyncClient | None = None) -> str:
    """Fetch *url* and return the response body as text.

    The response status is not checked: an error page with a body is returned
    like any other page, and only logged.

    Raises:
        InvalidUrlError: if *url* is empty or malformed. No request is made
            for an empty URL.
        FetchTimeoutError: if the request exceeds TIMEOUT.
        NetworkError: on any other transport failure.
        EmptyContentError: if the body is empty or whitespace.
    """
    if not url:
        raise InvalidUrlError("URL cannot be empty")

    logger.info("Fetching %s", url)
    if client is None:
        async with httpx.AsyncClient() as owned_client:
            response = await _get(owned_client, url)
    else:
        response = await _get(client, url)

    if response.is_error:
        logger.warning("URL %s returned HTTP %s; using the body anyway", url, response.status_code)

    body = response.text
    if not body.strip():
        raise EmptyContentError()
    return body


async def scrape_webpage(url: str, client: httpx.AsyncClient | None = None) -> WebPage:
    """Fetch *url* and parse it into a :class:`WebPage`."""
    html = await fetch_url(url, client)
    return parse_page(html, url)


async def get_webpage_content(url: str, client: httpx.AsyncClient | None = None) -> str:
    page = await scrape_webpage(url, client)
    return page.content
