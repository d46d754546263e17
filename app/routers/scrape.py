import logging

from fastapi import APIRouter, HTTPException

from app.models.request import ScrapeRequest
from app.models.response import ScrapeResponse
from app.services.errors import FetchTimeoutError, InvalidUrlError, ScraperError
from app.services.fetcher import scrape_webpage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/scrape", response_model=ScrapeResponse, summary="Fetch a page and extract its text")
async def scrape(body: ScrapeRequest) -> ScrapeResponse:
    """Fetch *url* and return its title and body text."""
    logger.info("Scrape request received", extra={"url": body.url})

    try:
        page = await scrape_webpage(body.url)
    except ScraperError as exc:
        raise scraper_http_error(body.url, exc)

    return ScrapeResponse(url=page.url, title=page.title, content=page.content)


def scraper_http_status(exc: ScraperError) -> int:
    if isinstance(exc, InvalidUrlError):
        return 400
    if isinstance(exc, FetchTimeoutError):
        return 504
    return 502


def scraper_http_error(url: str, exc: ScraperError) -> HTTPException:
    """Translate a scrape-stage error into the HTTP error returned to the caller."""
    status_code = scraper_http_status(exc)
    if status_code == 400:
        logger.warning("Invalid URL: %r – %s", url, exc)
    else:
        logger.error("Error scraping URL %s: %s", url, exc)
    return HTTPException(status_code=status_code, detail=str(exc))
