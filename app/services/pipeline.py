import logging
from typing import Tuple

import httpx

from app.core.config import DEFAULT_LLM_API_URL, DEFAULT_LLM_MODEL
from app.models.page import WebPage
from app.models.recipe import RecipeInfo
from app.services import recipe_extractor
from app.services.errors import LlmError, PipelineError, ScraperError
from app.services.fetcher import scrape_webpage

logger = logging.getLogger(__name__)


async def scrape_and_extract(
    url: str,
    api_key: str,
    *,
    model: str = DEFAULT_LLM_MODEL,
    endpoint: str = DEFAULT_LLM_API_URL,
    llm_timeout: float = recipe_extractor.TIMEOUT,
    client: httpx.AsyncClient | None = None,
) -> Tuple[WebPage, RecipeInfo]:
    """Scrape *url*, then extract its recipe from the page text.

    A scrape failure stops the run before the LLM is called.  An extraction
    failure carries the page that was scraped.

    Raises:
        PipelineError: tagged with the failing stage; ``error`` holds the
            stage's own :class:`ScraperError` or :class:`LlmError`.
    """
    try:
        page = await scrape_webpage(url, client)
    except ScraperError as exc:
        logger.warning("Scrape failed for %s: %s", url, exc)
        raise PipelineError("scrape", exc) from exc

    logger.info("Scraped %s (title=%r); extracting recipe", url, page.title)

    try:
        recipe = await recipe_extractor.extract_recipe_info(
            page.content,
            api_key,
            model=model,
            endpoint=endpoint,
            timeout=llm_timeout,
            client=client,
        )
    except LlmError as exc:
        logger.warning("Recipe extraction failed for %s: %s", url, exc)
        raise PipelineError("extract", exc, page=page) from exc

    return page, recipe


async def run(url: str, api_key: str, **kwargs) -> RecipeInfo:
    """Return the recipe found at *url*; see :func:`scrape_and_extract`."""
    _, recipe = await scrape_and_extract(url, api_key, **kwargs)
    return recipe
