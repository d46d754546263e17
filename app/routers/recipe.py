"""Recipe endpoint: scrape a page and extract its recipe with the LLM."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from app.core.config import Settings, get_settings
from app.models.request import RecipeRequest
from app.models.response import ErrorDetail, RecipeResponse
from app.routers.scrape import scraper_http_status
from app.services.errors import PipelineError
from app.services.pipeline import scrape_and_extract

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/recipe",
    response_model=RecipeResponse,
    summary="Extract recipe metadata from a web page",
)
async def extract_recipe(
    body: RecipeRequest,
    settings: Settings = Depends(get_settings),
) -> RecipeResponse:
    """Fetch *url*, send its text to the LLM, and return the structured recipe.

    Scrape failures map to 400 / 502 / 504 like ``/scrape``.  Extraction
    failures map to 502; the detail still names the page that was fetched.
    """
    if not settings.openrouter_api_key:
        raise HTTPException(status_code=503, detail="OPENROUTER_API_KEY is not configured")

    logger.info("Recipe request received", extra={"url": body.url})

    try:
        page, recipe = await scrape_and_extract(
            body.url,
            settings.openrouter_api_key,
            model=settings.llm_model,
            endpoint=settings.llm_api_url,
            llm_timeout=settings.llm_timeout_seconds,
        )
    except PipelineError as exc:
        status_code = scraper_http_status(exc.error) if exc.stage == "scrape" else 502
        detail = ErrorDetail(
            stage=exc.stage,
            error=type(exc.error).__name__,
            message=str(exc.error),
            page_title=exc.page.title if exc.page else None,
        )
        raise HTTPException(status_code=status_code, detail=detail.model_dump())

    return RecipeResponse(url=page.url, title=page.title, recipe=recipe)
