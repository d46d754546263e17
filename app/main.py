import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.core.config import get_settings
from app.core.logging_config import configure_logging
from app.routers.recipe import router as recipe_router
from app.routers.scrape import router as scrape_router

configure_logging(get_settings().log_level)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Recipe Scraper API",
    description="Fetches a web page and extracts structured recipe metadata with an LLM.",
    version="1.0.0",
)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception for %s", request.url)
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})


app.include_router(scrape_router)
app.include_router(recipe_router)


@app.get("/", summary="Health check")
async def root() -> dict:
    return {"message": "Hello from Recipe Scraper"}
