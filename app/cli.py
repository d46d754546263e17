"""
Extract recipe metadata from a single web page.

Scrapes the URL, reports the page title, then asks the LLM for the recipe and
prints it as JSON. The API key comes from OPENROUTER_API_KEY (environment or
.env).

Usage:
  recipe-extract https://www.recipetineats.com/classic-lamingtons
  recipe-extract URL --model openai/gpt-4o-mini --log-level DEBUG

Exit codes: 0 on success or when only extraction failed, 1 when the page
could not be scraped, 2 when no API key is configured.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from app.core.config import get_settings
from app.core.logging_config import configure_logging
from app.services.errors import PipelineError
from app.services.pipeline import scrape_and_extract


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="recipe-extract",
        description="Scrape a recipe page and extract its ingredients, times and servings.",
    )
    parser.add_argument("url", help="Recipe page to scrape")
    parser.add_argument("--model", help="Chat-completion model id (default: LLM_MODEL setting)")
    parser.add_argument("--log-level", help="Logging level (default: LOG_LEVEL setting)")
    return parser


async def _run(url: str, api_key: str, model: str, endpoint: str, timeout: float) -> int:
    print(f"Scraping recipe from: {url}")
    try:
        page, recipe = await scrape_and_extract(
            url, api_key, model=model, endpoint=endpoint, llm_timeout=timeout
        )
    except PipelineError as exc:
        if exc.stage == "scrape":
            print(f"✗ Scraping error: {exc.error}", file=sys.stderr)
            return 1
        print(f"✓ Successfully scraped: {exc.page.title}")
        print(f"✗ Recipe extraction error: {exc.error}", file=sys.stderr)
        return 0

    print(f"✓ Successfully scraped: {page.title}")
    print("\nRecipe Information:")
    print(recipe.model_dump_json(indent=2))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(args.log_level or settings.log_level)

    if not settings.openrouter_api_key:
        print("OPENROUTER_API_KEY must be set in the environment or .env file", file=sys.stderr)
        return 2

    return asyncio.run(
        _run(
            args.url,
            settings.openrouter_api_key,
            args.model or settings.llm_model,
            settings.llm_api_url,
            settings.llm_timeout_seconds,
        )
    )


if __name__ == "__main__":
    sys.exit(main())
