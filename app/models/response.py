from typing import Literal, Optional

from pydantic import BaseModel

from app.models.recipe import RecipeInfo


class ScrapeResponse(BaseModel):
    url: str
    title: str
    content: str


class RecipeResponse(BaseModel):
    url: str
    title: str
    recipe: RecipeInfo


class ErrorDetail(BaseModel):
    stage: Literal["scrape", "extract"]
    error: str
    """Name of the error variant, e.g. ``"ApiError"``."""
    message: str
    page_title: Optional[str] = None
