from pydantic import BaseModel


class ScrapeRequest(BaseModel):
    url: str
    """Page to fetch.

    Kept as a plain string rather than ``HttpUrl`` so that URL validation
    happens in the fetcher and surfaces as an ``Invalid URL`` error (400).
    """


class RecipeRequest(BaseModel):
    url: str
