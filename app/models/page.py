from pydantic import BaseModel, ConfigDict

NO_TITLE = "No title found"


class WebPage(BaseModel):
    """A fetched document reduced to its title and text."""

    model_config = ConfigDict(frozen=True)

    url: str
    title: str = NO_TITLE
    content: str  # text of <body>, or the raw HTML when there is no <body>
    html: str
