from bs4 import BeautifulSoup
from bs4.builder import HTMLParserTreeBuilder
from soupsieve import SelectorSyntaxError

from app.models.page import NO_TITLE, WebPage
from app.services.errors import ParseError

TITLE_SELECTOR = "title"
BODY_SELECTOR = "body"

# Whitespace-only text under these tags is kept as written instead of being
# collapsed to a single space or newline.
PRESERVE_WHITESPACE_TAGS = {"html", "head", "title", "body", "pre", "textarea"}


def _select_text(soup: BeautifulSoup, selector: str) -> str | None:
    """Return the concatenated text of the first match for *selector*, or None."""
    try:
        node = soup.select_one(selector)
    except SelectorSyntaxError as exc:
        raise ParseError(str(exc)) from exc
    if node is None:
        return None
    return node.get_text()


def parse_page(html: str, url: str) -> WebPage:
    """Build a :class:`WebPage` from *html*.

    ``html.parser`` is used because it leaves the tree as written: a document
    without a ``<body>`` tag has no body element, and its raw HTML becomes
    the page content.

    Raises:
        ParseError: if a selector cannot be compiled.
    """
    builder = HTMLParserTreeBuilder(preserve_whitespace_tags=PRESERVE_WHITESPACE_TAGS)
    soup = BeautifulSoup(html, builder=builder)

    title = _select_text(soup, TITLE_SELECTOR)
    content = _select_text(soup, BODY_SELECTOR)

    return WebPage(
        url=url,
        title=NO_TITLE if title is None else title,
        content=html if content is None else content,
        html=html,
    )
