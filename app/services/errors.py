"""Error families raised by the scrape and extract stages.

Each family is closed: callers can match on the concrete subclasses listed
here and nothing else is ever raised under the family base class.
"""

from typing import Literal, Optional

from app.models.page import WebPage


# ---------------------------------------------------------------------------
# Scrape stage (fetch + parse)
# ---------------------------------------------------------------------------

class ScraperError(Exception):
    """Base class for page fetch / parse failures."""


class NetworkError(ScraperError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Network error: {detail}")


class InvalidUrlError(ScraperError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Invalid URL: {detail}")


class ParseError(ScraperError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Parse error: {detail}")


class FetchTimeoutError(ScraperError):
    def __init__(self) -> None:
        super().__init__("Request timeout")


class EmptyContentError(ScraperError):
    def __init__(self) -> None:
        super().__init__("No content found")


# ---------------------------------------------------------------------------
# Extract stage (chat-completion call)
# ---------------------------------------------------------------------------

class LlmError(Exception):
    """Base class for recipe extraction failures."""


class LlmNetworkError(LlmError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Network error: {detail}")


class ApiError(LlmError):
    """Non-2xx reply from the chat-completion endpoint."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"API error: HTTP {status_code}: {body}")


class LlmParseError(LlmError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Parse error: {detail}")


class InvalidResponseError(LlmError):
    def __init__(self) -> None:
        super().__init__("Invalid response from API")


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

Stage = Literal["scrape", "extract"]


class PipelineError(Exception):
    """Failure of one pipeline stage.

    ``error`` is the stage's own error, untranslated.  ``page`` is set when
    the scrape stage succeeded and only extraction failed.
    """

    def __init__(
        self,
        stage: Stage,
        error: Exception,
        page: Optional[WebPage] = None,
    ) -> None:
        self.stage = stage
        self.error = error
        self.page = page
        super().__init__(f"{stage} failed: {error}")
