"""LLM-based recipe metadata extraction."""

import json
import logging
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from app.core.config import DEFAULT_LLM_API_URL, DEFAULT_LLM_MODEL
from app.models.chat import ChatMessage, ChatRequest, ChatResponse
from app.models.recipe import RecipeInfo
from app.services.errors import (
    ApiError,
    InvalidResponseError,
    LlmNetworkError,
    LlmParseError,
)

TIMEOUT = 60.0  # seconds

OPTIONAL_FIELDS = ("prep_time", "cook_time", "total_time", "servings")

SYSTEM_PROMPT = (
    "You are a helpful assistant that extracts recipe information from web content. "
    "Always return valid JSON without markdown code blocks or formatting."
)

USER_PROMPT_TEMPLATE = """Please analyze this recipe content and extract the following information in a structured format:

1. Ingredients list (clean, human-readable format)
2. Preparation time
3. Cooking time
4. Total time
5. Number of servings

Return the information in this exact JSON format:
{{
    "ingredients": ["ingredient 1", "ingredient 2", ...],
    "prep_time": "time or null",
    "cook_time": "time or null",
    "total_time": "time or null",
    "servings": "servings or null"
}}

Recipe content:
{content}"""

logger = logging.getLogger(__name__)


def build_chat_request(page_content: str, model: str = DEFAULT_LLM_MODEL) -> ChatRequest:
    return ChatRequest(
        model=model,
        messages=[
            ChatMessage(role="system", content=SYSTEM_PROMPT),
            ChatMessage(role="user", content=USER_PROMPT_TEMPLATE.format(content=page_content)),
        ],
    )


def clean_llm_content(content: str) -> str:
    """Strip a markdown code fence the model may have wrapped its JSON in.

    Order matters: trim, drop one leading "```json" (or else one leading
    "```"), drop one trailing "```", trim again.
    """
    cleaned = content.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[len("```json"):]
    elif cleaned.startswith("```"):
        cleaned = cleaned[len("```"):]
    if cleaned.endswith("```"):
        cleaned = cleaned[: -len("```")]
    return cleaned.strip()


def normalize_optional(value: Any) -> Optional[str]:
    """Return the trimmed string, or None for missing / empty / "null" values."""
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text or text.lower() == "null":
        return None
    return text


def _normalize_ingredients(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    items = (item.strip() for item in value if isinstance(item, str))
    return [item for item in items if item]


def parse_recipe_payload(data: Any) -> RecipeInfo:
    """Map the model's JSON object onto :class:`RecipeInfo`, tolerating junk."""
    if not isinstance(data, dict):
        data = {}
    return RecipeInfo(
        ingredients=_normalize_ingredients(data.get("ingredients")),
        **{field: normalize_optional(data.get(field)) for field in OPTIONAL_FIELDS},
    )


def _response_text(response: httpx.Response) -> str:
    try:
        return response.text
    except (httpx.StreamError, UnicodeDecodeError):
        return ""


async def _post(
    client: httpx.AsyncClient,
    endpoint: str,
    request: ChatRequest,
    headers: dict,
    timeout: float,
) -> httpx.Response:
    try:
        return await client.post(
            endpoint,
            json=request.model_dump(),
            headers=headers,
            timeout=timeout,
        )
    except httpx.HTTPError as exc:
        logger.error("LLM request to %s failed: %s", endpoint, exc)
        raise LlmNetworkError(str(exc)) from exc


async def extract_recipe_info(
    page_content: str,
    api_key: str,
    *,
    model: str = DEFAULT_LLM_MODEL,
    endpoint: str = DEFAULT_LLM_API_URL,
    timeout: float = TIMEOUT,
    client: httpx.AsyncClient | None = None,
) -> RecipeInfo:
    """Ask the chat-completion endpoint for the recipe in *page_content*.

    A single bad reply is final; nothing is retried.

    Raises:
        LlmNetworkError: on transport failures, timeouts included.
        ApiError: on a non-2xx status. The body is not parsed.
        LlmParseError: if the envelope or the model's reply is not valid JSON.
        InvalidResponseError: if the reply has no choices.
    """
    request = build_chat_request(page_content, model)
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}",
    }

    if client is None:
        async with httpx.AsyncClient() as owned_client:
            response = await _post(owned_client, endpoint, request, headers, timeout)
    else:
        response = await _post(client, endpoint, request, headers, timeout)

    if not response.is_success:
        error_text = _response_text(response)
        logger.error(
            "LLM API error response: status=%s body=%s",
            response.status_code,
            error_text[:2000],
        )
        raise ApiError(response.status_code, error_text)

    logger.info("LLM API response status: %s", response.status_code)

    try:
        chat_response = ChatResponse.model_validate_json(response.content)
    except ValidationError as exc:
        raise LlmParseError(f"Failed to parse JSON response: {exc}") from exc

    if not chat_response.choices:
        raise InvalidResponseError()

    content = chat_response.choices[0].message.content
    cleaned = clean_llm_content(content)

    try:
        recipe_data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        logger.error("LLM reply was not valid JSON (truncated): %s", content[:1000])
        raise LlmParseError(f"Failed to parse recipe JSON: {exc}") from exc

    return parse_recipe_payload(recipe_data)
