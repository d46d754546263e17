import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LLM_API_URL = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_LLM_MODEL = "openai/gpt-4o"


class Settings(BaseSettings):
    openrouter_api_key: str | None = Field(None, alias="OPENROUTER_API_KEY")
    llm_api_url: str = Field(DEFAULT_LLM_API_URL, alias="LLM_API_URL")
    llm_model: str = Field(DEFAULT_LLM_MODEL, alias="LLM_MODEL")
    llm_timeout_seconds: float = Field(60.0, alias="LLM_TIMEOUT_SECONDS")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    try:
        return Settings()
    except PermissionError:
        logger.warning("Unable to read .env; continuing with environment variables only")
        return Settings(_env_file=None)
