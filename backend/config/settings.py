from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Loads all environment variables into a single, accessible object."""
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.5-pro"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com"
    GEMINI_ALLOW_WEB_SEARCH: bool = False
    GEMINI_TEMPERATURE: float = 0.1
    GEMINI_REQUEST_TIMEOUT: float = 60.0

    LOG_LEVEL: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
