"""
Configuration settings using Pydantic Settings.
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings

import os


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    GEMINI_API_KEY: str = os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY") or ""
    GEMINI_API_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    REPORT_MODEL_NAME: str = "gemini-3-flash-preview"
    IMAGE_MODEL_NAME: str = "gemini-2.5-flash-image"
    CHAT_MODEL_NAME: str = "gemini-3-flash-preview"

    WIKIPEDIA_API_URL: str = "https://en.wikipedia.org/w/api.php"
    WIKIPEDIA_USER_AGENT: str = "itihaasa-heritage/1.0 (https://github.com/itihaasa)"
    WIKIPEDIA_DEFAULT_QUERY: str = "Heritage sites in Andhra Pradesh"
    WIKIPEDIA_MAX_IMAGES: int = 5

    HTTP_TIMEOUT_SECONDS: float = 60.0

    DEFAULT_LANGUAGE: str = "en"
    RECONSTRUCTION_DEFAULT_CONTEXT: str = "Andhra Heritage"

    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
    ]

    DEBUG: bool = False

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore"
    }

    @field_validator("WIKIPEDIA_MAX_IMAGES")
    @classmethod
    def clamp_max_images(cls, value: int) -> int:
        return min(max(value, 0), 5)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    :return: Cached Settings instance
    :rtype: Settings
    """
    return Settings()


settings = get_settings()
