"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-5-nano"
    openai_timeout_seconds: float = 30.0
    food_max_tokens: int = 300
    food_image_detail: str = "low"
    menu_max_completion_tokens: int = 2000
    timezone: str = "UTC"
    storage_backend: str = "memory"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    tesseract_cmd: str | None = None
    tesseract_lang: str = "eng"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_storage_backend(raw: str) -> str:
    """Normalize the storage backend name from env."""
    cleaned = raw.strip().lower()
    if cleaned in {"", "memory", "in-memory", "inmemory"}:
        return "memory"
    if cleaned == "supabase":
        return "supabase"
    raise ValueError(f"Unknown storage backend: {raw}")
