"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str | None = None
    openai_store: bool = False
    classification_timeout_seconds: float | None = 60.0
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    storage_table: str = "kv_store"
    storage_scope: str = "default"
    history_limit: int = 50
    default_language: str = "de"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def uses_supabase(self) -> bool:
        """Return True when a Supabase project is configured for storage."""
        return bool(self.supabase_url and self.supabase_service_key)
