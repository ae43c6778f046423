"""
Centralized configuration for the Aura client.

All settings are loaded from environment variables (or a local .env file)
with sensible defaults. Supabase settings are namespaced as SUPABASE_*.
"""

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Aura"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Detection backend
    api_endpoint: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("api_endpoint", "fastapi_endpoint"),
    )
    request_timeout: float = 30.0  # seconds

    # Supabase (public credentials only)
    supabase_url: str = ""
    supabase_anon_key: str = ""

    # Pre-issued bearer token for non-interactive use
    access_token: Optional[str] = None

    # Where password-reset mails send the user back to
    app_url: str = "http://localhost:3000"

    # Paging
    history_page_limit: int = 3
    recent_detections_limit: int = 5

    # Plan request limits shown on the dashboard
    free_request_limit: int = 100
    premium_request_limit: int = 1000

    @property
    def is_api_configured(self) -> bool:
        """Whether a detection backend address is available."""
        return bool(self.api_endpoint and self.api_endpoint.strip())


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
