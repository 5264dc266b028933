"""Centralized settings for the chat core.

Uses pydantic-settings to load from environment variables (prefixed
TERMINATOR_). Provider API keys are deliberately absent: credentials are
owned by the caller and passed in per call.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Chat core settings loaded from environment variables."""

    # --- Provider endpoints ---
    openai_base_url: str = "https://api.openai.com"
    anthropic_base_url: str = "https://api.anthropic.com"
    gemini_base_url: str = "https://generativelanguage.googleapis.com"
    openrouter_base_url: str = "https://openrouter.ai"

    # --- Anthropic wire constants ---
    anthropic_version: str = "2023-06-01"
    anthropic_max_tokens: int = 1200

    # --- Timeouts (seconds); no retries are performed ---
    connect_timeout: float = 10.0
    request_timeout: float = 120.0
    catalog_timeout: float = 20.0

    model_config = {
        "env_prefix": "TERMINATOR_",
        "env_file": ".env",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton."""
    return Settings()
