"""Application configuration."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven settings validated at startup."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    gemini_api_key: str = Field(..., alias="GEMINI_API_KEY")
    gemini_model: str = Field(default="gemini-1.5-flash-latest", alias="GEMINI_MODEL")
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        alias="GEMINI_BASE_URL",
    )
    request_timeout_seconds: float = Field(default=30.0, alias="REQUEST_TIMEOUT_SECONDS")
    retry_max_retries: int = Field(default=3, ge=0, alias="RETRY_MAX_RETRIES")
    retry_base_delay_seconds: float = Field(default=1.0, ge=0, alias="RETRY_BASE_DELAY_SECONDS")
    # Number of recent affirmations kept to steer away from repeats.
    affirmation_history_size: int = Field(default=10, gt=0, alias="AFFIRMATION_HISTORY_SIZE")
    chat_history_window: int = Field(default=20, gt=0, alias="CHAT_HISTORY_WINDOW")


def load_settings() -> Settings:
    """Load and validate settings."""

    return Settings()
