"""Configuration management for the setup plugin."""

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    """Setup plugin settings."""

    # Platform API (install / uninstall / health)
    platform_url: str = Field(default="http://localhost:7437", alias="SETUP_PLATFORM_URL")

    # Timeout for platform and credential-check HTTP calls, in seconds.
    # Unset means wait indefinitely.
    http_timeout: float | None = Field(default=None, alias="SETUP_HTTP_TIMEOUT")

    # Event emitted when a session completes
    complete_event: str = Field(default="setup:complete", alias="SETUP_COMPLETE_EVENT")

    # Logging
    log_level: str = Field(default="INFO", alias="SETUP_LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: str | None) -> str:
        """Normalize log level name from environment."""
        if value is None:
            return "INFO"
        normalized = str(value).strip().upper()
        if normalized in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            return normalized
        raise ValueError("SETUP_LOG_LEVEL must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL")

    @field_validator("http_timeout")
    @classmethod
    def validate_http_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("SETUP_HTTP_TIMEOUT must be positive")
        return value


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging for standalone use of the plugin."""
    settings = settings or get_settings()
    logging.basicConfig(level=getattr(logging, settings.log_level), format=LOG_FORMAT)
