"""Application configuration and .env loading."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralized runtime configuration."""

    lt_host: str = Field(default="http://127.0.0.1", validation_alias="LT_HOST")
    lt_port: str = Field(default="8081", validation_alias="LT_PORT")
    lt_language: str = Field(default="en-US", validation_alias="LT_LANGUAGE")
    lt_timeout: float = Field(default=30.0, validation_alias="LT_TIMEOUT")

    chunk_size: int = Field(default=1000, ge=1, validation_alias="CHUNK_SIZE")
    check_concurrency: int = Field(
        default=1, ge=1, validation_alias="CHECK_CONCURRENCY"
    )
    debounce_seconds: float = Field(
        default=0.3, ge=0, validation_alias="DEBOUNCE_SECONDS"
    )
    layout_line_spacing: float = Field(
        default=0.65, ge=0, validation_alias="LAYOUT_LINE_SPACING"
    )

    log_level: str = Field(default="WARNING", validation_alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once from .env/environment."""
    return Settings()


__all__ = ["Settings", "get_settings"]
