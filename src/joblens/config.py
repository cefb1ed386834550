# src/joblens/config.py
"""
Runtime settings, read from JOBLENS_* environment variables (and a .env file).

Everything has a safe default so the CLI works with no configuration at all.
Bad values (e.g. JOBLENS_MAX_PAGES=ten) raise pydantic's ValidationError.
"""

from __future__ import annotations

import logging

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://jsonfakery.com/jobs/paginated"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="JOBLENS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    api_url: str = DEFAULT_API_URL
    max_pages: int = Field(10, ge=1)  # hard ceiling against a source that never reports an end
    cache_ttl_seconds: float = Field(300.0, ge=0)
    page_size: int = Field(9, ge=1)
    infinite_batch: int = Field(9, ge=1)
    http_timeout: float = Field(20.0, gt=0)
    http_retries: int = Field(3, ge=1)
    # Shared with other tools, so no prefix
    log_level: str = Field("INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper()


def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str = "INFO") -> None:
    if logging.getLogger().handlers:
        # Already configured (e.g. by a test runner)
        return
    logging.basicConfig(level=level, format=LOG_FORMAT)
