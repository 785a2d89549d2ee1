"""Configuration for the NEI MCP Server.

Settings are read from environment variables (and an optional ``.env``
file). ``SERVER_URL`` and ``PROJECT_ID`` are required; everything else
has a default.
"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError
from .models.enums import ExpansionPolicy

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Server settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Upstream NEI platform
    server_url: str
    project_id: str
    request_timeout: float = 30.0

    # Normalization
    detail_base_url: str | None = None
    datatype_expansion: ExpansionPolicy = ExpansionPolicy.MULTI_FIELD

    # Optional on-disk snapshot tier
    cache_file: Path | None = None

    # Load the project cache during startup
    preload: bool = True

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    @field_validator("server_url", "project_id")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value.strip()

    @field_validator("server_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process.

    Raises:
        ConfigError: If required settings are missing or invalid
    """
    try:
        return Settings()
    except ValidationError as e:
        problems = ", ".join(
            f"{'.'.join(str(part) for part in err['loc']).upper()}: {err['msg']}"
            for err in e.errors()
        )
        logger.error(f"Invalid configuration: {problems}")
        raise ConfigError(f"Invalid configuration: {problems}") from e
