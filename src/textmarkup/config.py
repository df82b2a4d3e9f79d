"""Centralised configuration using pydantic-settings.

All environment variables are read through the Settings class.
Consumers call ``get_settings()`` to obtain a cached, validated instance.
Tests construct ``Settings(_env_file=None, ...)`` directly for isolation.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# src/textmarkup/config.py  ->  parent x3  ->  project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


# ---------------------------------------------------------------------------
# Sub-models (one per configuration domain)
# ---------------------------------------------------------------------------
class SerializationConfig(BaseModel):
    """Defaults applied when building serializations."""

    default_tag: str = "p"

    @field_validator("default_tag")
    @classmethod
    def _tag_is_identifier(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            msg = "TEXTMARKUP_SERIALIZATION__DEFAULT_TAG must not be empty"
            raise ValueError(msg)
        return value


class LoggingConfig(BaseModel):
    """Log level and optional rotating log file directory."""

    level: str = "INFO"
    log_dir: Path | None = None

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if value not in logging.getLevelNamesMapping():
            msg = f"Unknown log level: {value}"
            raise ValueError(msg)
        return value


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Settings with automatic .env loading and type validation.

    Environment variables use the ``TEXTMARKUP_`` prefix and a
    double-underscore delimiter for nesting:
    ``TEXTMARKUP_SERIALIZATION__DEFAULT_TAG``, ``TEXTMARKUP_LOG__LEVEL``.
    """

    model_config = SettingsConfigDict(
        env_prefix="TEXTMARKUP_",
        env_file=_PROJECT_ROOT / ".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    serialization: SerializationConfig = SerializationConfig()
    log: LoggingConfig = LoggingConfig()


# ---------------------------------------------------------------------------
# Singleton access
# ---------------------------------------------------------------------------
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Call ``get_settings.cache_clear()`` in tests to reset.
    """
    settings = Settings()

    env_file = settings.model_config.get("env_file")
    if env_file is not None and Path(str(env_file)).is_file():
        logger.info("Settings loaded .env from: %s", env_file)
    else:
        logger.debug("Settings: no .env file found, using env vars and defaults")

    return settings
