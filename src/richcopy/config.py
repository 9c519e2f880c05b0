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

# src/richcopy/config.py  ->  parent x3  ->  project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

MARKDOWN_PRESETS = frozenset({"commonmark", "default", "zero"})


# ---------------------------------------------------------------------------
# Sub-models (one per configuration domain)
# ---------------------------------------------------------------------------
class MarkdownConfig(BaseModel):
    """Markdown parser options for homepage and news copy."""

    preset: str = "commonmark"
    enable_tables: bool = True
    enable_strikethrough: bool = True

    @field_validator("preset")
    @classmethod
    def known_preset(cls, value: str) -> str:
        if value not in MARKDOWN_PRESETS:
            msg = (
                f"MARKDOWN__PRESET must be one of {sorted(MARKDOWN_PRESETS)}, "
                f"got {value!r}"
            )
            raise ValueError(msg)
        return value


class LogConfig(BaseModel):
    """Logging destinations and verbosity."""

    dir: Path = Path("logs")
    level: str = "INFO"
    to_file: bool = False

    @field_validator("level")
    @classmethod
    def known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            msg = f"LOG__LEVEL must be a logging level name, got {value!r}"
            raise ValueError(msg)
        return level


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Settings with automatic .env loading and type validation.

    Environment variables use double-underscore delimiter for nesting:
    ``MARKDOWN__PRESET``, ``LOG__LEVEL``, etc.
    """

    model_config = SettingsConfigDict(
        env_file=_PROJECT_ROOT / ".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    markdown: MarkdownConfig = MarkdownConfig()
    log: LogConfig = LogConfig()


# ---------------------------------------------------------------------------
# Singleton access
# ---------------------------------------------------------------------------
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Call ``get_settings.cache_clear()`` in tests to reset.
    """
    settings = Settings()

    env_file = Path(str(settings.model_config.get("env_file")))
    if env_file.is_file():
        logger.info("Settings loaded .env from: %s", env_file)
    else:
        logger.info("Settings: no .env file found, using env vars and defaults")

    return settings
