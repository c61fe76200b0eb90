"""Environment-driven settings for flexdto."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Optional

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEVELOPMENT_ENVIRONMENTS = frozenset({"development", "dev"})

_strict_default: Optional[bool] = None


class MapperSettings(BaseSettings):
    """Process-wide defaults read from ``FLEXDTO_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FLEXDTO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    environment: str = Field(
        default="production",
        validation_alias=AliasChoices("FLEXDTO_ENVIRONMENT", "ENVIRONMENT"),
        description="Host environment (development enables diagnostics)",
    )
    strict: bool = Field(default=False, description="Force diagnostics on")
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="json", description="Log format (json, console)")
    max_value_length: int = Field(
        default=200, ge=16, le=10000, description="Maximum rendered length of logged values"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def _normalize_environment(cls, value: Any) -> str:
        # Unknown environments are kept as-is; only "development" matters here.
        return str(value or "production").strip().lower()

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        level = (value or "INFO").upper()
        if level not in valid_levels:
            raise ValueError(f"log_level must be one of {sorted(valid_levels)}")
        return level

    @field_validator("log_format", mode="before")
    @classmethod
    def _normalize_log_format(cls, value: str) -> str:
        log_format = (value or "json").lower()
        if log_format not in {"json", "console"}:
            raise ValueError("log_format must be 'json' or 'console'")
        return log_format

    @property
    def is_development(self) -> bool:
        return self.environment in DEVELOPMENT_ENVIRONMENTS


@lru_cache()
def get_settings() -> MapperSettings:
    """Load settings once per process."""
    return MapperSettings()


def clear_settings_cache() -> None:
    """Forget cached settings so the next lookup reads the environment again."""
    get_settings.cache_clear()
    _environment_diagnostics.cache_clear()


def reload_settings() -> MapperSettings:
    """Drop the cached settings and read the environment again."""
    clear_settings_cache()
    return get_settings()


def set_strict_default(enabled: Optional[bool]) -> None:
    """Set the process-wide diagnostics flag.

    ``True`` enables diagnostics for every instance constructed afterwards,
    ``False`` or ``None`` leaves the decision to the environment settings.
    """
    global _strict_default
    _strict_default = enabled
    logger.debug("flexdto strict default set to %s", enabled)


def get_strict_default() -> Optional[bool]:
    return _strict_default


def is_development_mode() -> bool:
    """Return True when diagnostics should be enabled by default.

    True if any of these hold:
    - the environment is ``development`` (``FLEXDTO_ENVIRONMENT`` or ``ENVIRONMENT``)
    - ``FLEXDTO_STRICT`` is true
    - ``set_strict_default(True)`` was called
    """
    if _strict_default is True:
        return True
    return _environment_diagnostics()


@lru_cache()
def _environment_diagnostics() -> bool:
    # Cached with get_settings, so invalid settings are reported once.
    try:
        settings = get_settings()
    except ValidationError as e:
        logger.warning("Ignoring invalid flexdto settings: %s", e)
        return False
    return settings.is_development or settings.strict
