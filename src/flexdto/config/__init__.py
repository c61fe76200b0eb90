"""Configuration management for flexdto."""

from .settings import (
    MapperSettings,
    clear_settings_cache,
    get_settings,
    get_strict_default,
    is_development_mode,
    reload_settings,
    set_strict_default,
)

__all__ = [
    "MapperSettings",
    "clear_settings_cache",
    "get_settings",
    "get_strict_default",
    "is_development_mode",
    "reload_settings",
    "set_strict_default",
]
