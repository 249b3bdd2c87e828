"""Configuration package."""

from housing_office.config.settings import (
    AppSettings,
    LoggingSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "LoggingSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
