"""
Configuration Management for Housing Office

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The core has no external services, so configuration covers only the
currency label shown in reports, auditing, and logging.
"""

import logging
from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """structlog / stdlib logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    level: str = Field(
        default="INFO",
        description="Minimum stdlib log level (DEBUG, INFO, WARNING, ...)"
    )
    json_output: bool = Field(
        default=True,
        description="Render log lines as JSON; console renderer otherwise"
    )

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Accept any stdlib level name, case-insensitively."""
        name = v.strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"Unknown log level: {v}")
        return name


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Log at DEBUG level, overriding LOG_LEVEL"
    )

    # Billing
    currency_unit: str = Field(
        default="RUB",
        min_length=1,
        max_length=10,
        description="The single currency label attached to every report"
    )

    # Auditing
    audit_enabled: bool = Field(
        default=True,
        description="Record command outcomes in the audit trail"
    )
    audit_max_events: int = Field(
        default=100000,
        ge=1,
        description="Upper bound on audit events kept in memory"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def app(self) -> AppSettings:
        return AppSettings()

    @property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus a
    "<setting_name>_error" entry for each section that failed.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.app
        results["app"] = True
    except ValidationError as e:
        results["app"] = False
        results["app_error"] = str(e)

    try:
        _ = settings.logging
        results["logging"] = True
    except ValidationError as e:
        results["logging"] = False
        results["logging_error"] = str(e)

    return results
