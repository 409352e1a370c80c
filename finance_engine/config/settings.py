"""
Configuration Management for the Finance Engine

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: Configuration only supplies defaults for new value
objects and controls logging. It never changes the accounting rules:
the fixed 90% danger tier and the rounding policy are not configurable.
"""

from functools import cached_property, lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """
    Engine settings.

    Loads configuration from FINANCE_ENGINE_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_ENGINE_",
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
        description="Log at DEBUG level regardless of log_level"
    )

    # Value object defaults
    default_currency: str = Field(
        default="INR",
        min_length=3,
        max_length=3,
        description="Currency tag used when a record does not carry one"
    )
    default_reminder_days: int = Field(
        default=3,
        ge=0,
        description="Days before a due date at which a bill counts as due soon"
    )
    default_alert_threshold: int = Field(
        default=80,
        ge=0,
        le=100,
        description="Percent of a budget limit at which the warning tier begins"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Minimum log level for engine events"
    )
    log_json: bool = Field(
        default=True,
        description="Render logs as JSON (False = console renderer)"
    )

    @field_validator('default_currency')
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        """Currency tags are stored upper-case."""
        return v.strip().upper()

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only accept standard logging level names."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Unsupported log level: {v}. Allowed: {sorted(allowed)}")
        return v.upper()


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

    @cached_property
    def engine(self) -> EngineSettings:
        """Loaded once per Settings instance; get_settings.cache_clear() reloads."""
        return EngineSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.engine
        results["engine"] = True
    except ValueError as e:
        results["engine"] = False
        results["engine_error"] = str(e)

    return results
