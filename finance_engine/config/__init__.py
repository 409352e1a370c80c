"""Configuration package."""

from finance_engine.config.settings import (
    EngineSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "EngineSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
