"""Configuration package."""

from finrange.config.settings import (
    LocaleSettings,
    LoggingSettings,
    PickerSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "LocaleSettings",
    "LoggingSettings",
    "PickerSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
