"""
Configuration Management for finrange

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Each concern has its own env prefix so a deployment only has to set
the groups it cares about.
"""

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from finrange.models.range import RangeSelector


class PickerSettings(BaseSettings):
    """Date range picker configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DATE_RANGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    min_year: int = Field(
        default=1990,
        ge=1,
        description="Earliest year accepted by the year range inputs"
    )
    max_years_ahead: int = Field(
        default=5,
        ge=0,
        le=100,
        description="How many years past the current one the year inputs accept"
    )
    default_range: str = Field(
        default="thisYear",
        description="Quick range applied when a picker is created"
    )

    @field_validator('default_range')
    @classmethod
    def validate_default_range(cls, v: str) -> str:
        tokens = [selector.value for selector in RangeSelector]
        if v not in tokens:
            raise ValueError(
                f"Unknown default range '{v}'. "
                f"Expected one of: {', '.join(tokens)}"
            )
        return v


class LocaleSettings(BaseSettings):
    """Operating locale used to turn "now" into a calendar date."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Empty means the host's local time
    timezone: str = Field(
        default="",
        description="IANA timezone name, e.g. 'Asia/Jerusalem'"
    )

    @field_validator('timezone')
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        name = v.strip()
        if name:
            try:
                ZoneInfo(name)
            except (ZoneInfoNotFoundError, ValueError, OSError):
                raise ValueError(f"Unknown timezone '{v}'") from None
        return name


class LoggingSettings(BaseSettings):
    """Structured logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    level: str = Field(
        default="INFO",
        description="Minimum log level"
    )
    json_output: bool = Field(
        default=True,
        description="Render log lines as JSON (otherwise console format)"
    )

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level '{v}'")
        return level


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
    def picker(self) -> PickerSettings:
        return PickerSettings()

    @property
    def locale(self) -> LocaleSettings:
        return LocaleSettings()

    @property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings groups load from the current environment.

    Returns a dict of {setting_name: is_valid}, plus
    "<setting_name>_error" entries for the ones that failed.
    """
    results = {}

    settings = get_settings()

    for name in ("picker", "locale", "logging"):
        try:
            _ = getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
