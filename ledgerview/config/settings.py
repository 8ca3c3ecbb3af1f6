"""
Configuration Management for Ledger Viewer

Uses pydantic-settings for type-safe configuration from environment variables.

All configuration is centralized here: the ledger API location and retry
behaviour, the view formatting options and the search policy for
untagged activities.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class UntaggedSentinelPolicy(str, Enum):
    """
    How a search string selects activities without a tag pattern.

    PREFIX: any non-empty prefix of the token ("n", "nu", "nul", "null").
    EXACT:  only the full token ("null").
    """
    PREFIX = "prefix"
    EXACT = "exact"


class ApiSettings(BaseSettings):
    """Ledger HTTP API configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_API_",
        extra="ignore"
    )

    base_url: str = Field(
        default="http://localhost:3030/api",
        description="Base URL of the ledger API"
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for a single HTTP request"
    )
    max_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts per request before giving up"
    )
    retry_wait_min: float = Field(
        default=2.0,
        ge=0,
        description="Minimum wait between attempts (seconds)"
    )
    retry_wait_max: float = Field(
        default=10.0,
        ge=0,
        description="Maximum wait between attempts (seconds)"
    )

    @field_validator('base_url')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Endpoint paths are joined with a single slash."""
        return v.rstrip("/")


class ViewSettings(BaseSettings):
    """Activities view and search configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_VIEW_",
        extra="ignore"
    )

    currency_symbol: str = Field(
        default="€",
        min_length=1,
        max_length=5,
        description="Symbol appended to the balance amount"
    )
    untagged_token: str = Field(
        default="null",
        min_length=1,
        description="Search token selecting activities without tags"
    )
    untagged_policy: UntaggedSentinelPolicy = Field(
        default=UntaggedSentinelPolicy.PREFIX,
        description="Whether prefixes of the untagged token also match"
    )
    chart_tags: str = Field(
        default="FREEMOBILE,RETRAIT,EDF,PARIS",
        description="Comma-separated tags, one spend chart per tag"
    )

    @field_validator('untagged_token')
    @classmethod
    def lowercase_token(cls, v: str) -> str:
        """Search strings are lower-cased before matching."""
        return v.strip().lower()

    @property
    def chart_tags_list(self) -> list[str]:
        """Get chart tags as a list."""
        return [tag.strip() for tag in self.chart_tags.split(",") if tag.strip()]


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

    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Minimum level for structured logs"
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
    def api(self) -> ApiSettings:
        return ApiSettings()

    @property
    def view(self) -> ViewSettings:
        return ViewSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries for the invalid ones.
    """
    results = {}

    settings = get_settings()

    for name in ("api", "view", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
