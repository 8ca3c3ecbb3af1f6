"""Configuration package."""

from ledgerview.config.settings import (
    ApiSettings,
    AppSettings,
    Settings,
    UntaggedSentinelPolicy,
    ViewSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "ApiSettings",
    "AppSettings",
    "Settings",
    "UntaggedSentinelPolicy",
    "ViewSettings",
    "get_settings",
    "validate_all_settings",
]
