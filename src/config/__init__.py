"""Configuration module."""

from .settings import (
    AppSettings,
    SchedulerSettings,
    FailureWebhookSettings,
    get_settings,
    clear_settings_cache,
)

__all__ = [
    "AppSettings",
    "SchedulerSettings",
    "FailureWebhookSettings",
    "get_settings",
    "clear_settings_cache",
]
