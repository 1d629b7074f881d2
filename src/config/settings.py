"""Application settings using Pydantic."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchedulerSettings(BaseSettings):
    """Scheduler configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SCHEDULER_",
        extra="ignore",
    )

    # Start the registry together with the API app
    enabled: bool = Field(default=True)
    # Repeating timer implementation: "asyncio" or "apscheduler"
    timer_backend: Literal["asyncio", "apscheduler"] = Field(default="asyncio")
    # Only handed to APScheduler; schedules are plain intervals
    timezone: str = Field(default="UTC")


class FailureWebhookSettings(BaseSettings):
    """Failure webhook configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FAILURE_WEBHOOK_",
        extra="ignore",
    )

    url: Optional[str] = Field(default=None)
    api_key: Optional[SecretStr] = Field(default=None)


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(default=False)
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    log_level: str = Field(default="INFO")

    # Nested settings - manually create to avoid env prefix issues
    @property
    def scheduler(self) -> SchedulerSettings:
        return SchedulerSettings()

    @property
    def failure_webhook(self) -> FailureWebhookSettings:
        return FailureWebhookSettings()


@lru_cache
def get_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
