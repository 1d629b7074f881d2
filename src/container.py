"""Dependency injection container."""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Callable, Optional, Any

from src.domain.protocols import Timer, FailureReporter
from src.scheduler.jobs import JobRegistry


T = TypeVar("T")


class Provider(Generic[T]):
    """Lazy provider that creates instance on first access."""

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._instance: Optional[T] = None

    def get(self) -> T:
        """Get the instance, creating it if necessary."""
        if self._instance is None:
            self._instance = self._factory()
        return self._instance

    def reset(self) -> None:
        """Reset the instance (for testing)."""
        self._instance = None

    def override(self, instance: T) -> None:
        """Override with a specific instance (for testing)."""
        self._instance = instance


@dataclass
class Container:
    """Dependency injection container."""

    # Environment collaborators
    _timer: Optional[Provider[Timer]] = None
    _failure_reporters: list[Provider[FailureReporter]] = field(
        default_factory=list
    )

    # Registry built from the collaborators above unless configured
    _registry: Optional[Provider[JobRegistry]] = None

    # Settings cache
    _settings: Optional[Any] = None

    @property
    def timer(self) -> Timer:
        """Get the repeating timer."""
        if self._timer is None:
            raise RuntimeError("Timer not configured")
        return self._timer.get()

    @property
    def failure_reporters(self) -> list[FailureReporter]:
        """Get all failure reporters."""
        return [p.get() for p in self._failure_reporters]

    @property
    def registry(self) -> JobRegistry:
        """Get the job registry."""
        if self._registry is None:
            self._registry = Provider(
                lambda: JobRegistry(
                    timer=self.timer,
                    reporters=self.failure_reporters,
                )
            )
        return self._registry.get()

    @property
    def settings(self) -> Any:
        """Get application settings."""
        if self._settings is None:
            from src.config.settings import get_settings

            self._settings = get_settings()
        return self._settings

    def configure_timer(self, factory: Callable[[], Timer]) -> "Container":
        """Configure the repeating timer."""
        self._timer = Provider(factory)
        return self

    def add_failure_reporter(
        self, factory: Callable[[], FailureReporter]
    ) -> "Container":
        """Add a failure reporter."""
        self._failure_reporters.append(Provider(factory))
        return self

    def configure_registry(
        self, factory: Callable[[], JobRegistry]
    ) -> "Container":
        """Configure the job registry directly."""
        self._registry = Provider(factory)
        return self

    def reset(self) -> None:
        """Reset all providers (for testing)."""
        if self._registry:
            self._registry.reset()
        self._registry = None
        if self._timer:
            self._timer.reset()
        for reporter in self._failure_reporters:
            reporter.reset()
        self._failure_reporters.clear()
        self._settings = None


# Global container instance
container = Container()


def get_container() -> Container:
    """Get the global container instance."""
    return container


def reset_container() -> None:
    """Reset the global container (for testing)."""
    global container
    container.reset()
    container = Container()


def setup_container() -> Container:
    """Set up the global container from settings unless already configured."""
    from src.notifications import LoggingFailureReporter, WebhookFailureReporter
    from src.scheduler.timers import AsyncioTimer, APSchedulerTimer

    current = get_container()

    # Check if already configured
    try:
        _ = current.timer
        return current
    except RuntimeError:
        pass

    settings = current.settings
    scheduler_settings = settings.scheduler
    webhook_settings = settings.failure_webhook

    if scheduler_settings.timer_backend == "apscheduler":
        current.configure_timer(
            lambda: APSchedulerTimer(timezone=scheduler_settings.timezone)
        )
    else:
        current.configure_timer(AsyncioTimer)

    current.add_failure_reporter(LoggingFailureReporter)
    if webhook_settings.url:
        api_key = (
            webhook_settings.api_key.get_secret_value()
            if webhook_settings.api_key
            else None
        )
        current.add_failure_reporter(
            lambda: WebhookFailureReporter(webhook_settings.url, api_key=api_key)
        )

    return current
