"""Tests for dependency injection container."""

import os
import pytest
from unittest.mock import patch

from src.config.settings import clear_settings_cache
from src.container import (
    Container,
    Provider,
    get_container,
    reset_container,
    setup_container,
)
from src.notifications import LoggingFailureReporter, WebhookFailureReporter
from src.scheduler.jobs import JobRegistry
from src.scheduler.timers import AsyncioTimer, APSchedulerTimer


class TestProvider:
    """Tests for Provider class."""

    def test_lazy_initialization(self):
        """Should not call factory until get() is called."""
        call_count = 0

        def factory():
            nonlocal call_count
            call_count += 1
            return AsyncioTimer()

        provider = Provider(factory)
        assert call_count == 0

        provider.get()
        assert call_count == 1

        # Should use cached instance
        provider.get()
        assert call_count == 1

    def test_reset_clears_instance(self):
        """Should clear instance when reset() is called."""
        provider = Provider(AsyncioTimer)

        instance1 = provider.get()
        provider.reset()
        instance2 = provider.get()

        assert instance1 is not instance2

    def test_override(self):
        """Should use overridden instance."""
        provider = Provider(AsyncioTimer)
        override_instance = AsyncioTimer()

        provider.override(override_instance)

        assert provider.get() is override_instance


class TestContainer:
    """Tests for Container class."""

    @pytest.fixture
    def container(self) -> Container:
        """Create a fresh container for each test."""
        return Container()

    def test_configure_timer(self, container, timer):
        """Should configure and access the timer."""
        container.configure_timer(lambda: timer)

        assert container.timer is timer

    def test_unconfigured_timer_raises_error(self, container):
        """Should raise error when accessing unconfigured timer."""
        with pytest.raises(RuntimeError, match="not configured"):
            _ = container.timer

    def test_failure_reporters_empty_by_default(self, container):
        """Should have no failure reporters by default."""
        assert container.failure_reporters == []

    def test_add_failure_reporter(self, container, reporter):
        """Should add failure reporters."""
        container.add_failure_reporter(lambda: reporter)

        assert container.failure_reporters == [reporter]

    def test_registry_built_from_collaborators(self, container, timer, reporter):
        """Should wire the timer and reporters into the registry."""
        container.configure_timer(lambda: timer).add_failure_reporter(lambda: reporter)

        registry = container.registry

        assert isinstance(registry, JobRegistry)
        assert registry.reporters == [reporter]
        assert container.registry is registry

    def test_registry_uses_configured_timer(self, container, timer):
        """Should arm through the configured timer."""
        container.configure_timer(lambda: timer)
        registry = container.registry

        async def action():
            pass

        registry.add_job("j1", "Job1", "1m", action)
        registry.start()

        assert len(timer.armed) == 1
        registry.stop()

    def test_registry_without_timer_raises(self, container):
        """Should refuse to build a registry without a timer."""
        with pytest.raises(RuntimeError, match="not configured"):
            _ = container.registry

    def test_configure_registry(self, container, timer):
        """Should accept a registry factory."""
        registry = JobRegistry(timer=timer)
        container.configure_registry(lambda: registry)

        assert container.registry is registry

    def test_reset_clears_all(self, container, timer, reporter):
        """Should clear all configured instances on reset."""
        container.configure_timer(lambda: timer).add_failure_reporter(lambda: reporter)
        registry1 = container.registry

        container.reset()

        assert container.failure_reporters == []
        container.configure_timer(lambda: timer)
        assert container.registry is not registry1

    def test_settings_lazy_load(self, container):
        """Should lazy load settings."""
        settings = container.settings
        assert settings is not None
        assert container.settings is settings


class TestGlobalContainer:
    """Tests for global container functions."""

    def setup_method(self):
        """Reset container before each test."""
        reset_container()
        clear_settings_cache()

    def teardown_method(self):
        reset_container()
        clear_settings_cache()

    def test_get_container_returns_global(self):
        """Should return global container instance."""
        assert get_container() is get_container()

    def test_reset_container_creates_new(self, timer):
        """Should create new container on reset."""
        get_container().configure_timer(lambda: timer)

        reset_container()

        with pytest.raises(RuntimeError):
            _ = get_container().timer

    def test_setup_container_defaults(self):
        """Should use the asyncio timer and log reporter by default."""
        with patch.dict(os.environ, {}, clear=True):
            container = setup_container()

            assert isinstance(container.timer, AsyncioTimer)
            reporters = container.failure_reporters
            assert len(reporters) == 1
            assert isinstance(reporters[0], LoggingFailureReporter)

    def test_setup_container_apscheduler_and_webhook(self):
        """Should honour timer backend and webhook settings."""
        env_vars = {
            "SCHEDULER_TIMER_BACKEND": "apscheduler",
            "FAILURE_WEBHOOK_URL": "https://hooks.example.com/failures",
            "FAILURE_WEBHOOK_API_KEY": "hook_key",
        }
        with patch.dict(os.environ, env_vars, clear=False):
            container = setup_container()

            assert isinstance(container.timer, APSchedulerTimer)
            channels = [r.channel_name for r in container.failure_reporters]
            assert channels == ["log", "webhook"]
            assert isinstance(container.failure_reporters[1], WebhookFailureReporter)

    def test_setup_container_keeps_existing_configuration(self, timer):
        """Should not override an already configured container."""
        get_container().configure_timer(lambda: timer)

        container = setup_container()

        assert container.timer is timer
        assert container.failure_reporters == []
