"""Scheduler module for periodic jobs."""

from .intervals import parse_interval, DEFAULT_INTERVAL_MS
from .jobs import JobRegistry
from .timers import AsyncioTimer, APSchedulerTimer

__all__ = [
    "parse_interval",
    "DEFAULT_INTERVAL_MS",
    "JobRegistry",
    "AsyncioTimer",
    "APSchedulerTimer",
]
