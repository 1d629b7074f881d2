"""Failure reporter implementations."""

from .log_reporter import LoggingFailureReporter
from .webhook_reporter import WebhookFailureReporter

__all__ = [
    "LoggingFailureReporter",
    "WebhookFailureReporter",
]
