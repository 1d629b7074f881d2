"""Failure reporter that writes to the log."""

import logging

logger = logging.getLogger(__name__)


class LoggingFailureReporter:
    """Reports job failures through the logging module."""

    def __init__(self, log: logging.Logger = logger):
        self._log = log

    @property
    def channel_name(self) -> str:
        """Return channel name for this reporter."""
        return "log"

    async def report(self, job_id: str, error: BaseException) -> None:
        """Log the failure at ERROR level."""
        self._log.error(f"Job {job_id} failed: {error}")
