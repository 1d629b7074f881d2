"""Interval string parsing."""

import logging
import re

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_MS = 60_000  # One minute

_SCHEDULE_PATTERN = re.compile(r"(\d+)(m|h|d)?", re.ASCII)

_UNIT_MS = {
    "m": 60 * 1000,
    "h": 60 * 60 * 1000,
    "d": 24 * 60 * 60 * 1000,
}


def parse_interval(schedule: str) -> int:
    """Convert an interval string to milliseconds.

    Supports "<n>m", "<n>h", "<n>d" or a bare number of minutes.
    Anything else falls back to one minute instead of raising.

    Args:
        schedule: Interval string, e.g. "5m", "2h", "1d", "10"

    Returns:
        Interval in milliseconds
    """
    match = _SCHEDULE_PATTERN.fullmatch(schedule or "")
    if not match:
        logger.warning(
            f"Invalid schedule {schedule!r}, using default of {DEFAULT_INTERVAL_MS} ms"
        )
        return DEFAULT_INTERVAL_MS

    value = int(match.group(1))
    unit = match.group(2) or "m"
    return value * _UNIT_MS[unit]
