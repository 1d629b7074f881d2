"""Tests for interval string parsing."""

import logging

import pytest

from src.scheduler.intervals import DEFAULT_INTERVAL_MS, parse_interval


@pytest.mark.parametrize(
    "schedule, expected",
    [
        ("5m", 300_000),
        ("2h", 7_200_000),
        ("1d", 86_400_000),
        ("10", 600_000),
        ("abc", 60_000),
        ("", 60_000),
    ],
)
def test_interval_table(schedule, expected):
    """Should match the documented interval table exactly."""
    assert parse_interval(schedule) == expected


@pytest.mark.parametrize(
    "schedule",
    ["-5m", "1.5h", "5s", "5 m", "m", "5M", "5mm", " 5m", "5m\n", "٥m"],
)
def test_malformed_schedules_fall_back(schedule):
    """Should fall back to one minute instead of raising."""
    assert parse_interval(schedule) == DEFAULT_INTERVAL_MS


def test_zero_is_valid():
    """Should accept zero as a number of minutes."""
    assert parse_interval("0") == 0


def test_leading_zeros():
    """Should parse leading zeros as decimal."""
    assert parse_interval("007m") == 420_000


def test_fallback_is_logged(caplog):
    """Should log a warning when falling back."""
    with caplog.at_level(logging.WARNING, logger="src.scheduler.intervals"):
        parse_interval("every tuesday")

    assert "Invalid schedule" in caplog.text
    assert "every tuesday" in caplog.text


def test_valid_schedule_is_not_logged(caplog):
    """Should stay quiet for valid schedules."""
    with caplog.at_level(logging.WARNING, logger="src.scheduler.intervals"):
        parse_interval("3h")

    assert caplog.text == ""
