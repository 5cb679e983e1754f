"""Shared fixtures for Meridian tests."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from meridian.clock import FixedClock
from meridian.config import Config
from meridian.tools import ToolRegistry

# 2026-01-15 20:30:45.123 UTC, outside daylight saving time in the northern hemisphere
FIXED_INSTANT = datetime(2026, 1, 15, 20, 30, 45, 123456, tzinfo=UTC)


@pytest.fixture
def synthetic_zones():
    """A small zone table with fixed offsets."""
    return {
        "UTC": UTC,
        "Asia/Tokyo": timezone(timedelta(hours=9)),
        "America/New_York": timezone(timedelta(hours=-5)),
        "Asia/Kolkata": timezone(timedelta(hours=5, minutes=30)),
        "Pacific/Kiritimati": timezone(timedelta(hours=14)),
    }


@pytest.fixture
def fixed_clock(synthetic_zones):
    """Clock frozen at FIXED_INSTANT with the synthetic zone table."""
    return FixedClock(FIXED_INSTANT, zones=synthetic_zones)


@pytest.fixture
def registry(fixed_clock):
    """Tool registry running on the fixed clock."""
    return ToolRegistry(clock=fixed_clock)


@pytest.fixture(autouse=True)
def reset_config(monkeypatch):
    """Give every test a fresh Config singleton."""
    monkeypatch.delenv("MERIDIAN_CONFIG", raising=False)
    Config.reset_instance()
    yield
    Config.reset_instance()
