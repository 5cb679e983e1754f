"""Unit tests for the time tool handlers and formatters."""

import re
from datetime import UTC, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from meridian.clock import FixedClock
from meridian.exceptions import ToolError, UnknownTimezoneError
from meridian.tools.models import GetCurrentTimeArgs, GetTimezoneOffsetArgs
from meridian.tools.time_tools import (
    approximate_offset_hours,
    format_iso_utc,
    format_iso_wall_clock,
    format_locale,
    get_current_time,
    get_timezone_offset,
)

TOKYO = timezone(timedelta(hours=9))


def test_format_iso_utc_has_milliseconds_and_z():
    """Test ISO output is UTC with millisecond precision."""
    moment = datetime(2026, 1, 15, 20, 30, 45, 123456, tzinfo=UTC)
    assert format_iso_utc(moment) == "2026-01-15T20:30:45.123Z"


def test_format_iso_utc_converts_from_other_zone():
    """Test a non-UTC datetime is converted before formatting."""
    moment = datetime(2026, 1, 16, 5, 30, 45, tzinfo=TOKYO)
    assert format_iso_utc(moment) == "2026-01-15T20:30:45.000Z"


def test_format_iso_wall_clock_keeps_z_suffix():
    """Test the wall-clock ISO form is local time labelled with Z."""
    moment = datetime(2026, 1, 15, 20, 30, 45, tzinfo=UTC)
    assert format_iso_wall_clock(moment, TOKYO) == "2026-01-16T05:30:45Z"


@pytest.mark.parametrize(
    "hour,expected",
    [
        (0, "1/15/2026, 12:05:09 AM"),
        (9, "1/15/2026, 9:05:09 AM"),
        (12, "1/15/2026, 12:05:09 PM"),
        (23, "1/15/2026, 11:05:09 PM"),
    ],
)
def test_format_locale_twelve_hour_clock(hour, expected):
    """Test US locale formatting around midnight and noon."""
    moment = datetime(2026, 1, 15, hour, 5, 9, tzinfo=UTC)
    assert format_locale(moment, UTC) == expected


def test_format_locale_uses_ascii_space_before_meridiem():
    """Test the AM/PM marker follows a plain space, not U+202F."""
    text = format_locale(datetime(2026, 10, 19, 16, 15, 30, tzinfo=UTC), UTC)
    assert text.endswith(":30 PM")
    assert "\u202f" not in text


def test_get_current_time_default_is_iso_utc(fixed_clock):
    """Test the default format is ISO in UTC."""
    result = get_current_time(GetCurrentTimeArgs(), fixed_clock)
    assert result == "Current time: 2026-01-15T20:30:45.123Z"


def test_get_current_time_iso_with_timezone(fixed_clock):
    """Test ISO with a timezone renders the zone's wall clock."""
    result = get_current_time(GetCurrentTimeArgs(timezone="America/New_York"), fixed_clock)
    assert result == "Current time: 2026-01-15T15:30:45Z"


def test_get_current_time_unix(fixed_clock):
    """Test unix format is whole epoch seconds."""
    result = get_current_time(GetCurrentTimeArgs(format="unix"), fixed_clock)
    assert result == f"Current time: {int(fixed_clock.now().timestamp())}"
    assert re.fullmatch(r"Current time: \d+", result)


def test_get_current_time_locale_with_timezone(fixed_clock):
    """Test locale format in a given zone."""
    result = get_current_time(GetCurrentTimeArgs(format="locale", timezone="Asia/Tokyo"), fixed_clock)
    assert result == "Current time: 1/16/2026, 5:30:45 AM"


def test_get_current_time_locale_uses_local_zone(synthetic_zones):
    """Test locale format without timezone uses the clock's local zone."""
    clock = FixedClock(
        datetime(2026, 1, 15, 20, 30, 45, tzinfo=UTC),
        zones=synthetic_zones,
        local_zone=synthetic_zones["America/New_York"],
    )
    result = get_current_time(GetCurrentTimeArgs(format="locale"), clock)
    assert result == "Current time: 1/15/2026, 3:30:45 PM"


def test_get_current_time_unknown_timezone_propagates(fixed_clock):
    """Test an unknown zone is not converted to a tool error."""
    with pytest.raises(UnknownTimezoneError) as exc_info:
        get_current_time(GetCurrentTimeArgs(timezone="Not/AZone"), fixed_clock)
    assert exc_info.value.timezone == "Not/AZone"


def test_get_current_time_unix_ignores_timezone(fixed_clock):
    """Test unix format never resolves the timezone."""
    result = get_current_time(GetCurrentTimeArgs(format="unix", timezone="Not/AZone"), fixed_clock)
    assert result.startswith("Current time: ")


@pytest.mark.parametrize(
    "zone_name,expected",
    [
        ("UTC", "Timezone UTC offset: +0 hours from UTC"),
        ("Asia/Tokyo", "Timezone Asia/Tokyo offset: +9 hours from UTC"),
        ("America/New_York", "Timezone America/New_York offset: -5 hours from UTC"),
    ],
)
def test_get_timezone_offset(fixed_clock, zone_name, expected):
    """Test offsets of whole-hour zones."""
    assert get_timezone_offset(GetTimezoneOffsetArgs(timezone=zone_name), fixed_clock) == expected


def test_get_timezone_offset_invalid_timezone(fixed_clock):
    """Test an unknown zone becomes a tool error."""
    with pytest.raises(ToolError, match="Error: Invalid timezone: Not/AZone"):
        get_timezone_offset(GetTimezoneOffsetArgs(timezone="Not/AZone"), fixed_clock)


def test_offset_ignores_minutes():
    """Test half-hour zones report only the hour difference."""
    kolkata = timezone(timedelta(hours=5, minutes=30))
    noon = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)
    assert approximate_offset_hours(noon, kolkata) == 5

    # 20:30 UTC is 02:00 in Kolkata, so the hour difference rounds up
    evening = datetime(2026, 1, 15, 20, 30, tzinfo=UTC)
    assert approximate_offset_hours(evening, kolkata) == 6


def test_offset_wraps_beyond_twelve_hours():
    """Test zones past UTC+12 fold into [-12, 12]."""
    kiritimati = timezone(timedelta(hours=14))
    moment = datetime(2026, 1, 15, 20, 30, tzinfo=UTC)
    assert approximate_offset_hours(moment, kiritimati) == -10


def test_offset_follows_daylight_saving():
    """Test the offset is computed at the clock's instant."""
    new_york = ZoneInfo("America/New_York")
    assert approximate_offset_hours(datetime(2026, 1, 15, 12, tzinfo=UTC), new_york) == -5
    assert approximate_offset_hours(datetime(2026, 7, 15, 12, tzinfo=UTC), new_york) == -4
