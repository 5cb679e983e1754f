"""Time tools: current time formatting and timezone offset lookup."""

from datetime import UTC, datetime, tzinfo

from meridian.clock import Clock
from meridian.exceptions import ToolError, UnknownTimezoneError
from meridian.tools.models import GetCurrentTimeArgs, GetTimezoneOffsetArgs, ToolDescriptor
from meridian.utils.logging_utils import log_tool_call

GET_CURRENT_TIME = ToolDescriptor(
    name="get_current_time",
    description="Get the current date and time",
    input_schema={
        "type": "object",
        "properties": {
            "timezone": {
                "type": "string",
                "description": 'Timezone (e.g., "UTC", "America/New_York"). Defaults to system timezone.',
            },
            "format": {
                "type": "string",
                "description": 'Time format (e.g., "iso", "unix", "locale"). Defaults to "iso".',
                "enum": ["iso", "unix", "locale"],
            },
        },
    },
)

GET_TIMEZONE_OFFSET = ToolDescriptor(
    name="get_timezone_offset",
    description="Get the timezone offset for a specific timezone",
    input_schema={
        "type": "object",
        "properties": {
            "timezone": {
                "type": "string",
                "description": 'Timezone to get offset for (e.g., "America/New_York")',
            },
        },
        "required": ["timezone"],
    },
)


def format_iso_utc(moment: datetime) -> str:
    """Format as ISO-8601 UTC with milliseconds, e.g. 2026-10-19T08:15:30.123Z."""
    utc = moment.astimezone(UTC)
    return f"{utc:%Y-%m-%dT%H:%M:%S}.{utc.microsecond // 1000:03d}Z"


def format_iso_wall_clock(moment: datetime, zone: tzinfo) -> str:
    """Format the wall-clock time in ``zone`` as YYYY-MM-DDTHH:MM:SSZ.

    The trailing Z is kept for compatibility with existing consumers even
    though the value is local time in ``zone``, not UTC.
    """
    return f"{moment.astimezone(zone):%Y-%m-%dT%H:%M:%S}Z"


def format_locale(moment: datetime, zone: tzinfo) -> str:
    """Format in US English locale style, e.g. 10/19/2026, 4:15:30 AM.

    A plain ASCII space precedes AM/PM, where recent ICU data emits U+202F.
    """
    local = moment.astimezone(zone)
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{local.month}/{local.day}/{local.year}, {hour}:{local:%M:%S} {meridiem}"


def approximate_offset_hours(moment: datetime, zone: tzinfo) -> int:
    """Approximate the whole-hour UTC offset of ``zone`` at ``moment``.

    Compares the hour on the zone's wall clock with the UTC hour and folds the
    difference into [-12, 12]. Minutes are ignored, so zones such as
    Asia/Kolkata (+5:30) and Asia/Kathmandu (+5:45) report the truncated hour,
    and zones beyond +12 (Pacific/Kiritimati) wrap around.
    """
    offset = moment.astimezone(zone).hour - moment.astimezone(UTC).hour
    if offset > 12:
        offset -= 24
    if offset < -12:
        offset += 24
    return offset


@log_tool_call("get_current_time")
def get_current_time(args: GetCurrentTimeArgs, clock: Clock) -> str:
    """Render the current time in the requested format.

    An unknown timezone is not turned into a tool error here: the
    UnknownTimezoneError propagates to the caller.
    """
    now = clock.now()

    if args.format == "unix":
        result = str(int(now.timestamp()))
    elif args.format == "locale":
        zone = clock.zone(args.timezone) if args.timezone else clock.local_zone()
        result = format_locale(now, zone)
    elif args.timezone:
        result = format_iso_wall_clock(now, clock.zone(args.timezone))
    else:
        result = format_iso_utc(now)

    return f"Current time: {result}"


@log_tool_call("get_timezone_offset")
def get_timezone_offset(args: GetTimezoneOffsetArgs, clock: Clock) -> str:
    """Report the approximate whole-hour offset of a timezone from UTC."""
    try:
        zone = clock.zone(args.timezone)
    except UnknownTimezoneError as e:
        raise ToolError(f"Error: Invalid timezone: {args.timezone}") from e

    offset = approximate_offset_hours(clock.now(), zone)
    sign = "+" if offset >= 0 else ""
    return f"Timezone {args.timezone} offset: {sign}{offset} hours from UTC"
