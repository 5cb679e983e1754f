"""Time and timezone providers used by the tools.

Tools never read the system clock or the zone database directly; they go
through a ``Clock`` so tests can pin the instant and supply their own zones.
"""

import abc
from datetime import UTC, datetime, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from meridian.exceptions import UnknownTimezoneError


class Clock(abc.ABC):
    """Abstract source of the current instant and of timezones."""

    @abc.abstractmethod
    def now(self) -> datetime:
        """Return the current instant as an aware UTC datetime."""
        pass

    @abc.abstractmethod
    def zone(self, name: str) -> tzinfo:
        """Resolve an IANA timezone name.

        Args:
            name: Zone name such as "America/New_York"

        Returns:
            The tzinfo for the zone

        Raises:
            UnknownTimezoneError: If the name cannot be resolved
        """
        pass

    @abc.abstractmethod
    def local_zone(self) -> tzinfo:
        """Return the host's local timezone."""
        pass


class SystemClock(Clock):
    """Clock backed by the system time and the IANA zone database."""

    def now(self) -> datetime:
        return datetime.now(UTC)

    def zone(self, name: str) -> tzinfo:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError, OSError) as e:
            # ValueError: malformed keys such as absolute paths.
            # OSError: region directories ("America") and overlong names.
            raise UnknownTimezoneError(name) from e

    def local_zone(self) -> tzinfo:
        return datetime.now(UTC).astimezone().tzinfo or UTC


class FixedClock(Clock):
    """Clock frozen at one instant with a synthetic zone table.

    Example:
        clock = FixedClock(
            datetime(2026, 1, 15, 12, 0, tzinfo=UTC),
            zones={"Asia/Tokyo": timezone(timedelta(hours=9))},
        )
    """

    def __init__(
        self,
        instant: datetime,
        zones: dict[str, tzinfo] | None = None,
        local_zone: tzinfo = UTC,
    ):
        if instant.tzinfo is None:
            raise ValueError("FixedClock requires an aware datetime")
        self._instant = instant.astimezone(UTC)
        self._zones = dict(zones or {})
        self._local_zone = local_zone

    def now(self) -> datetime:
        return self._instant

    def zone(self, name: str) -> tzinfo:
        if name not in self._zones:
            raise UnknownTimezoneError(name)
        return self._zones[name]

    def local_zone(self) -> tzinfo:
        return self._local_zone
