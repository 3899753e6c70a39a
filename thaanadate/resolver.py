"""
Calendar resolution for thaanadate.

Turns a Unix timestamp into its calendar fields and renders the standard
(English, non-localized) single-character date directives understood by
PHP's ``date()``:

- Day:   d D j l N S w z
- Week:  W
- Month: F m M n t
- Year:  L o Y y
- Time:  a A B g G h H i s u v
- Zone:  e I O P p T Z
- Full:  c r U

Characters outside this set are returned unchanged.
"""

from __future__ import annotations

import calendar
from datetime import datetime, timedelta, tzinfo
from typing import Callable, NamedTuple

import pytz

# =============================================================================
# English names
# =============================================================================
# calendar.day_name and calendar.month_name follow the process locale

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600
# Swatch Internet Time is measured from Biel Mean Time (UTC+1)
BMT_OFFSET = 3600


class CalendarBreakdown(NamedTuple):
    """
    Calendar fields of a timestamp in the resolver's zone.

    weekday follows the 0 = Sunday convention; yday is 0-based.
    """

    timestamp: int
    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    weekday: int
    yday: int


def _ordinal_suffix(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def _utc_offset(dt: datetime) -> timedelta:
    return dt.utcoffset() or timedelta(0)


def _format_offset(dt: datetime, separator: str = "") -> str:
    seconds = int(_utc_offset(dt).total_seconds())
    sign = "-" if seconds < 0 else "+"
    hours, remainder = divmod(abs(seconds), SECONDS_PER_HOUR)
    return f"{sign}{hours:02d}{separator}{remainder // 60:02d}"


def _twelve_hour(dt: datetime) -> int:
    return dt.hour % 12 or 12


def _swatch_beat(timestamp: int) -> str:
    beat = ((timestamp + BMT_OFFSET) % SECONDS_PER_DAY) * 10 // 864
    return f"{beat:03d}"


def _iso_8601(dt: datetime, timestamp: int) -> str:
    return (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}T"
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}{_format_offset(dt, ':')}"
    )


def _rfc_2822(dt: datetime, timestamp: int) -> str:
    return (
        f"{DAY_NAMES[(dt.weekday() + 1) % 7][:3]}, {dt.day:02d} "
        f"{MONTH_NAMES[dt.month - 1][:3]} {dt.year:04d} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d} {_format_offset(dt)}"
    )


def _zone_name(dt: datetime) -> str:
    return getattr(dt.tzinfo, "zone", None) or dt.tzname() or "UTC"


FieldRenderer = Callable[[datetime, int], str]

_FIELD_RENDERERS: dict[str, FieldRenderer] = {
    # Day
    "d": lambda dt, ts: f"{dt.day:02d}",
    "D": lambda dt, ts: DAY_NAMES[(dt.weekday() + 1) % 7][:3],
    "j": lambda dt, ts: str(dt.day),
    "l": lambda dt, ts: DAY_NAMES[(dt.weekday() + 1) % 7],
    "N": lambda dt, ts: str(dt.isoweekday()),
    "S": lambda dt, ts: _ordinal_suffix(dt.day),
    "w": lambda dt, ts: str((dt.weekday() + 1) % 7),
    "z": lambda dt, ts: str(dt.timetuple().tm_yday - 1),
    # Week
    "W": lambda dt, ts: f"{dt.isocalendar()[1]:02d}",
    # Month
    "F": lambda dt, ts: MONTH_NAMES[dt.month - 1],
    "m": lambda dt, ts: f"{dt.month:02d}",
    "M": lambda dt, ts: MONTH_NAMES[dt.month - 1][:3],
    "n": lambda dt, ts: str(dt.month),
    "t": lambda dt, ts: str(calendar.monthrange(dt.year, dt.month)[1]),
    # Year
    "L": lambda dt, ts: "1" if calendar.isleap(dt.year) else "0",
    "o": lambda dt, ts: str(dt.isocalendar()[0]),
    "Y": lambda dt, ts: f"{dt.year:04d}",
    "y": lambda dt, ts: f"{dt.year % 100:02d}",
    # Time
    "a": lambda dt, ts: "am" if dt.hour < 12 else "pm",
    "A": lambda dt, ts: "AM" if dt.hour < 12 else "PM",
    "B": lambda dt, ts: _swatch_beat(ts),
    "g": lambda dt, ts: str(_twelve_hour(dt)),
    "G": lambda dt, ts: str(dt.hour),
    "h": lambda dt, ts: f"{_twelve_hour(dt):02d}",
    "H": lambda dt, ts: f"{dt.hour:02d}",
    "i": lambda dt, ts: f"{dt.minute:02d}",
    "s": lambda dt, ts: f"{dt.second:02d}",
    # Integer timestamps carry no sub-second part
    "u": lambda dt, ts: "000000",
    "v": lambda dt, ts: "000",
    # Zone
    "e": lambda dt, ts: _zone_name(dt),
    "I": lambda dt, ts: "1" if dt.dst() else "0",
    "O": lambda dt, ts: _format_offset(dt),
    "P": lambda dt, ts: _format_offset(dt, ":"),
    "p": lambda dt, ts: "Z" if not _utc_offset(dt) else _format_offset(dt, ":"),
    "T": lambda dt, ts: dt.tzname() or _format_offset(dt),
    "Z": lambda dt, ts: str(int(_utc_offset(dt).total_seconds())),
    # Full date/time
    "c": _iso_8601,
    "r": _rfc_2822,
    "U": lambda dt, ts: str(ts),
}

STANDARD_FIELDS = frozenset(_FIELD_RENDERERS)


class CalendarResolver:
    """
    Resolves timestamps into calendar fields in a fixed time zone.

    The zone is fixed at construction; the resolver never converts between
    zones on its own.
    """

    def __init__(self, timezone: str | tzinfo = "UTC"):
        """
        Initialize the resolver.

        Args:
            timezone: pytz zone or zone name (e.g. 'Indian/Maldives')

        Raises:
            ValueError: If the zone name is unknown
        """
        if isinstance(timezone, str):
            try:
                timezone = pytz.timezone(timezone)
            except pytz.exceptions.UnknownTimeZoneError as e:
                raise ValueError(f"Unknown time zone: {timezone}") from e
        self._timezone = timezone

    @property
    def timezone(self) -> tzinfo:
        """Get the resolver's zone."""
        return self._timezone

    def to_datetime(self, timestamp: int) -> datetime:
        """
        Convert a timestamp to an aware datetime in the resolver's zone.

        Raises:
            OverflowError, OSError, ValueError: If the timestamp is outside
                the platform's representable range
        """
        return datetime.fromtimestamp(timestamp, self._timezone)

    def breakdown(self, timestamp: int) -> CalendarBreakdown:
        """
        Split a timestamp into its calendar fields.

        Args:
            timestamp: Unix timestamp in seconds

        Returns:
            The CalendarBreakdown for that instant
        """
        dt = self.to_datetime(timestamp)
        return CalendarBreakdown(
            timestamp=timestamp,
            year=dt.year,
            month=dt.month,
            day=dt.day,
            hour=dt.hour,
            minute=dt.minute,
            second=dt.second,
            weekday=(dt.weekday() + 1) % 7,
            yday=dt.timetuple().tm_yday - 1,
        )

    def render_standard_field(self, char: str, timestamp: int) -> str:
        """
        Render one date directive with standard English semantics.

        Args:
            char: A single directive character
            timestamp: Unix timestamp in seconds

        Returns:
            The rendered field, or the character itself when it is not
            a directive
        """
        renderer = _FIELD_RENDERERS.get(char)
        if renderer is None:
            return char
        return renderer(self.to_datetime(timestamp), timestamp)
