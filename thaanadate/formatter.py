"""
Dhivehi date formatting for thaanadate.

A drop-in counterpart to PHP's ``date()``: the format string uses the same
directive characters, but weekday names, month names and the meridiem
marker come from a Dhivehi vocabulary catalog. Everything else is
rendered with standard semantics by a calendar resolver.

Usage:
    from thaanadate import format_date

    format_date("l, j F Y", 1700000000)
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Protocol

from thaanadate.resolver import CalendarBreakdown, CalendarResolver
from thaanadate.vocabulary import DEFAULT_VOCABULARY, Vocabulary, get_vocabulary

logger = logging.getLogger(__name__)

# Directive characters answered from the vocabulary
WEEKDAY_TOKENS = frozenset("Dl")
MONTH_TOKENS = frozenset("FM")
MERIDIEM_TOKENS = frozenset("aA")
# Dhivehi has no ordinal suffix, so this directive renders nothing
ORDINAL_SUFFIX_TOKEN = "S"
ESCAPE_CHAR = "\\"

# Numeric strings in the form PHP's is_numeric() accepts
_NUMERIC_STRING = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


class CalendarCollaborator(Protocol):
    """What the formatter needs from a calendar resolver."""

    def breakdown(self, timestamp: int) -> CalendarBreakdown: ...

    def render_standard_field(self, char: str, timestamp: int) -> str: ...


def coerce_timestamp(value: Any) -> int | None:
    """
    Turn a timestamp argument into whole seconds.

    Accepts ints, finite floats and numeric strings. Zero, empty values,
    booleans and anything non-numeric are rejected.

    Args:
        value: Candidate timestamp

    Returns:
        The timestamp as an int, or None if it is not usable
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, int):
        return value or None

    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value) or None

    if isinstance(value, str):
        if not _NUMERIC_STRING.match(value):
            return None
        text = value.strip()
        try:
            seconds = int(text)
        except ValueError:
            number = float(text)
            if not math.isfinite(number):
                return None
            seconds = int(number)
        return seconds or None

    return None


class ThaanaDateFormatter:
    """
    Formats timestamps with Dhivehi calendar names.

    The vocabulary and the resolver are fixed at construction, so a
    formatter can be shared freely between threads.
    """

    def __init__(
        self,
        vocabulary: Vocabulary | str = DEFAULT_VOCABULARY,
        resolver: CalendarCollaborator | None = None,
    ):
        """
        Initialize the formatter.

        Args:
            vocabulary: Vocabulary or bundled catalog name (defaults to 'dv-ascii')
            resolver: Calendar collaborator, defaults to a UTC CalendarResolver

        Raises:
            VocabularyError: If a catalog name is not supported
        """
        if isinstance(vocabulary, str):
            vocabulary = get_vocabulary(vocabulary)
        self._vocabulary = vocabulary
        self._resolver = resolver if resolver is not None else CalendarResolver()

    @property
    def vocabulary(self) -> Vocabulary:
        """Get the vocabulary in use."""
        return self._vocabulary

    @property
    def resolver(self) -> CalendarCollaborator:
        """Get the calendar collaborator in use."""
        return self._resolver

    def format(self, format_string: str, timestamp: Any) -> str:
        """
        Format a timestamp according to a date() style format string.

        Directives:
            D, l   weekday name
            F, M   month name
            a, A   meridiem marker
            S      nothing
            \\X    the literal character X
            other  standard rendering from the resolver

        Args:
            format_string: Format string
            timestamp: Unix timestamp in seconds

        Returns:
            The formatted date, or an empty string if the timestamp is
            missing, zero or not numeric
        """
        seconds = coerce_timestamp(timestamp)
        if seconds is None:
            logger.debug(f"Not formatting invalid timestamp: {timestamp!r}")
            return ""

        try:
            breakdown = self._resolver.breakdown(seconds)
        except (OverflowError, OSError, ValueError) as e:
            logger.debug(f"Timestamp {seconds} is out of range: {e}")
            return ""

        parts: list[str] = []
        length = len(format_string)
        i = 0
        while i < length:
            char = format_string[i]

            if char in WEEKDAY_TOKENS:
                parts.append(self._vocabulary.weekday_name(breakdown.weekday))
            elif char == ORDINAL_SUFFIX_TOKEN:
                pass
            elif char in MONTH_TOKENS:
                parts.append(self._vocabulary.month_name(breakdown.month))
            elif char in MERIDIEM_TOKENS:
                parts.append(self._vocabulary.meridiem_for_hour(breakdown.hour))
            elif char == " ":
                parts.append(" ")
            elif char == ESCAPE_CHAR:
                # A trailing escape has nothing to escape
                i += 1
                if i < length:
                    parts.append(format_string[i])
            else:
                parts.append(self._resolver.render_standard_field(char, seconds))

            i += 1

        return "".join(parts)


# Global formatter instance
_formatter: ThaanaDateFormatter | None = None


def get_formatter() -> ThaanaDateFormatter:
    """
    Get or create the global formatter instance.

    The zone and vocabulary are read from FormatterConfig the first time
    this is called.

    Returns:
        The global ThaanaDateFormatter instance
    """
    global _formatter
    if _formatter is None:
        from thaanadate.config import FormatterConfig

        config = FormatterConfig()
        _formatter = ThaanaDateFormatter(
            vocabulary=config.get_vocabulary(),
            resolver=CalendarResolver(config.get_timezone()),
        )
    return _formatter


def format_date(format_string: str, timestamp: Any) -> str:
    """
    Format a timestamp using the global formatter (shorthand function).

    Args:
        format_string: date() style format string
        timestamp: Unix timestamp in seconds

    Returns:
        Formatted date in Dhivehi

    Examples:
        >>> format_date("j M Y", 1700000000)
        '14 novemcbwr 2023'
    """
    return get_formatter().format(format_string, timestamp)


def reset_formatter() -> None:
    """Reset the global formatter (mainly for testing)."""
    global _formatter
    _formatter = None
