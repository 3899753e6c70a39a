"""
Host time zone detection for thaanadate.

Detects the zone the host renders local dates in, from:
- TZ environment variable
- /etc/timezone
- /etc/localtime symlink target
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import pytz

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "UTC"

TIMEZONE_FILE = Path("/etc/timezone")
LOCALTIME_LINK = Path("/etc/localtime")

# Path component under which zoneinfo databases keep their zone files
ZONEINFO_MARKER = "zoneinfo/"


def is_valid_timezone(name: str | None) -> bool:
    """
    Check whether a zone name is known to pytz.

    Args:
        name: Zone name (e.g. 'Indian/Maldives')

    Returns:
        True if pytz can resolve the name
    """
    if not name:
        return False
    try:
        pytz.timezone(name)
    except pytz.exceptions.UnknownTimeZoneError:
        return False
    return True


def _parse_tz_variable(value: str) -> str | None:
    """
    Extract a zone name from a TZ value.

    Handles formats like:
    - Indian/Maldives
    - :Indian/Maldives (glibc "read from file" prefix)
    - /usr/share/zoneinfo/Indian/Maldives

    Args:
        value: Raw TZ value from the environment

    Returns:
        Zone name or None if it cannot be parsed
    """
    value = value.strip().lstrip(":")
    if not value:
        return None
    if ZONEINFO_MARKER in value:
        value = value.split(ZONEINFO_MARKER, 1)[1]
    return value


def _read_timezone_file(path: Path) -> str | None:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.debug(f"Could not read {path}: {e}")
        return None
    # Debian style: one zone name, possibly followed by comments
    for line in content.splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            return line
    return None


def _read_localtime_link(path: Path) -> str | None:
    try:
        target = os.readlink(path)
    except OSError as e:
        logger.debug(f"Could not resolve {path}: {e}")
        return None
    if ZONEINFO_MARKER not in target:
        return None
    return target.split(ZONEINFO_MARKER, 1)[1]


def detect_host_timezone() -> str:
    """
    Detect the host time zone.

    Checks, in priority order:
    1. TZ environment variable
    2. /etc/timezone
    3. /etc/localtime symlink

    The first valid zone name found is returned.

    Returns:
        Detected zone name, or 'UTC' as fallback

    Examples:
        With TZ=Indian/Maldives: returns 'Indian/Maldives'
        With TZ=:Europe/Berlin: returns 'Europe/Berlin'
    """
    candidates = [
        ("TZ", lambda: _parse_tz_variable(os.environ.get("TZ", ""))),
        (str(TIMEZONE_FILE), lambda: _read_timezone_file(TIMEZONE_FILE)),
        (str(LOCALTIME_LINK), lambda: _read_localtime_link(LOCALTIME_LINK)),
    ]

    for source, read in candidates:
        name = read()
        if not name:
            continue
        if is_valid_timezone(name):
            return name
        logger.debug(f"Ignoring unknown time zone {name!r} from {source}")

    # Default fallback
    return DEFAULT_TIMEZONE


def get_host_timezone_info() -> dict[str, str | None]:
    """
    Get detailed host zone information for debugging.

    Returns:
        Dictionary with the raw sources and the detected zone
    """
    return {
        "TZ": os.environ.get("TZ"),
        "timezone_file": _read_timezone_file(TIMEZONE_FILE),
        "localtime_link": _read_localtime_link(LOCALTIME_LINK),
        "detected_timezone": detect_host_timezone(),
    }
