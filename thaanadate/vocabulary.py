"""
Calendar vocabulary catalogs for thaanadate.

Provides the three lookup tables used when rendering dates:
- Month names (1-12)
- Weekday names (0 = Sunday through 6 = Saturday)
- Meridiem markers ("am" / "pm")

Catalogs are YAML files in the ``locales`` directory next to this module.
Each catalog is validated when loaded and cached for the rest of the
process; the tables are exposed as read-only mappings.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml

logger = logging.getLogger(__name__)

# Supported catalogs with their display names
SUPPORTED_VOCABULARIES: dict[str, dict[str, str]] = {
    "dv-ascii": {"name": "Dhivehi (ASCII-Thaana)", "script": "ascii"},
    "dv": {"name": "Dhivehi (Thaana)", "script": "thaana"},
}

DEFAULT_VOCABULARY = "dv-ascii"

MONTH_NUMBERS = range(1, 13)
WEEKDAY_NUMBERS = range(0, 7)
MERIDIEM_KEYS = ("am", "pm")

_LOCALES_DIR = Path(__file__).parent / "locales"


class VocabularyError(ValueError):
    """Raised when a vocabulary catalog is unknown or incomplete."""


class Vocabulary:
    """
    Immutable month, weekday and meridiem tables for one catalog.

    Attributes:
        name: Catalog name (e.g. 'dv-ascii')
        months: Month number (1-12) to month name
        weekdays: Weekday index (0 = Sunday) to weekday name
        meridiem: 'am' / 'pm' to the half-of-day marker
    """

    __slots__ = ("name", "months", "weekdays", "meridiem")

    def __init__(
        self,
        name: str,
        months: Mapping[int, str],
        weekdays: Mapping[int, str],
        meridiem: Mapping[str, str],
    ) -> None:
        self.name = name
        self.months = MappingProxyType(
            _validate_table(name, "months", months, MONTH_NUMBERS)
        )
        self.weekdays = MappingProxyType(
            _validate_table(name, "weekdays", weekdays, WEEKDAY_NUMBERS)
        )
        self.meridiem = MappingProxyType(
            _validate_table(name, "meridiem", meridiem, MERIDIEM_KEYS)
        )

    def month_name(self, month: int) -> str:
        """Month name for a month number (1-12)."""
        return self.months[month]

    def weekday_name(self, weekday: int) -> str:
        """Weekday name for a weekday index (0 = Sunday)."""
        return self.weekdays[weekday]

    def meridiem_for_hour(self, hour: int) -> str:
        """Ante meridiem marker before noon, post meridiem from noon on."""
        return self.meridiem["am"] if hour < 12 else self.meridiem["pm"]

    def __repr__(self) -> str:
        return f"Vocabulary(name={self.name!r})"


def _validate_table(
    catalog: str, table: str, data: Any, expected_keys: Any
) -> dict[Any, str]:
    """
    Check a table covers exactly the expected keys with non-empty strings.

    Args:
        catalog: Catalog name, used in error messages
        table: Table name within the catalog
        data: Table contents as read from the catalog
        expected_keys: Keys the table must define

    Returns:
        A plain dict copy of the table

    Raises:
        VocabularyError: If the table is not a mapping, has missing or
            extra keys, or has a non-string or empty value
    """
    if not isinstance(data, Mapping):
        raise VocabularyError(
            f"Catalog '{catalog}': '{table}' must be a mapping, got {type(data).__name__}"
        )

    expected = set(expected_keys)
    actual = set(data.keys())
    missing = expected - actual
    extra = actual - expected
    if missing or extra:
        raise VocabularyError(
            f"Catalog '{catalog}': '{table}' has missing keys {sorted(missing, key=str)} "
            f"and unexpected keys {sorted(extra, key=str)}"
        )

    for key, value in data.items():
        if not isinstance(value, str) or not value:
            raise VocabularyError(
                f"Catalog '{catalog}': '{table}' entry {key!r} must be a non-empty string"
            )

    return dict(data)


def load_catalog(name: str, locales_dir: Path | None = None) -> Vocabulary:
    """
    Load and validate a vocabulary catalog from its YAML file.

    Args:
        name: Catalog name (file stem in the locales directory)
        locales_dir: Directory holding the catalogs, defaults to the bundled one

    Returns:
        The validated Vocabulary

    Raises:
        VocabularyError: If the catalog is missing, unreadable or incomplete
    """
    catalog_path = (locales_dir or _LOCALES_DIR) / f"{name}.yaml"

    try:
        with open(catalog_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise VocabularyError(f"Catalog '{name}' not found at {catalog_path}") from e
    except (yaml.YAMLError, OSError) as e:
        raise VocabularyError(f"Could not read catalog '{name}': {e}") from e

    if not isinstance(data, dict):
        raise VocabularyError(f"Catalog '{name}' must contain a mapping")

    vocabulary = Vocabulary(
        name=name,
        months=data.get("months"),
        weekdays=data.get("weekdays"),
        meridiem=data.get("meridiem"),
    )
    logger.debug(f"Loaded vocabulary catalog '{name}' from {catalog_path}")
    return vocabulary


# Loaded catalogs, one per name for the lifetime of the process
_catalogs: dict[str, Vocabulary] = {}


def get_vocabulary(name: str = DEFAULT_VOCABULARY) -> Vocabulary:
    """
    Get a bundled vocabulary catalog, loading it on first use.

    Args:
        name: Catalog name

    Returns:
        The cached Vocabulary

    Raises:
        VocabularyError: If the name is not a supported catalog
    """
    if name not in SUPPORTED_VOCABULARIES:
        raise VocabularyError(
            f"Unsupported vocabulary: {name}. "
            f"Supported: {', '.join(SUPPORTED_VOCABULARIES.keys())}"
        )
    if name not in _catalogs:
        _catalogs[name] = load_catalog(name)
    return _catalogs[name]


def get_supported_vocabularies() -> dict[str, dict[str, str]]:
    """
    Get all supported catalogs.

    Returns:
        Dictionary mapping catalog names to their info.
    """
    return SUPPORTED_VOCABULARIES.copy()
