"""
Formatter configuration for thaanadate.

Handles:
- Reading/writing preferences in ~/.thaanadate/preferences.yaml
- Environment variable overrides
- Validation of zone names and vocabulary catalogs
- Thread-safe file access
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Any

import yaml

from thaanadate.detector import DEFAULT_TIMEZONE, detect_host_timezone, is_valid_timezone
from thaanadate.vocabulary import DEFAULT_VOCABULARY, SUPPORTED_VOCABULARIES

# Get logger for this module
logger = logging.getLogger(__name__)

TIMEZONE_ENV = "THAANADATE_TIMEZONE"
VOCABULARY_ENV = "THAANADATE_VOCABULARY"


class FormatterConfig:
    """
    Resolves the settings the global formatter is built from.

    Preferences are stored in ~/.thaanadate/preferences.yaml.

    Zone resolution order:
    1. THAANADATE_TIMEZONE environment variable
    2. 'timezone' in the preferences file
    3. Host-detected zone
    4. Default (UTC)

    Vocabulary resolution order:
    1. THAANADATE_VOCABULARY environment variable
    2. 'vocabulary' in the preferences file
    3. Default (dv-ascii)
    """

    def __init__(self, config_dir: Path | None = None) -> None:
        """
        Initialize the configuration manager.

        Args:
            config_dir: Directory holding preferences.yaml, defaults to ~/.thaanadate
        """
        self.config_dir = config_dir or Path.home() / ".thaanadate"
        self.preferences_file = self.config_dir / "preferences.yaml"
        self._thread_lock = threading.Lock()

    def _load_preferences(self) -> dict[str, Any]:
        """
        Load preferences from file.

        Returns:
            Dictionary of preferences, or empty dict on failure

        Handles:
            - Missing file (returns empty dict)
            - Malformed YAML (returns empty dict, logs warning)
            - Empty file (returns empty dict)
            - Invalid types (returns empty dict if not a dict)
        """
        try:
            with self._thread_lock:
                if not self.preferences_file.exists():
                    return {}

                with open(self.preferences_file, encoding="utf-8") as f:
                    data = yaml.safe_load(f)

        except yaml.YAMLError as e:
            logger.warning(f"Malformed YAML in preferences file: {e}. Using defaults.")
            return {}
        except OSError as e:
            logger.debug(f"Could not read preferences file: {e}")
            return {}

        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning(
                f"Preferences file contains invalid type: {type(data).__name__}, "
                "expected dict. Using defaults."
            )
            return {}
        return data

    def _save_preferences(self, preferences: dict[str, Any]) -> None:
        """
        Save preferences to file.

        Args:
            preferences: Dictionary of preferences to save

        Raises:
            RuntimeError: If preferences cannot be saved
        """
        try:
            with self._thread_lock:
                self.config_dir.mkdir(mode=0o700, parents=True, exist_ok=True)

                # Write to a temp file first, then rename over the original
                temp_file = self.preferences_file.with_suffix(".yaml.tmp")
                with open(temp_file, "w", encoding="utf-8") as f:
                    yaml.safe_dump(preferences, f, default_flow_style=False, allow_unicode=True)

                temp_file.replace(self.preferences_file)

        except OSError as e:
            raise RuntimeError(f"Failed to save preferences: {e}") from e

    def _saved_value(self, preferences: dict[str, Any], key: str) -> str:
        value = preferences.get(key, "")
        return value.strip() if isinstance(value, str) else ""

    def _resolve_timezone(self, preferences: dict[str, Any]) -> tuple[str, str]:
        env_tz = os.environ.get(TIMEZONE_ENV, "").strip()
        if env_tz:
            if is_valid_timezone(env_tz):
                return env_tz, "environment"
            logger.warning(f"Ignoring unknown time zone in {TIMEZONE_ENV}: {env_tz}")

        saved_tz = self._saved_value(preferences, "timezone")
        if saved_tz:
            if is_valid_timezone(saved_tz):
                return saved_tz, "config"
            logger.warning(f"Ignoring unknown time zone in preferences: {saved_tz}")

        detected_tz = detect_host_timezone()
        if detected_tz != DEFAULT_TIMEZONE:
            return detected_tz, "auto-detected"

        return DEFAULT_TIMEZONE, "default"

    def _resolve_vocabulary(self, preferences: dict[str, Any]) -> tuple[str, str]:
        env_vocab = os.environ.get(VOCABULARY_ENV, "").strip().lower()
        if env_vocab:
            if env_vocab in SUPPORTED_VOCABULARIES:
                return env_vocab, "environment"
            logger.warning(f"Ignoring unsupported vocabulary in {VOCABULARY_ENV}: {env_vocab}")

        saved_vocab = self._saved_value(preferences, "vocabulary").lower()
        if saved_vocab:
            if saved_vocab in SUPPORTED_VOCABULARIES:
                return saved_vocab, "config"
            logger.warning(f"Ignoring unsupported vocabulary in preferences: {saved_vocab}")

        return DEFAULT_VOCABULARY, "default"

    def get_timezone(self) -> str:
        """
        Get the effective zone name.

        Returns:
            Zone name
        """
        return self._resolve_timezone(self._load_preferences())[0]

    def get_vocabulary(self) -> str:
        """
        Get the effective vocabulary catalog name.

        Returns:
            Catalog name
        """
        return self._resolve_vocabulary(self._load_preferences())[0]

    def set_timezone(self, timezone: str) -> None:
        """
        Set the zone preference.

        Args:
            timezone: Zone name to save

        Raises:
            ValueError: If the zone name is unknown
        """
        if not is_valid_timezone(timezone):
            raise ValueError(f"Unknown time zone: {timezone}")

        preferences = self._load_preferences()
        preferences["timezone"] = timezone
        self._save_preferences(preferences)
        logger.debug(f"Saved time zone preference: {timezone}")

    def set_vocabulary(self, vocabulary: str) -> None:
        """
        Set the vocabulary preference.

        Args:
            vocabulary: Catalog name to save

        Raises:
            ValueError: If the catalog is not supported
        """
        vocabulary = vocabulary.lower()
        if vocabulary not in SUPPORTED_VOCABULARIES:
            raise ValueError(
                f"Unsupported vocabulary: {vocabulary}. "
                f"Supported: {', '.join(sorted(SUPPORTED_VOCABULARIES))}"
            )

        preferences = self._load_preferences()
        preferences["vocabulary"] = vocabulary
        self._save_preferences(preferences)
        logger.debug(f"Saved vocabulary preference: {vocabulary}")

    def clear(self) -> None:
        """
        Remove saved zone and vocabulary preferences.
        """
        preferences = self._load_preferences()
        changed = False
        for key in ("timezone", "vocabulary"):
            if key in preferences:
                del preferences[key]
                changed = True
        if changed:
            self._save_preferences(preferences)

    def get_config_info(self) -> dict[str, Any]:
        """
        Get the effective settings and where each came from.

        Returns:
            Dictionary with the effective values and their sources
        """
        preferences = self._load_preferences()
        timezone, timezone_source = self._resolve_timezone(preferences)
        vocabulary, vocabulary_source = self._resolve_vocabulary(preferences)

        return {
            "timezone": timezone,
            "timezone_source": timezone_source,
            "vocabulary": vocabulary,
            "vocabulary_source": vocabulary_source,
            "vocabulary_name": SUPPORTED_VOCABULARIES[vocabulary]["name"],
            "preferences_file": str(self.preferences_file),
        }
