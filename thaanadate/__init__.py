"""
thaanadate: format dates with Dhivehi calendar names.

Provides a counterpart to PHP's date() with:
- Dhivehi weekday names and transliterated month names
- Dhivehi ante/post meridiem markers
- Standard rendering for every other date() directive
- ASCII-Thaana and Unicode Thaana vocabularies

Usage:
    from thaanadate import format_date, ThaanaDateFormatter

    # Using the global formatter (zone and vocabulary from configuration)
    print(format_date("l, j F Y", 1700000000))

    # Explicit collaborators
    formatter = ThaanaDateFormatter("dv", CalendarResolver("Indian/Maldives"))
    print(formatter.format("D j M Y, g:i a", 1700000000))

Vocabularies:
    - dv-ascii: Dhivehi in ASCII-Thaana (default)
    - dv: Dhivehi in Unicode Thaana
"""

from thaanadate.config import FormatterConfig
from thaanadate.detector import detect_host_timezone
from thaanadate.formatter import (
    ThaanaDateFormatter,
    coerce_timestamp,
    format_date,
    get_formatter,
    reset_formatter,
)
from thaanadate.resolver import CalendarBreakdown, CalendarResolver
from thaanadate.vocabulary import (
    DEFAULT_VOCABULARY,
    SUPPORTED_VOCABULARIES,
    Vocabulary,
    VocabularyError,
    get_supported_vocabularies,
    get_vocabulary,
    load_catalog,
)

__all__ = [
    # Formatting
    "format_date",
    "get_formatter",
    "reset_formatter",
    "ThaanaDateFormatter",
    "coerce_timestamp",
    # Calendar
    "CalendarResolver",
    "CalendarBreakdown",
    # Vocabulary
    "Vocabulary",
    "VocabularyError",
    "get_vocabulary",
    "get_supported_vocabularies",
    "load_catalog",
    "SUPPORTED_VOCABULARIES",
    "DEFAULT_VOCABULARY",
    # Configuration
    "FormatterConfig",
    # Detection
    "detect_host_timezone",
]
