"""
Tests for the calendar resolver.

Tests cover:
- Calendar breakdowns
- Standard date() directives in UTC and in other zones
- Unknown zones and non-directive characters
"""

import unittest

import pytest

from thaanadate.resolver import CalendarResolver, _ordinal_suffix

# 2023-11-14 22:13:20 UTC, a Tuesday
TUESDAY_NOVEMBER = 1700000000
# 2024-02-15 00:00:00 UTC
LEAP_FEBRUARY = 1707955200
# 2024-07-01 12:00:00 UTC
NEW_YORK_SUMMER = 1719835200


class TestCalendarBreakdown(unittest.TestCase):
    """Tests for CalendarResolver.breakdown."""

    def test_utc_breakdown(self):
        """Test the fields of a known UTC instant."""
        resolver = CalendarResolver()

        breakdown = resolver.breakdown(TUESDAY_NOVEMBER)

        self.assertEqual(breakdown.timestamp, TUESDAY_NOVEMBER)
        self.assertEqual(breakdown.year, 2023)
        self.assertEqual(breakdown.month, 11)
        self.assertEqual(breakdown.day, 14)
        self.assertEqual(breakdown.hour, 22)
        self.assertEqual(breakdown.minute, 13)
        self.assertEqual(breakdown.second, 20)
        self.assertEqual(breakdown.weekday, 2)
        self.assertEqual(breakdown.yday, 317)

    def test_sunday_is_zero(self):
        """Test the 0 = Sunday weekday convention."""
        resolver = CalendarResolver()

        # 2024-03-10 09:30:00 UTC
        self.assertEqual(resolver.breakdown(1710063000).weekday, 0)
        # 2024-03-16 00:00:00 UTC, a Saturday
        self.assertEqual(resolver.breakdown(1710547200).weekday, 6)

    def test_breakdown_in_zone(self):
        """Test that the breakdown follows the resolver's zone."""
        resolver = CalendarResolver("Indian/Maldives")

        breakdown = resolver.breakdown(TUESDAY_NOVEMBER)

        self.assertEqual(breakdown.day, 15)
        self.assertEqual(breakdown.hour, 3)
        self.assertEqual(breakdown.weekday, 3)

    def test_breakdown_is_immutable(self):
        """Test that breakdown fields cannot be reassigned."""
        breakdown = CalendarResolver().breakdown(TUESDAY_NOVEMBER)

        with self.assertRaises(AttributeError):
            breakdown.month = 1

    def test_unknown_zone_raises(self):
        """Test that an unknown zone name raises ValueError."""
        with self.assertRaises(ValueError) as context:
            CalendarResolver("Mars/Olympus_Mons")

        self.assertIn("Unknown time zone", str(context.exception))

    def test_accepts_zone_object(self):
        """Test constructing with a pytz zone."""
        import pytz

        zone = pytz.timezone("Asia/Tokyo")
        resolver = CalendarResolver(zone)

        self.assertIs(resolver.timezone, zone)
        self.assertEqual(resolver.breakdown(TUESDAY_NOVEMBER).hour, 7)


@pytest.mark.parametrize(
    "char, expected",
    [
        ("d", "14"),
        ("D", "Tue"),
        ("j", "14"),
        ("l", "Tuesday"),
        ("N", "2"),
        ("S", "th"),
        ("w", "2"),
        ("z", "317"),
        ("W", "46"),
        ("F", "November"),
        ("m", "11"),
        ("M", "Nov"),
        ("n", "11"),
        ("t", "30"),
        ("L", "0"),
        ("o", "2023"),
        ("Y", "2023"),
        ("y", "23"),
        ("a", "pm"),
        ("A", "PM"),
        ("B", "967"),
        ("g", "10"),
        ("G", "22"),
        ("h", "10"),
        ("H", "22"),
        ("i", "13"),
        ("s", "20"),
        ("u", "000000"),
        ("v", "000"),
        ("e", "UTC"),
        ("I", "0"),
        ("O", "+0000"),
        ("P", "+00:00"),
        ("p", "Z"),
        ("T", "UTC"),
        ("Z", "0"),
        ("c", "2023-11-14T22:13:20+00:00"),
        ("r", "Tue, 14 Nov 2023 22:13:20 +0000"),
        ("U", "1700000000"),
    ],
)
def test_standard_field_utc(char, expected):
    """Test every standard directive for a known UTC instant."""
    resolver = CalendarResolver()

    assert resolver.render_standard_field(char, TUESDAY_NOVEMBER) == expected


@pytest.mark.parametrize("char", ["x", "-", ":", "/", ",", "9", "ހ"])
def test_non_directive_returned_unchanged(char):
    """Test that characters outside the directive set are literal."""
    assert CalendarResolver().render_standard_field(char, TUESDAY_NOVEMBER) == char


class TestStandardFieldsInZones(unittest.TestCase):
    """Tests for zone-dependent directives."""

    def test_fixed_offset_zone(self):
        """Test offsets for a zone without daylight saving."""
        resolver = CalendarResolver("Indian/Maldives")

        self.assertEqual(resolver.render_standard_field("e", TUESDAY_NOVEMBER), "Indian/Maldives")
        self.assertEqual(resolver.render_standard_field("O", TUESDAY_NOVEMBER), "+0500")
        self.assertEqual(resolver.render_standard_field("P", TUESDAY_NOVEMBER), "+05:00")
        self.assertEqual(resolver.render_standard_field("p", TUESDAY_NOVEMBER), "+05:00")
        self.assertEqual(resolver.render_standard_field("Z", TUESDAY_NOVEMBER), "18000")
        self.assertEqual(resolver.render_standard_field("I", TUESDAY_NOVEMBER), "0")
        self.assertEqual(
            resolver.render_standard_field("c", TUESDAY_NOVEMBER), "2023-11-15T03:13:20+05:00"
        )

    def test_daylight_saving_zone(self):
        """Test a negative offset during daylight saving."""
        resolver = CalendarResolver("America/New_York")

        self.assertEqual(resolver.render_standard_field("I", NEW_YORK_SUMMER), "1")
        self.assertEqual(resolver.render_standard_field("O", NEW_YORK_SUMMER), "-0400")
        self.assertEqual(resolver.render_standard_field("T", NEW_YORK_SUMMER), "EDT")
        self.assertEqual(resolver.render_standard_field("G", NEW_YORK_SUMMER), "8")
        self.assertEqual(
            resolver.render_standard_field("r", NEW_YORK_SUMMER),
            "Mon, 01 Jul 2024 08:00:00 -0400",
        )

    def test_swatch_beat_uses_bmt(self):
        """Test that Internet time ignores the resolver's zone."""
        utc = CalendarResolver()
        maldives = CalendarResolver("Indian/Maldives")

        self.assertEqual(
            utc.render_standard_field("B", TUESDAY_NOVEMBER),
            maldives.render_standard_field("B", TUESDAY_NOVEMBER),
        )

    def test_leap_year_february(self):
        """Test leap year and month length directives."""
        resolver = CalendarResolver()

        self.assertEqual(resolver.render_standard_field("L", LEAP_FEBRUARY), "1")
        self.assertEqual(resolver.render_standard_field("t", LEAP_FEBRUARY), "29")

    def test_midnight_and_noon_twelve_hour_clock(self):
        """Test that 00:00 and 12:00 render as 12 on the 12-hour clock."""
        resolver = CalendarResolver()

        self.assertEqual(resolver.render_standard_field("g", LEAP_FEBRUARY), "12")
        self.assertEqual(resolver.render_standard_field("h", LEAP_FEBRUARY + 12 * 3600), "12")
        self.assertEqual(resolver.render_standard_field("a", LEAP_FEBRUARY + 12 * 3600), "pm")

    def test_iso_year_differs_at_year_start(self):
        """Test ISO week-numbering year around New Year."""
        resolver = CalendarResolver()

        # 2023-01-01 00:00:00 UTC belongs to ISO week 52 of 2022
        self.assertEqual(resolver.render_standard_field("o", 1672531200), "2022")
        self.assertEqual(resolver.render_standard_field("W", 1672531200), "52")
        self.assertEqual(resolver.render_standard_field("Y", 1672531200), "2023")


class TestOrdinalSuffix(unittest.TestCase):
    """Tests for the English ordinal suffix."""

    def test_suffixes(self):
        """Test suffixes across the month, including the teens."""
        expected = {
            1: "st", 2: "nd", 3: "rd", 4: "th", 11: "th", 12: "th", 13: "th",
            21: "st", 22: "nd", 23: "rd", 30: "th", 31: "st",
        }
        for day, suffix in expected.items():
            self.assertEqual(_ordinal_suffix(day), suffix, day)


if __name__ == "__main__":
    unittest.main()
