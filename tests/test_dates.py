"""
Tests for date arithmetic, boundaries, formatting and parsing.
"""

from datetime import datetime, timedelta, timezone

import pytest

from codemagi.types import DateParseError, ValidationError
from codemagi.util import dates

FRIDAY = datetime(2024, 3, 8, 10, 30)


class TestBusinessDays:
    """Test business day arithmetic."""

    def test_zero_returns_input(self):
        assert dates.add_business_days(FRIDAY, 0) == FRIDAY

    def test_friday_plus_one_is_monday(self):
        assert dates.add_business_days(FRIDAY, 1) == datetime(2024, 3, 11, 10, 30)

    @pytest.mark.parametrize("start_offset", range(7))
    @pytest.mark.parametrize("count", [1, 2, 5, 7, 12])
    def test_result_is_never_a_weekend(self, start_offset, count):
        start = FRIDAY + timedelta(days=start_offset)
        result = dates.add_business_days(start, count)
        assert result.weekday() < 5
        assert result > start

    def test_none(self):
        assert dates.add_business_days(None, 3) is None


class TestUnitArithmetic:
    """Test add_units and its shortcuts."""

    def test_month_end_clamps(self):
        assert dates.add_months(datetime(2024, 1, 31), 1) == datetime(2024, 2, 29)

    def test_other_units(self):
        base = datetime(2024, 1, 1)
        assert dates.add_minutes(base, 90) == datetime(2024, 1, 1, 1, 30)
        assert dates.add_hours(base, -1) == datetime(2023, 12, 31, 23)
        assert dates.add_days(base, 31) == datetime(2024, 2, 1)
        assert dates.add_years(datetime(2024, 2, 29), 1) == datetime(2025, 2, 28)

    def test_unknown_unit(self):
        with pytest.raises(ValidationError):
            dates.add_units(datetime(2024, 1, 1), "fortnights", 1)


class TestBoundaries:
    """Test day, month, quarter, year and week boundaries."""

    def test_day_bounds(self):
        d = datetime(2024, 5, 17, 15, 45, 12)
        assert dates.day_start(d) == datetime(2024, 5, 17)
        assert dates.day_end(d) == datetime(2024, 5, 17, 23, 59, 59, 999999)

    def test_month_bounds(self):
        d = datetime(2024, 2, 10, 8)
        assert dates.month_start(d) == datetime(2024, 2, 1)
        assert dates.month_end(d) == datetime(2024, 2, 29, 23, 59, 59, 999999)

    def test_quarter(self):
        d = datetime(2024, 5, 17)
        assert dates.get_quarter(d) == 2
        assert dates.get_quarter(d, offset=6) == 4
        assert dates.quarter_start(d) == datetime(2024, 4, 1)
        assert dates.quarter_end(d) == datetime(2024, 6, 30, 23, 59, 59, 999999)

    def test_quarter_start_of(self):
        assert dates.quarter_start_of(3, 2024) == datetime(2024, 7, 1)
        with pytest.raises(ValidationError):
            dates.quarter_start_of(5, 2024)

    def test_year_bounds(self):
        d = datetime(2024, 5, 17, 9)
        assert dates.year_start(d) == datetime(2024, 1, 1)
        assert dates.year_start(1999) == datetime(1999, 1, 1)
        assert dates.year_end(d) == datetime(2024, 12, 31, 23, 59, 59, 999999)

    def test_week_start(self):
        assert dates.week_start(datetime(2024, 3, 10, 18)) == datetime(2024, 3, 4)
        assert dates.week_start(datetime(2024, 3, 4, 18)) == datetime(2024, 3, 4)

    def test_roll_to_day(self):
        monday = 0
        assert dates.roll_to_day(FRIDAY, monday) == FRIDAY + timedelta(days=3)
        assert dates.roll_to_day(FRIDAY, FRIDAY) == FRIDAY
        assert dates.roll_back_to_day(FRIDAY, monday) == FRIDAY - timedelta(days=4)

    def test_fiscal_year(self):
        assert dates.fiscal_year(datetime(2024, 7, 1), 6) == 2025
        assert dates.fiscal_year(datetime(2024, 6, 30), 6) == 2024


class TestSpans:
    """Test span calculations."""

    def test_months_in_span(self):
        assert dates.months_in_span(datetime(2024, 1, 15), datetime(2024, 3, 1)) == 3
        assert dates.months_in_span(datetime(2024, 1, 15), datetime(2024, 1, 20)) == 1
        assert dates.months_in_span(datetime(2024, 3, 1), datetime(2024, 1, 1)) == -1

    def test_days_and_minutes_between(self):
        start = datetime(2024, 1, 1)
        assert dates.days_between(start, datetime(2024, 1, 3, 12)) == 2
        assert dates.minutes_between(start, datetime(2024, 1, 1, 2, 5)) == 125
        assert dates.days_between(start, None) == -1


class TestFormattingAndParsing:
    """Test format constants and parsing."""

    def test_format_constants(self):
        d = datetime(2024, 3, 8, 14, 5)
        assert dates.format_date(d, dates.ISO_8601) == "2024-03-08"
        assert dates.format_date(d, dates.US_STANDARD) == "03/08/2024"
        assert dates.format_date(d, dates.YYYYMMDDHHMM) == "202403081405"
        assert dates.format_date(None, dates.ISO_8601) == ""

    def test_to_time(self):
        assert dates.to_time(3725) == "01:02:05"

    def test_to_date(self):
        assert dates.to_date("2024-03-08", dates.ISO_8601) == datetime(2024, 3, 8)

    def test_to_date_malformed(self):
        with pytest.raises(DateParseError) as exc_info:
            dates.to_date("08.03.2024", dates.ISO_8601)
        assert exc_info.value.text == "08.03.2024"
        assert dates.to_date("08.03.2024", dates.ISO_8601, default=None) is None

    def test_validate(self):
        assert dates.validate_date("02/29/2024")
        assert not dates.validate_date("02/30/2024")
        assert dates.validate_date_parts("2", "29", "2024")
        assert not dates.validate_date_parts(2, 29, 2023)

    @pytest.mark.parametrize("number,suffix", [
        (1, "st"), (2, "nd"), (3, "rd"), (4, "th"), (11, "th"), (12, "th"),
        (13, "th"), (21, "st"), (22, "nd"), (101, "st"), (111, "th"), ("23", "rd"),
    ])
    def test_ordinal_suffix(self, number, suffix):
        assert dates.ordinal_suffix(number) == suffix

    def test_ordinal_suffix_non_number(self):
        assert dates.ordinal_suffix("x") == ""


class TestComparisons:
    """Test null-safe comparisons."""

    def test_past_and_future(self):
        assert dates.is_past(datetime(2000, 1, 1))
        assert dates.is_future(datetime.now() + timedelta(days=1))
        assert not dates.is_past(None)

    def test_today(self):
        assert dates.is_today(datetime.now())
        assert not dates.is_today(datetime.now() - timedelta(days=2))

    def test_ordering_helpers(self):
        a, b = datetime(2024, 1, 1), datetime(2024, 6, 1)
        assert dates.is_before(a, b)
        assert dates.is_before_or_equal(a, a)
        assert dates.is_after(b, a)
        assert dates.is_after_or_equal(b, b)
        assert not dates.is_before(a, None)
        assert dates.is_within_range(datetime(2024, 3, 1), a, b)
        assert dates.greatest(a, b) == b
        assert dates.greatest(None, a) == a

    def test_is_equal(self):
        assert dates.is_equal(None, None)
        assert not dates.is_equal(datetime(2024, 1, 1), None)
        assert dates.is_same_day(datetime(2024, 1, 1, 1), datetime(2024, 1, 1, 23))


class TestTimeZones:
    """Test zone-aware helpers."""

    def test_daylight_time(self):
        assert dates.is_daylight_time(datetime(2024, 7, 1, 12, tzinfo=timezone.utc),
                                      "America/New_York")
        assert not dates.is_daylight_time(datetime(2024, 1, 15, 12, tzinfo=timezone.utc),
                                          "America/New_York")

    def test_unknown_zone(self):
        with pytest.raises(ValidationError):
            dates.get_timezone("Not/AZone")

    def test_set_time(self):
        result = dates.set_time(datetime(2024, 1, 1, 5, 6, 7, 8), 13, 0, 0)
        assert result == datetime(2024, 1, 1, 13, 0, 0)

    def test_timezone_sort_key_orders_by_standard_offset(self):
        zones = ["Asia/Tokyo", "America/New_York", "Europe/London", "America/Los_Angeles"]
        ordered = sorted(zones, key=dates.timezone_sort_key)
        assert ordered == ["America/Los_Angeles", "America/New_York", "Europe/London", "Asia/Tokyo"]
