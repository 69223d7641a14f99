# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
Date arithmetic, boundaries, formatting and comparison helpers.

Dates are ``datetime`` values, naive (local time) or timezone-aware. Time
zones may be given as ``tzinfo`` objects or IANA names such as
"America/New_York". Format constants are ``strftime`` pattern strings;
every call formats from the constant, so nothing is shared or mutated.

Month numbers are 1-based throughout.
"""

import logging
import time
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil.relativedelta import relativedelta, MO

from ..types.errors import DateParseError, ValidationError
from .numeric import final_digits
from .values import is_empty

logger = logging.getLogger(__name__)

TimeZoneLike = Union[str, tzinfo, None]

# Date format patterns
ISO_8601 = "%Y-%m-%d"
ISO_8601_TIME = "%H:%M:%S"
US_STANDARD = "%m/%d/%Y"
US_STANDARD_TIME = "%m/%d/%Y %I:%M%p"
EUROPE_STANDARD = "%d/%m/%Y"
CALENDAR_FORMAT = US_STANDARD
YYYYMMDDHHMM = "%Y%m%d%H%M"
MMDDHHMM = "%m%d%H%M"
MMDDYYYY = "%m%d%Y"
MMYYYY = "%m%Y"
MM_DD_YYYY = "%m %d %Y"
MM_DD_YYYY_HH_MM = "%m %d %Y %H %M"
MM_DD_YYYY_HH_MM_A = "%m %d %Y %I %M %p"
TO_DATE = "%m %d %Y %H %M %S"
MMMM_DD_YYYY = "%B %d, %Y"
DAY_MONTH_DD_YYYY = "%A, %B %d, %Y"
MONTH_DD_YYYY_TIME = "%B %d, %Y %I:%M%p"
MONTH_DIGITS = "%m"
MONTH_ABBREV = "%b"
MONTH_ABBREV_YEAR = "%b %Y"
MONTH_NAME = "%B"
DAY_DIGITS = "%d"
DAY_ABBREV = "%a"
DAY = "%A"
YEAR = "%Y"
HOUR_DIGITS = "%H"
HOUR_12_DIGITS = "%I"
TIME_12_HOUR = "%I:%M%p"
MERIDIAN = "%p"
MINUTE_DIGITS = "%M"
XML_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%z"
ORACLE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S.%f"
ODBC_DATE_TIME = "{ts '%Y-%m-%d %H:%M:%S'}"
TO_DATETIME_MYSQL = "STR_TO_DATE('%Y-%m-%d %H:%M:%S', '%%Y-%%m-%%d %%k:%%i:%%S')"
TO_DATE_MYSQL = "STR_TO_DATE('%Y-%m-%d', '%%Y-%%m-%%d')"
WIKIPEDIA_DATE_FORMAT = "%H:%M, %d %B %Y (%Z)"

BEGINNING_OF_TIME = datetime(1970, 1, 1, tzinfo=timezone.utc)
END_OF_TIME = datetime.max

# Units accepted by add_units
UNITS = ("seconds", "minutes", "hours", "days", "weeks", "months", "years")

_MISSING = object()


def get_timezone(tz: TimeZoneLike) -> Optional[tzinfo]:
    """Resolve a time zone name; None and "" mean local time."""
    if tz is None or isinstance(tz, tzinfo):
        return tz
    if is_empty(tz):
        return None
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValidationError(f"Unknown time zone: {tz}", field="tz", value=tz) from e


def _in_zone(d: datetime, tz: TimeZoneLike) -> datetime:
    zone = get_timezone(tz)
    if zone is None:
        return d
    # naive values are taken as local time
    return d.astimezone(zone)


def to_time(seconds: Optional[float]) -> str:
    """Render a number of seconds as "HH:MM:SS"."""
    if seconds is None:
        return "00:00:00"
    seconds = int(seconds)
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def now(tz: TimeZoneLike = None) -> datetime:
    """Current time; naive local time unless a zone is given."""
    return datetime.now(get_timezone(tz))


def set_time(d: datetime, hour: int, minute: int, second: int,
             tz: TimeZoneLike = None) -> datetime:
    """
    Set the wall-clock time of ``d``, as seen in zone ``tz`` when given.
    Microseconds are cleared.
    """
    if d is None:
        return None
    return _in_zone(d, tz).replace(hour=hour, minute=minute, second=second, microsecond=0)


def is_daylight_time(d: Optional[datetime] = None, tz: TimeZoneLike = None) -> bool:
    """Whether daylight saving time is in effect at ``d`` (default now)."""
    zone = get_timezone(tz)
    if d is None:
        d = datetime.now(zone)

    if zone is None and d.tzinfo is None:
        return time.localtime(d.timestamp()).tm_isdst > 0

    if zone is not None:
        d = _in_zone(d, zone)
    offset = d.dst()
    return bool(offset)


def is_business_day(d: datetime) -> bool:
    """Monday through Friday."""
    return d.weekday() < 5


def add_business_days(d: Optional[datetime], num_days: int) -> Optional[datetime]:
    """
    Step forward ``num_days`` business days.

    Zero or negative counts return ``d`` unchanged; otherwise the result is
    always a Monday-Friday date.
    """
    if d is None:
        return None
    if num_days <= 0:
        return d

    counted = 0
    while counted < num_days:
        d = d + timedelta(days=1)
        if is_business_day(d):
            counted += 1
    return d


def add_units(d: Optional[datetime], unit: str, amount: int) -> Optional[datetime]:
    """
    Add ``amount`` of ``unit`` (one of UNITS). Month and year arithmetic
    clamps to the end of shorter months, so Jan 31 + 1 month is Feb 28/29.
    """
    if d is None:
        return None
    if unit not in UNITS:
        raise ValidationError(f"Unknown date unit: {unit}", field="unit", value=unit)
    return d + relativedelta(**{unit: amount})


def add_minutes(d: Optional[datetime], minutes: int) -> Optional[datetime]:
    return add_units(d, "minutes", minutes)


def add_hours(d: Optional[datetime], hours: int) -> Optional[datetime]:
    return add_units(d, "hours", hours)


def add_days(d: Optional[datetime], days: int) -> Optional[datetime]:
    return add_units(d, "days", days)


def add_months(d: Optional[datetime], months: int) -> Optional[datetime]:
    return add_units(d, "months", months)


def add_years(d: Optional[datetime], years: int) -> Optional[datetime]:
    return add_units(d, "years", years)


def roll_to_day(start: datetime, day_of_week: Union[datetime, int]) -> datetime:
    """
    Move forward to the next date on the given weekday (``start`` itself if
    it already matches). The weekday is a date or an int, Monday == 0.
    """
    target = day_of_week.weekday() if isinstance(day_of_week, datetime) else day_of_week
    return start + timedelta(days=(target - start.weekday()) % 7)


def roll_back_to_day(start: datetime, day_of_week: Union[datetime, int]) -> datetime:
    """Move backward to the previous date on the given weekday."""
    target = day_of_week.weekday() if isinstance(day_of_week, datetime) else day_of_week
    return start - timedelta(days=(start.weekday() - target) % 7)


def get_quarter(d: datetime, offset: int = 0) -> int:
    """Calendar quarter (1-4) of ``d`` shifted by ``offset`` months."""
    month = (d + relativedelta(months=offset)).month
    return (month - 1) // 3 + 1


def day_start(d: Optional[datetime]) -> Optional[datetime]:
    if d is None:
        return None
    return d.replace(hour=0, minute=0, second=0, microsecond=0)


def day_end(d: Optional[datetime]) -> Optional[datetime]:
    if d is None:
        return None
    return d.replace(hour=23, minute=59, second=59, microsecond=999999)


def month_start(d: Optional[datetime]) -> Optional[datetime]:
    if d is None:
        return None
    return day_start(d).replace(day=1)


def month_end(d: Optional[datetime]) -> Optional[datetime]:
    if d is None:
        return None
    return day_end(d + relativedelta(day=31))


def quarter_start(d: Optional[datetime]) -> Optional[datetime]:
    if d is None:
        return None
    first_month = (get_quarter(d) - 1) * 3 + 1
    return month_start(d).replace(month=first_month)


def quarter_end(d: Optional[datetime]) -> Optional[datetime]:
    if d is None:
        return None
    return month_end(quarter_start(d) + relativedelta(months=2))


def quarter_start_of(quarter: int, year: int, offset: int = 0) -> datetime:
    """Start of ``quarter`` in ``year``, shifted by ``offset`` months."""
    if not 1 <= quarter <= 4:
        raise ValidationError("Quarter must be between 1 and 4", field="quarter", value=quarter)
    start = datetime(year, (quarter - 1) * 3 + 1, 1)
    return start + relativedelta(months=offset)


def year_start(d: Union[datetime, int, None]) -> Optional[datetime]:
    """January 1st of the year of ``d`` (a date or a year number)."""
    if d is None:
        return None
    if isinstance(d, int):
        return datetime(d, 1, 1)
    return month_start(d).replace(month=1)


def year_end(d: Optional[datetime]) -> Optional[datetime]:
    if d is None:
        return None
    return day_end(d.replace(month=12, day=31))


def week_start(d: Optional[datetime] = None) -> datetime:
    """Monday 00:00 of the week containing ``d`` (default today)."""
    if d is None:
        d = datetime.now()
    return day_start(d + relativedelta(weekday=MO(-1)))


def get_day(d: Optional[datetime]) -> Optional[int]:
    return None if d is None else d.day


def get_month(d: Optional[datetime]) -> Optional[int]:
    return None if d is None else d.month


def get_year(d: Optional[datetime]) -> Optional[int]:
    return None if d is None else d.year


def fiscal_year(d: datetime, offset: int) -> int:
    """Year of ``d`` shifted by ``offset`` months (a July fiscal start is offset 6)."""
    return (d + relativedelta(months=offset)).year


def months_in_span(start: Optional[datetime], end: Optional[datetime]) -> int:
    """Number of calendar months touched by [start, end]; -1 when reversed or missing."""
    if start is None or end is None or start > end:
        return -1
    cursor = month_start(start)
    count = 0
    while True:
        count += 1
        cursor = cursor + relativedelta(months=1)
        if end < cursor:
            return count


def days_between(start: Optional[datetime], end: Optional[datetime]) -> int:
    """Whole days from start to end; -1 when reversed or missing."""
    if start is None or end is None or start > end:
        return -1
    return int((end - start).total_seconds() // 86400)


def minutes_between(start: Optional[datetime], end: Optional[datetime]) -> int:
    """Whole minutes from start to end; -1 when reversed or missing."""
    if start is None or end is None or start > end:
        return -1
    return int((end - start).total_seconds() // 60)


def format_date(d: Optional[datetime], fmt: str) -> str:
    """Format with a pattern constant; "" for None."""
    if d is None:
        return ""
    return d.strftime(fmt)


def timestamp(fmt: str = YYYYMMDDHHMM, tz: TimeZoneLike = None) -> str:
    """Current time formatted with ``fmt``, as seen in zone ``tz``."""
    return format_date(now(tz), fmt)


def ordinal_suffix(number: Union[int, str]) -> str:
    """English ordinal suffix: 1 -> "st", 12 -> "th", 23 -> "rd". "" for non-numbers."""
    if isinstance(number, str):
        try:
            number = int(number.strip())
        except ValueError:
            return ""

    number = abs(number)
    if 10 < final_digits(number, 2) < 20:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(final_digits(number, 1), "th")


def to_date(text: Optional[str], fmt: str, default: Any = _MISSING) -> Optional[datetime]:
    """
    Parse ``text`` with a pattern constant.

    Raises DateParseError on a mismatch unless ``default`` is given.
    """
    try:
        if text is None:
            raise ValueError("no date text")
        return datetime.strptime(text.strip(), fmt)
    except ValueError as e:
        if default is not _MISSING:
            return default
        raise DateParseError(f"Cannot parse {text!r} as a date", text=text,
                             date_format=fmt, cause=e) from e


def from_parts(month: Union[int, str], day: Union[int, str], year: Union[int, str],
               hour: Union[int, str] = 0, minute: Union[int, str] = 0,
               default: Any = _MISSING) -> Optional[datetime]:
    """Build a date from (possibly string) parts; invalid parts raise DateParseError."""
    text = f"{month} {day} {year} {hour} {minute}"
    try:
        return datetime(int(year), int(month), int(day), int(hour), int(minute))
    except (TypeError, ValueError) as e:
        if default is not _MISSING:
            return default
        raise DateParseError(f"Invalid date parts: {text}", text=text,
                             date_format=MM_DD_YYYY_HH_MM, cause=e) from e


def validate_date(text: Optional[str], fmt: str = US_STANDARD) -> bool:
    return to_date(text, fmt, default=None) is not None


def validate_date_parts(month: Union[int, str], day: Union[int, str],
                        year: Union[int, str]) -> bool:
    """True when month/day/year name a real calendar date."""
    return from_parts(month, day, year, default=None) is not None


def _now_like(d: datetime) -> datetime:
    return datetime.now(d.tzinfo)


def is_past(d: Optional[datetime]) -> bool:
    if d is None:
        return False
    return _now_like(d) > d


def is_future(d: Optional[datetime]) -> bool:
    if d is None:
        return False
    return _now_like(d) < d


def is_same_day(first: Optional[datetime], second: Optional[datetime]) -> bool:
    if first is None or second is None:
        return False
    return first.date() == second.date()


def is_today(d: Optional[datetime]) -> bool:
    if d is None:
        return False
    return is_same_day(d, _now_like(d))


def is_equal(first: Optional[datetime], second: Optional[datetime]) -> bool:
    """Two Nones are equal; None never equals a date."""
    if first is None and second is None:
        return True
    return first is not None and first == second


def is_within_range(d: Optional[datetime], start: Optional[datetime],
                    end: Optional[datetime]) -> bool:
    """Inclusive range check; False when any argument is None."""
    if d is None or start is None or end is None:
        return False
    return start <= d <= end


def is_before(first: Optional[datetime], second: Optional[datetime]) -> bool:
    if first is None or second is None:
        return False
    return first < second


def is_before_or_equal(first: Optional[datetime], second: Optional[datetime]) -> bool:
    if first is None or second is None:
        return False
    return first <= second


def is_after(first: Optional[datetime], second: Optional[datetime]) -> bool:
    if first is None or second is None:
        return False
    return first > second


def is_after_or_equal(first: Optional[datetime], second: Optional[datetime]) -> bool:
    if first is None or second is None:
        return False
    return first >= second


def greatest(first: Optional[datetime], second: Optional[datetime]) -> Optional[datetime]:
    """Later of two dates, ignoring None."""
    if first is None:
        return second
    if second is None:
        return first
    return first if first > second else second


def timezone_sort_key(tz: Union[str, tzinfo]):
    """
    Sort key ordering zones by standard UTC offset (daylight saving
    excluded), then by name.
    """
    zone = get_timezone(tz)
    current = datetime.now(zone)
    offset = current.utcoffset() or timedelta(0)
    dst = current.dst() or timedelta(0)
    return (int((offset - dst).total_seconds()), str(tz))
