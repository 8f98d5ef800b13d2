"""Calendar arithmetic.

Pure functions for date validity, ISO week dates and quarter/period
boundaries. Every function rejects out-of-range input with
``InvalidDateError``; nothing is clamped.
"""

from datetime import date, datetime, timedelta, tzinfo
from typing import Optional, Tuple

from dateutil.relativedelta import relativedelta

from ...core.error_handler import InvalidDateError

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

# First month of each quarter
QUARTER_START_MONTH = {1: 1, 2: 4, 3: 7, 4: 10}

MIN_YEAR = 1
MAX_YEAR = 9999


def is_leap_year(year: int) -> bool:
    """Gregorian leap year: divisible by 4, not by 100 unless by 400."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def _check_year(year: int):
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidDateError(f"year {year} out of range", {"year": year})


def _check_month(month: int):
    if not 1 <= month <= 12:
        raise InvalidDateError(f"month {month} out of range 1-12", {"month": month})


def days_in_month(year: int, month: int) -> int:
    _check_year(year)
    _check_month(month)
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def validate_date(year: int, month: int, day: int) -> date:
    """Return the date, raising InvalidDateError when it does not exist."""
    _check_year(year)
    _check_month(month)
    limit = days_in_month(year, month)
    if not 1 <= day <= limit:
        raise InvalidDateError(
            f"day {day} out of range for {year:04d}-{month:02d} (1-{limit})",
            {"year": year, "month": month, "day": day},
        )
    return date(year, month, day)


def validate_time(hour: int, minute: int = 0, second: int = 0, microsecond: int = 0):
    """Reject clock components outside 0-23 / 0-59; leap seconds are not modeled."""
    components = {"hour": hour, "minute": minute, "second": second}
    if not 0 <= hour <= 23:
        raise InvalidDateError(f"hour {hour} out of range 0-23", components)
    if not 0 <= minute <= 59:
        raise InvalidDateError(f"minute {minute} out of range 0-59", components)
    if not 0 <= second <= 59:
        raise InvalidDateError(f"second {second} out of range 0-59", components)
    if not 0 <= microsecond <= 999999:
        raise InvalidDateError(f"fraction {microsecond} out of range", components)


def build_datetime(year: int, month: int, day: int, hour: int = 0, minute: int = 0,
                   second: int = 0, microsecond: int = 0,
                   tzinfo: Optional[tzinfo] = None) -> datetime:
    """Validated, optionally timezone-aware datetime."""
    validate_date(year, month, day)
    validate_time(hour, minute, second, microsecond)
    return datetime(year, month, day, hour, minute, second, microsecond, tzinfo=tzinfo)


def iso_weeks_in_year(year: int) -> int:
    """52 or 53; 28 December always falls in the last ISO week."""
    _check_year(year)
    return date(year, 12, 28).isocalendar()[1]


def iso_week_to_date(year: int, week: int, weekday: int = 1) -> date:
    """Calendar date of an ISO week date.

    Week 1 holds the year's first Thursday, so the result can fall in the
    previous or the next calendar year.

    Args:
        year: ISO year
        week: Week number 1-53
        weekday: 1 (Monday) to 7 (Sunday)

    Returns:
        Calendar date
    """
    _check_year(year)
    if not 1 <= weekday <= 7:
        raise InvalidDateError(f"weekday {weekday} out of range 1-7", {"weekday": weekday})
    if not 1 <= week <= 53:
        raise InvalidDateError(f"week {week} out of range 1-53", {"week": week})
    if week == 53 and iso_weeks_in_year(year) == 52:
        raise InvalidDateError(f"{year} has no ISO week 53", {"year": year, "week": week})

    # 4 January is always in week 1
    jan4 = date(year, 1, 4)
    week1_monday = jan4 - timedelta(days=jan4.isoweekday() - 1)
    result = week1_monday + timedelta(weeks=week - 1, days=weekday - 1)
    if not MIN_YEAR <= result.year <= MAX_YEAR:
        raise InvalidDateError(f"week date {year}-W{week:02d}-{weekday} out of range")
    return result


def date_to_iso_week(value: date) -> Tuple[int, int, int]:
    """``(iso_year, week, weekday)`` for a calendar date."""
    iso = value.isocalendar()
    return iso[0], iso[1], iso[2]


def quarter_of(month: int) -> int:
    _check_month(month)
    return (month - 1) // 3 + 1


def quarter_start(year: int, quarter: int) -> date:
    """First day of quarter ``n``: month ``3n-2``, day 1."""
    if quarter not in QUARTER_START_MONTH:
        raise InvalidDateError(f"quarter {quarter} out of range 1-4", {"quarter": quarter})
    return validate_date(year, QUARTER_START_MONTH[quarter], 1)


def quarter_end(year: int, quarter: int) -> date:
    start = quarter_start(year, quarter)
    last_month = start.month + 2
    return date(year, last_month, days_in_month(year, last_month))


def half_start(year: int, half: int) -> date:
    """First day of H1 (January) or H2 (July)."""
    if half not in (1, 2):
        raise InvalidDateError(f"half {half} out of range 1-2", {"half": half})
    return validate_date(year, 1 if half == 1 else 7, 1)


def day_of_year_to_date(year: int, day_of_year: int) -> date:
    """Date for an ISO ordinal date ``YYYY-DDD``."""
    _check_year(year)
    limit = 366 if is_leap_year(year) else 365
    if not 1 <= day_of_year <= limit:
        raise InvalidDateError(
            f"day of year {day_of_year} out of range for {year} (1-{limit})",
            {"year": year, "day_of_year": day_of_year},
        )
    return date(year, 1, 1) + timedelta(days=day_of_year - 1)


def period_bounds(value: date, unit: str) -> Tuple[date, date]:
    """First and last day of the week, month, quarter or year holding ``value``.

    Weeks are ISO weeks (Monday to Sunday).
    """
    if unit == "day":
        return value, value
    if unit == "week":
        start = value - timedelta(days=value.weekday())
        return start, start + timedelta(days=6)
    if unit == "month":
        start = value.replace(day=1)
        return start, start + relativedelta(day=31)
    if unit == "quarter":
        quarter = quarter_of(value.month)
        return quarter_start(value.year, quarter), quarter_end(value.year, quarter)
    if unit == "year":
        return date(value.year, 1, 1), date(value.year, 12, 31)
    raise InvalidDateError(f"no calendar period for unit '{unit}'", {"unit": unit})


def expand_two_digit_year(year: int) -> int:
    """00-69 -> 2000-2069, 70-99 -> 1970-1999; wider years pass through."""
    if year < 0:
        raise InvalidDateError(f"year {year} out of range", {"year": year})
    if year >= 100:
        return year
    return 2000 + year if year < 70 else 1900 + year


def expand_year(token: str) -> int:
    """Year value of a 2- or 4-digit token."""
    if not token.isdigit():
        raise InvalidDateError(f"year '{token}' is not numeric", {"year": token})
    if len(token) <= 2:
        return expand_two_digit_year(int(token))
    return int(token)
