"""Disambiguation policy.

Decides the role of numeric date components and the direction (future or
past) of under-specified references such as a bare weekday or month.
"""

from datetime import date, datetime, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta

from ...core.config_manager import DateOrder
from ...core.error_handler import AmbiguousDateError, InvalidDateError
from .calendar_math import (
    days_in_month,
    expand_two_digit_year,
    is_leap_year,
    validate_date,
)

FUTURE = "future"
PAST = "past"

# 29 February recurs at most every eight years (e.g. 2096 -> 2104)
LEAP_DAY_SEARCH_YEARS = 8


def resolve_day_month(a: int, b: int, year: int, order: DateOrder, auto_detect: bool,
                      strict: bool = False, source: str = "") -> date:
    """Assign day and month roles to the first two components of a year-last date.

    Args:
        a: First numeric component
        b: Second numeric component
        year: Already expanded year
        order: Configured (or fallback) component order
        auto_detect: True when the order was not configured
        strict: Raise instead of guessing when both readings are valid
        source: Original text, used in error messages

    Returns:
        Validated calendar date

    Raises:
        AmbiguousDateError: In strict auto-detect mode with two valid readings
        InvalidDateError: When the chosen reading does not exist
    """
    if auto_detect:
        if a > 12:
            return validate_date(year, b, a)
        if b > 12:
            return validate_date(year, a, b)
        if strict and a != b and _is_valid(year, a, b) and _is_valid(year, b, a):
            raise AmbiguousDateError(source, [(year, a, b), (year, b, a)])

    if order is DateOrder.DMY:
        return validate_date(year, b, a)
    # Year-first order has no say over a year-last date; month comes first
    return validate_date(year, a, b)


def resolve_short_date(a: int, b: int, c: int, order: DateOrder, auto_detect: bool,
                       strict: bool = False, source: str = "") -> date:
    """Resolve ``NN/NN/NN`` where every field is two digits.

    With an explicit YMD order the first field is the year; otherwise the
    last field is a two-digit year and the first two go through
    ``resolve_day_month``.
    """
    if not auto_detect and order is DateOrder.YMD:
        return validate_date(expand_two_digit_year(a), b, c)
    return resolve_day_month(a, b, expand_two_digit_year(c), order, auto_detect, strict, source)


def _is_valid(year: int, month: int, day: int) -> bool:
    try:
        validate_date(year, month, day)
    except InvalidDateError:
        return False
    return True


def resolve_weekday(base: datetime, weekday: int, direction: str = FUTURE,
                    modifier: Optional[str] = None) -> date:
    """Date of a weekday (0 = Monday) relative to the base instant.

    Args:
        base: Reference instant
        weekday: Target weekday, 0-6
        direction: ``future`` or ``past`` for a bare weekday
        modifier: None (bare), ``next``, ``last`` or ``this``

    Returns:
        Resolved date
    """
    if not 0 <= weekday <= 6:
        raise InvalidDateError(f"weekday {weekday} out of range", {"weekday": weekday})

    today = base.date()
    current = today.weekday()

    if modifier == "next":
        ahead = (weekday - current) % 7 or 7
        return today + timedelta(days=ahead)
    if modifier == "last":
        behind = (current - weekday) % 7 or 7
        return today - timedelta(days=behind)
    if modifier == "this":
        return today + timedelta(days=weekday - current)

    # Bare weekday: today counts as both upcoming and recent
    if direction == PAST:
        return today - timedelta(days=(current - weekday) % 7)
    return today + timedelta(days=(weekday - current) % 7)


def resolve_month_day(base: datetime, month: int, day: int, direction: str = FUTURE) -> date:
    """Nearest occurrence of ``month``/``day`` in the preferred direction.

    The base date itself counts as a match. 29 February moves to the
    nearest leap year.
    """
    # Leap year ceiling so 29 February is accepted here
    if not 1 <= month <= 12:
        raise InvalidDateError(f"month {month} out of range 1-12", {"month": month})
    limit = days_in_month(2000, month)
    if not 1 <= day <= limit:
        raise InvalidDateError(f"day {day} out of range for month {month}",
                               {"month": month, "day": day})

    today = base.date()
    step = -1 if direction == PAST else 1
    year = today.year
    for _ in range(LEAP_DAY_SEARCH_YEARS + 1):
        if month != 2 or day != 29 or is_leap_year(year):
            candidate = date(year, month, day)
            if (step > 0 and candidate >= today) or (step < 0 and candidate <= today):
                return candidate
        year += step
    raise InvalidDateError(f"no {month:02d}-{day:02d} within {LEAP_DAY_SEARCH_YEARS} years",
                           {"month": month, "day": day})


def resolve_bare_month(base: datetime, month: int, direction: str = FUTURE) -> date:
    """First day of the nearest ``month``; the current month counts both ways."""
    if not 1 <= month <= 12:
        raise InvalidDateError(f"month {month} out of range 1-12", {"month": month})
    year = base.year
    if direction == PAST:
        if month > base.month:
            year -= 1
    elif month < base.month:
        year += 1
    return validate_date(year, month, 1)


def resolve_bare_day(base: datetime, day: int, direction: str = FUTURE) -> date:
    """Nearest date with day-of-month ``day``, skipping months that lack it."""
    if not 1 <= day <= 31:
        raise InvalidDateError(f"day {day} out of range 1-31", {"day": day})

    today = base.date()
    month_start = today.replace(day=1)
    step = -1 if direction == PAST else 1
    for offset in range(13):
        first = month_start + relativedelta(months=offset * step)
        if day > days_in_month(first.year, first.month):
            continue
        candidate = first.replace(day=day)
        if (step > 0 and candidate >= today) or (step < 0 and candidate <= today):
            return candidate
    raise InvalidDateError(f"no month with day {day} near {today.isoformat()}", {"day": day})
