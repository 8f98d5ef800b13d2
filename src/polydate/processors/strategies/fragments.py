"""Regex fragments shared by the strategy rule tables."""

import re
from datetime import date, datetime, tzinfo
from typing import Optional, Tuple

from ...core.error_handler import InvalidDateError
from ...lexicon.lookup import Lexicon
from ..core.calendar_math import build_datetime, validate_time

# Zero-width test that a match ends on a token boundary
TOKEN_END = r"(?:(?!\w)|(?<=[぀-ヿ㐀-䶿一-鿿])|(?=[぀-ヿ㐀-䶿一-鿿]))"

# Separators between numeric date fields
SEP = r"[/\-.]"


def time_fragment(lexicon: Lexicon, prefix: str = "t") -> str:
    """Clock time: ``HH:MM[:SS[.f]] [am/pm]``, ``H am/pm`` or noon/midnight.

    Group names carry ``prefix`` so several fragments can share a pattern.
    """
    meridiem = lexicon.meridiem_pattern()
    words = lexicon.time_word_pattern()
    p = prefix
    return (
        rf"(?:(?P<{p}_hour>\d{{1,2}})[:h](?P<{p}_minute>\d{{2}})"
        rf"(?::(?P<{p}_second>\d{{2}})(?:[.,](?P<{p}_fraction>\d{{1,9}}))?)?"
        rf"(?:\s*(?P<{p}_meridiem>{meridiem}))?"
        rf"|(?P<{p}_hour12>\d{{1,2}})\s*(?P<{p}_meridiem12>{meridiem})"
        rf"|(?P<{p}_word>{words}))"
    )


def time_suffix(lexicon: Lexicon, prefix: str = "t") -> str:
    """Optional time after a date: ``[,] [at] <time>``."""
    connectors = lexicon.connector_pattern("time")
    return (
        rf"(?:\s*,?\s*(?:{connectors}\s*)?{time_fragment(lexicon, prefix)})?"
    )


def ordinal_suffix(lexicon: Lexicon) -> str:
    """Optional suffix after a day number ("st", "º", "er", German ".")."""
    if not lexicon.ordinal_suffixes:
        return ""
    return lexicon.ordinal_suffix_pattern() + "?"


def parse_time(match: re.Match, lexicon: Lexicon,
               prefix: str = "t") -> Optional[Tuple[int, int, int, int]]:
    """``(hour, minute, second, microsecond)`` from a time fragment, None if absent.

    Raises:
        InvalidDateError: For out-of-range clock components
    """
    groups = match.groupdict()
    word = groups.get(f"{prefix}_word")
    if word:
        kind = lexicon.resolve_time_word(word)
        return (12, 0, 0, 0) if kind == "noon" else (0, 0, 0, 0)

    hour_text = groups.get(f"{prefix}_hour") or groups.get(f"{prefix}_hour12")
    if hour_text is None:
        return None

    hour = int(hour_text)
    minute = int(groups.get(f"{prefix}_minute") or 0)
    second = int(groups.get(f"{prefix}_second") or 0)
    fraction = groups.get(f"{prefix}_fraction")
    microsecond = int(fraction[:6].ljust(6, "0")) if fraction else 0

    meridiem_text = groups.get(f"{prefix}_meridiem") or groups.get(f"{prefix}_meridiem12")
    if meridiem_text:
        meridiem = lexicon.resolve_meridiem(meridiem_text)
        if not 1 <= hour <= 12:
            raise InvalidDateError(f"hour {hour} out of range 1-12 for {meridiem_text}",
                                   {"hour": hour})
        hour = hour % 12 + (12 if meridiem == "pm" else 0)

    validate_time(hour, minute, second, microsecond)
    return hour, minute, second, microsecond


def combine(day: date, clock: Optional[Tuple[int, int, int, int]], zone: tzinfo) -> datetime:
    """Date plus optional clock time; midnight when no time was given."""
    hour, minute, second, microsecond = clock or (0, 0, 0, 0)
    return build_datetime(day.year, day.month, day.day, hour, minute, second,
                          microsecond, tzinfo=zone)
