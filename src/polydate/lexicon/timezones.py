"""Timezone designators.

Recognizes the timezone that may trail a date/time expression: ``Z``,
``UTC+2``, ``-05:00``, common abbreviations and IANA zone names. Offsets
are built with ``dateutil.tz``.
"""

import re
from datetime import tzinfo
from typing import Optional, Tuple

from dateutil.tz import gettz, tzoffset, tzutc

from ..core.error_handler import ConfigurationError

# Fixed offsets in hours; abbreviations are ambiguous worldwide, these are the common readings
TIMEZONE_ABBREVIATIONS = {
    "EST": -5, "EDT": -4,
    "CST": -6, "CDT": -5,
    "MST": -7, "MDT": -6,
    "PST": -8, "PDT": -7,
    "AKST": -9, "AKDT": -8,
    "HST": -10,
    "WET": 0, "WEST": 1,
    "BST": 1,
    "CET": 1, "CEST": 2,
    "EET": 2, "EEST": 3,
    "MSK": 3,
    "IST": 5.5,
    "JST": 9, "KST": 9,
    "AEST": 10, "AEDT": 11,
}

_ABBREVIATIONS = "|".join(sorted(TIMEZONE_ABBREVIATIONS, key=len, reverse=True))

# Case-sensitive on purpose: "z" or "est" in running text are words, not zones
_TIMEZONE_RE = re.compile(
    r"[ \t]*\(?"
    r"(?:"
    r"(?P<utc>UTC|GMT)(?:\s*(?P<utc_sign>[+-])(?P<utc_hours>\d{1,2})(?::?(?P<utc_minutes>\d{2}))?)?"
    r"|(?P<offset_sign>[+-])(?P<offset_hours>\d{2}):?(?P<offset_minutes>\d{2})"
    rf"|(?P<abbr>{_ABBREVIATIONS})"
    r"|(?P<iana>[A-Z][A-Za-z_]+(?:/[A-Z][A-Za-z_\-]+)+)"
    r"|(?P<zulu>Z)"
    r")\)?(?![\w+\-:])"
)


def _offset_zone(sign: str, hours: str, minutes: Optional[str]) -> tzinfo:
    hours_value = int(hours)
    minutes_value = int(minutes or 0)
    if hours_value > 14 or minutes_value > 59:
        raise ValueError("offset out of range")
    seconds = hours_value * 3600 + minutes_value * 60
    if sign == "-":
        seconds = -seconds
    if seconds == 0:
        return tzutc()
    return tzoffset(None, seconds)


def extract_timezone(text: str, pos: int = 0) -> Optional[Tuple[tzinfo, int]]:
    """Read a timezone designator starting at ``pos``.

    Args:
        text: Text to scan
        pos: Offset where the designator may start (leading blanks allowed)

    Returns:
        ``(tzinfo, consumed_length)`` or None when no designator is present
    """
    match = _TIMEZONE_RE.match(text, pos)
    if not match:
        return None
    # A lone "(" or ")" without its partner is not part of the zone
    consumed = match.group(0)
    if consumed.count("(") != consumed.count(")"):
        return None

    try:
        if match.group("utc"):
            if match.group("utc_sign"):
                zone = _offset_zone(match.group("utc_sign"), match.group("utc_hours"),
                                    match.group("utc_minutes"))
            else:
                zone = tzutc()
        elif match.group("offset_sign"):
            zone = _offset_zone(match.group("offset_sign"), match.group("offset_hours"),
                                match.group("offset_minutes"))
        elif match.group("abbr"):
            zone = _abbreviation_zone(match.group("abbr"))
        elif match.group("iana"):
            zone = gettz(match.group("iana"))
            if zone is None:
                return None
        else:
            zone = tzutc()
    except ValueError:
        return None

    return zone, match.end() - pos


def _abbreviation_zone(name: str) -> tzinfo:
    hours = TIMEZONE_ABBREVIATIONS[name]
    return tzoffset(name, int(hours * 3600))


def resolve_timezone(name: str) -> tzinfo:
    """Resolve a configured timezone name.

    Accepts IANA names, the abbreviations above, ``UTC``/``Z`` and numeric
    offsets.

    Raises:
        ConfigurationError: If the name is not recognized
    """
    cleaned = (name or "").strip()
    if not cleaned:
        raise ConfigurationError("timezone name is empty")

    upper = cleaned.upper()
    if upper in ("UTC", "GMT", "Z"):
        return tzutc()
    if upper in TIMEZONE_ABBREVIATIONS:
        return _abbreviation_zone(upper)

    found = extract_timezone(cleaned)
    if found is not None and found[1] == len(cleaned):
        return found[0]

    zone = gettz(cleaned)
    if zone is None:
        raise ConfigurationError(f"unknown timezone: '{name}'")
    return zone
