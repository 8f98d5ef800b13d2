"""Timestamp strategy: Unix epochs and ISO-8601 / RFC 3339 datetimes."""

import re
from datetime import datetime, timedelta, tzinfo
from typing import Any, Dict, List, Optional

from dateutil import parser
from dateutil.tz import tzutc

from ...core.config_manager import ParseContext
from ...core.error_handler import InvalidDateError
from ...lexicon.lookup import Lexicon
from ..core.calendar_math import validate_date, validate_time
from .base_strategy import DateStrategy

EPOCH = datetime(1970, 1, 1, tzinfo=tzutc())

# Digits in the epoch -> divisor to whole seconds
EPOCH_SCALES = {10: 1, 13: 10 ** 3, 16: 10 ** 6, 19: 10 ** 9}


class TimestampStrategy(DateStrategy):
    """Machine timestamps."""

    name = "timestamp"
    accepts_timezone = True

    def _build_rules(self, lexicon: Lexicon) -> List[Dict[str, Any]]:
        offset = r"(?P<offset>[Zz]|[+-]\d{2}(?::?\d{2})?)?"
        return [
            {
                "type": "iso_datetime",
                "pattern": (
                    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})[Tt]"
                    r"(?P<hour>\d{2}):(?P<minute>\d{2})"
                    r"(?::(?P<second>\d{2})(?:[.,](?P<fraction>\d{1,9}))?)?" + offset
                ),
                "handler": self._handle_iso,
                "confidence": 1.0,
            },
            {
                "type": "iso_basic_datetime",
                "pattern": (
                    r"(?P<year>\d{4})(?P<month>\d{2})(?P<day>\d{2})[Tt]"
                    r"(?P<hour>\d{2})(?P<minute>\d{2})"
                    r"(?:(?P<second>\d{2})(?:[.,](?P<fraction>\d{1,9}))?)?" + offset
                ),
                "handler": self._handle_iso,
                "confidence": 1.0,
            },
            {
                "type": "unix_epoch",
                "pattern": r"(?P<epoch>\d{19}|\d{16}|\d{13}|\d{10})(?:\.(?P<fraction>\d{1,9}))?",
                "handler": self._handle_epoch,
                "confidence": 1.0,
            },
        ]

    def _handle_iso(self, match: re.Match, context: ParseContext,
                    zone: Optional[tzinfo]) -> datetime:
        year, month, day = (int(match.group(g)) for g in ("year", "month", "day"))
        hour, minute = int(match.group("hour")), int(match.group("minute"))
        second = int(match.group("second") or 0)
        validate_date(year, month, day)
        validate_time(hour, minute, second)

        offset = match.group("offset")
        if offset and offset not in ("Z", "z"):
            digits = offset[1:].replace(":", "")
            if int(digits[:2]) > 14 or (len(digits) > 2 and int(digits[2:]) > 59):
                raise InvalidDateError(f"utc offset '{offset}' out of range",
                                       {"offset": offset})

        # Components are valid; dateutil handles fraction and offset
        fraction = match.group("fraction")
        iso_text = (
            f"{year:04d}-{month:02d}-{day:02d}T{hour:02d}:{minute:02d}:{second:02d}"
            + (f".{fraction[:6]}" if fraction else "")
            + (offset.upper() if offset else "")
        )
        value = parser.isoparse(iso_text)
        if value.tzinfo is None:
            value = value.replace(tzinfo=self.result_zone(context, zone))
        return value

    def _handle_epoch(self, match: re.Match, context: ParseContext,
                      zone: Optional[tzinfo]) -> Optional[datetime]:
        digits = match.group("epoch")
        fraction = match.group("fraction")
        scale = EPOCH_SCALES[len(digits)]
        if fraction and scale != 1:
            # Only second-based epochs take a fractional part
            return None

        seconds, remainder = divmod(int(digits), scale)
        microseconds = remainder * 10 ** 6 // scale
        if fraction:
            microseconds = int(fraction[:6].ljust(6, "0"))

        try:
            instant = EPOCH + timedelta(seconds=seconds, microseconds=microseconds)
        except OverflowError:
            raise InvalidDateError(f"epoch {digits} out of range", {"epoch": digits})
        return instant.astimezone(self.result_zone(context, zone))
