"""Absolute date strategy.

Full calendar dates: ISO and other year-first numeric forms, year-last
numeric forms resolved through the disambiguation policy, month-name forms
in every selected language and CJK ``年月日`` dates. A time of day and a
timezone may follow.
"""

import re
from datetime import datetime, tzinfo
from typing import Any, Dict, List, Optional

from ...core.config_manager import ParseContext
from ...lexicon.lookup import Lexicon
from ..core.calendar_math import expand_year, validate_date
from ..core.disambiguation import resolve_day_month, resolve_short_date
from .base_strategy import DateStrategy
from .fragments import combine, ordinal_suffix, parse_time, time_suffix

NUMERIC_CONFIDENCE = 0.9
AMBIGUOUS_NUMERIC_CONFIDENCE = 0.8


class AbsoluteDateStrategy(DateStrategy):
    """Dates that carry day, month and year."""

    name = "absolute"
    accepts_timezone = True

    def _build_rules(self, lexicon: Lexicon) -> List[Dict[str, Any]]:
        month = lexicon.month_pattern()
        weekday = lexicon.weekday_pattern()
        article = lexicon.connector_pattern("article")
        connector = lexicon.connector_pattern("date")
        suffix = ordinal_suffix(lexicon)
        clock = time_suffix(lexicon)
        weekday_prefix = rf"(?:{weekday}\.?,?\s+)?"

        return [
            {
                "type": "iso_date",
                "pattern": r"(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})" + clock,
                "handler": self._handle_year_first,
                "confidence": 1.0,
            },
            {
                "type": "year_first",
                "pattern": (
                    r"(?P<year>\d{4})(?P<sep>[/.])(?P<month>\d{1,2})(?P=sep)(?P<day>\d{1,2})"
                    + clock
                ),
                "handler": self._handle_year_first,
                "confidence": 0.95,
            },
            {
                "type": "numeric_year_last",
                "pattern": (
                    weekday_prefix
                    + r"(?P<a>\d{1,2})(?P<sep>[/.\-])(?P<b>\d{1,2})(?P=sep)(?P<year>\d{4}|\d{2})"
                    + clock
                ),
                "handler": self._handle_numeric,
                "confidence": NUMERIC_CONFIDENCE,
            },
            {
                "type": "numeric_spaced",
                "pattern": r"(?P<a>\d{1,2})\s+(?P<b>\d{1,2})\s+(?P<year>\d{4})" + clock,
                "handler": self._handle_numeric,
                "confidence": NUMERIC_CONFIDENCE,
            },
            {
                "type": "month_day_year",
                "pattern": (
                    weekday_prefix
                    + rf"(?P<month>{month})\.?\s*(?P<day>\d{{1,2}}){suffix}"
                    + rf"(?:\s*,\s*|\s+)(?:{connector}\s+)?(?P<year>\d{{4}})"
                    + clock
                ),
                "handler": self._handle_named,
                "confidence": 0.95,
            },
            {
                "type": "day_month_year",
                "pattern": (
                    weekday_prefix
                    + rf"(?:{article}\s+)?(?P<day>\d{{1,2}}){suffix}\s*(?:{connector}\s+)?"
                    + rf"(?P<month>{month})\.?(?:\s*,\s*|\s+)(?:{connector}\s+)?(?P<year>\d{{4}})"
                    + clock
                ),
                "handler": self._handle_named,
                "confidence": 0.95,
            },
            {
                "type": "day_mon_year_dashed",
                "pattern": (
                    rf"(?P<day>\d{{1,2}})-(?P<month>{month})-(?P<year>\d{{4}}|\d{{2}})" + clock
                ),
                "handler": self._handle_named,
                "confidence": 0.95,
            },
            {
                "type": "cjk_full_date",
                "pattern": (
                    r"(?P<year>\d{4})\s*年\s*(?P<month>\d{1,2})\s*月\s*(?P<day>\d{1,2})\s*[日号]"
                    + clock
                ),
                "handler": self._handle_year_first,
                "confidence": 0.95,
            },
        ]

    def _handle_year_first(self, match: re.Match, context: ParseContext,
                           zone: Optional[tzinfo]) -> datetime:
        day = validate_date(int(match.group("year")), int(match.group("month")),
                            int(match.group("day")))
        clock = parse_time(match, context.lexicon)
        return combine(day, clock, self.result_zone(context, zone))

    def _handle_numeric(self, match: re.Match, context: ParseContext,
                        zone: Optional[tzinfo]):
        a, b = int(match.group("a")), int(match.group("b"))
        year_text = match.group("year")
        source = match.group(0)

        if (len(year_text) == 2 and len(match.group("a")) == 2
                and len(match.group("b")) == 2):
            day = resolve_short_date(a, b, int(year_text), context.date_order,
                                     context.auto_detect_order, context.strict, source)
        else:
            day = resolve_day_month(a, b, expand_year(year_text), context.date_order,
                                    context.auto_detect_order, context.strict, source)

        clock = parse_time(match, context.lexicon)
        value = combine(day, clock, self.result_zone(context, zone))
        ambiguous = a <= 12 and b <= 12 and a != b
        return value, AMBIGUOUS_NUMERIC_CONFIDENCE if ambiguous else NUMERIC_CONFIDENCE

    def _handle_named(self, match: re.Match, context: ParseContext,
                      zone: Optional[tzinfo]) -> Optional[datetime]:
        month = context.lexicon.resolve_month(match.group("month"))
        day_number = int(match.group("day"))
        if month is None or day_number > 31:
            # A number above 31 next to a month name is never a day
            return None

        day = validate_date(expand_year(match.group("year")), month, day_number)
        clock = parse_time(match, context.lexicon)
        return combine(day, clock, self.result_zone(context, zone))
