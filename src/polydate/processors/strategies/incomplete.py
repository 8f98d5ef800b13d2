"""Incomplete date strategy.

Dates missing a component: month and day without a year, month and year,
a bare month or year, quarters and half years. Missing parts come from the
base instant and the direction preference.
"""

import re
from datetime import datetime, tzinfo
from typing import Any, Dict, List, Optional

from ...core.config_manager import ParseContext
from ...lexicon.lookup import Lexicon
from ..core.calendar_math import half_start, quarter_start, validate_date
from ..core.disambiguation import FUTURE, PAST, resolve_bare_month, resolve_month_day
from .base_strategy import DateStrategy
from .fragments import combine, parse_time, time_suffix


class IncompleteDateStrategy(DateStrategy):
    """Partial calendar references."""

    name = "incomplete"

    def _build_rules(self, lexicon: Lexicon) -> List[Dict[str, Any]]:
        month = lexicon.month_pattern()
        connector = lexicon.connector_pattern("date")
        clock = time_suffix(lexicon)

        return [
            {
                # Exactly four digits after a month name is a year, never a day
                "type": "month_year",
                "pattern": rf"(?P<month>{month})\.?,?\s*(?:{connector}\s+)?(?P<year>\d{{4}})(?!\d)",
                "handler": self._handle_month_year,
                "confidence": 0.7,
            },
            {
                "type": "month_day",
                "pattern": rf"(?P<month>{month})\.?\s*(?P<day>\d{{1,2}})(?!\d)" + clock,
                "handler": self._handle_month_day,
                "confidence": 0.75,
            },
            {
                "type": "day_month",
                "pattern": rf"(?P<day>\d{{1,2}})\s*(?:{connector}\s+)?(?P<month>{month})\.?" + clock,
                "handler": self._handle_month_day,
                "confidence": 0.75,
            },
            {
                "type": "cjk_month_day",
                "pattern": r"(?P<month>\d{1,2})\s*月\s*(?P<day>\d{1,2})\s*[日号]" + clock,
                "handler": self._handle_month_day,
                "confidence": 0.75,
            },
            {
                "type": "cjk_year_month",
                "pattern": r"(?P<year>\d{4})\s*年\s*(?P<month>\d{1,2})\s*月",
                "handler": self._handle_month_year,
                "confidence": 0.7,
            },
            {
                "type": "quarter",
                "pattern": r"[Qq](?P<quarter>\d)(?:\s*[/\-]?\s*(?P<year>\d{4}))?",
                "handler": self._handle_quarter,
                "confidence": 0.7,
            },
            {
                "type": "year_quarter",
                "pattern": r"(?P<year>\d{4})\s*-?\s*[Qq](?P<quarter>\d)",
                "handler": self._handle_quarter,
                "confidence": 0.7,
            },
            {
                "type": "half_year",
                "pattern": r"[Hh](?P<half>[12])(?:\s*[/\-]?\s*(?P<year>\d{4}))?",
                "handler": self._handle_half,
                "confidence": 0.7,
            },
            {
                "type": "year_half",
                "pattern": r"(?P<year>\d{4})\s*-?\s*[Hh](?P<half>[12])",
                "handler": self._handle_half,
                "confidence": 0.7,
            },
            {
                "type": "bare_month",
                "pattern": rf"(?P<month>{month})\.?",
                "handler": self._handle_bare_month,
                "confidence": 0.6,
            },
            {
                "type": "cjk_month",
                "pattern": r"(?P<month>\d{1,2})\s*月",
                "handler": self._handle_bare_month,
                "confidence": 0.6,
            },
            {
                "type": "bare_year",
                "pattern": r"(?P<year>[1-9]\d{3})",
                "handler": self._handle_bare_year,
                "confidence": 0.5,
            },
        ]

    @staticmethod
    def _month_number(match: re.Match, context: ParseContext) -> Optional[int]:
        token = match.group("month")
        if token.isdigit():
            return int(token)
        return context.lexicon.resolve_month(token)

    @staticmethod
    def _direction(context: ParseContext) -> str:
        return PAST if context.prefers_past else FUTURE

    def _handle_month_day(self, match: re.Match, context: ParseContext,
                          zone: Optional[tzinfo]) -> Optional[datetime]:
        month = self._month_number(match, context)
        day_number = int(match.group("day"))
        if month is None or day_number > 31:
            return None
        day = resolve_month_day(context.relative_base, month, day_number,
                                self._direction(context))
        return combine(day, parse_time(match, context.lexicon), context.tzinfo)

    def _handle_month_year(self, match: re.Match, context: ParseContext,
                           zone: Optional[tzinfo]) -> Optional[datetime]:
        month = self._month_number(match, context)
        if month is None:
            return None
        day = validate_date(int(match.group("year")), month, 1)
        return combine(day, None, context.tzinfo)

    def _handle_bare_month(self, match: re.Match, context: ParseContext,
                           zone: Optional[tzinfo]) -> Optional[datetime]:
        month = self._month_number(match, context)
        if month is None:
            return None
        day = resolve_bare_month(context.relative_base, month, self._direction(context))
        return combine(day, None, context.tzinfo)

    def _handle_bare_year(self, match: re.Match, context: ParseContext,
                          zone: Optional[tzinfo]) -> datetime:
        day = validate_date(int(match.group("year")), 1, 1)
        return combine(day, None, context.tzinfo)

    def _handle_quarter(self, match: re.Match, context: ParseContext,
                        zone: Optional[tzinfo]) -> datetime:
        year = int(match.group("year")) if match.group("year") else context.relative_base.year
        day = quarter_start(year, int(match.group("quarter")))
        return combine(day, None, context.tzinfo)

    def _handle_half(self, match: re.Match, context: ParseContext,
                     zone: Optional[tzinfo]) -> datetime:
        year = int(match.group("year")) if match.group("year") else context.relative_base.year
        day = half_start(year, int(match.group("half")))
        return combine(day, None, context.tzinfo)
