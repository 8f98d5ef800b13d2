"""Ordinal date strategy: "15th", "the 3rd of March", "primero de mayo", ``2024-075``."""

import re
from datetime import datetime, tzinfo
from typing import Any, Dict, List, Optional

from ...core.config_manager import ParseContext
from ...lexicon.lookup import Lexicon
from ..core.calendar_math import day_of_year_to_date, validate_date
from ..core.disambiguation import FUTURE, PAST, resolve_bare_day, resolve_month_day
from .base_strategy import DateStrategy
from .fragments import combine, parse_time, time_suffix


class OrdinalDateStrategy(DateStrategy):
    """Ordinal day numbers, with or without a month, and ISO ordinal dates."""

    name = "ordinal"

    def _build_rules(self, lexicon: Lexicon) -> List[Dict[str, Any]]:
        month = lexicon.month_pattern()
        article = lexicon.connector_pattern("article")
        connector = lexicon.connector_pattern("date")
        words = lexicon.ordinal_pattern()
        clock = time_suffix(lexicon)

        # "3rd", "3.", "1er", "1º" or an ordinal word
        ordinal = rf"(?:\d{{1,2}}{lexicon.ordinal_suffix_pattern()}|{words})"
        # A trailing "." alone is too weak without a month next to it
        bare_ordinal = rf"\d{{1,2}}{lexicon.ordinal_suffix_pattern(allow_dot=False)}"
        year = r"(?:(?:\s*,\s*|\s+)(?:{connector}\s+)?(?P<year>\d{{4}}))?".format(
            connector=connector
        )

        return [
            {
                "type": "iso_ordinal",
                "pattern": r"(?P<year>\d{4})-(?P<doy>\d{3})",
                "handler": self._handle_iso_ordinal,
                "confidence": 1.0,
            },
            {
                "type": "month_ordinal",
                "pattern": (
                    rf"(?P<month>{month})\.?\s+(?:{article}\s+)?(?P<day>{ordinal})" + year + clock
                ),
                "handler": self._handle_with_month,
                "confidence": 0.85,
            },
            {
                "type": "ordinal_of_month",
                "pattern": (
                    rf"(?:{article}\s+)?(?P<day>{ordinal})\s*(?:{connector}\s+)?(?P<month>{month})\.?"
                    + year + clock
                ),
                "handler": self._handle_with_month,
                "confidence": 0.85,
            },
            {
                "type": "bare_ordinal",
                "pattern": rf"(?:{article}\s+)?(?P<day>{bare_ordinal})" + clock,
                "handler": self._handle_bare,
                "confidence": 0.7,
            },
            {
                "type": "bare_ordinal_word",
                "pattern": rf"{article}\s+(?P<day>{words})" + clock,
                "handler": self._handle_bare,
                "confidence": 0.7,
            },
        ]

    @staticmethod
    def _direction(context: ParseContext) -> str:
        return PAST if context.prefers_past else FUTURE

    def _handle_iso_ordinal(self, match: re.Match, context: ParseContext,
                            zone: Optional[tzinfo]) -> datetime:
        day = day_of_year_to_date(int(match.group("year")), int(match.group("doy")))
        return combine(day, None, context.tzinfo)

    def _handle_with_month(self, match: re.Match, context: ParseContext,
                           zone: Optional[tzinfo]) -> Optional[datetime]:
        lexicon = context.lexicon
        month = lexicon.resolve_month(match.group("month"))
        day_number = lexicon.resolve_ordinal(match.group("day"))
        if month is None or day_number is None or day_number > 31:
            return None

        if match.group("year"):
            day = validate_date(int(match.group("year")), month, day_number)
        else:
            day = resolve_month_day(context.relative_base, month, day_number,
                                    self._direction(context))
        return combine(day, parse_time(match, lexicon), context.tzinfo)

    def _handle_bare(self, match: re.Match, context: ParseContext,
                     zone: Optional[tzinfo]) -> Optional[datetime]:
        day_number = context.lexicon.resolve_ordinal(match.group("day"))
        if day_number is None:
            return None
        day = resolve_bare_day(context.relative_base, day_number, self._direction(context))
        return combine(day, parse_time(match, context.lexicon), context.tzinfo)
