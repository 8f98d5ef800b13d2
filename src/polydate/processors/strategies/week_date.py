"""ISO week date strategy: ``2024-W15-3``, ``2024W153``, ``W15 2024``, ``week 15``, ``KW 15``."""

import re
from datetime import datetime, tzinfo
from typing import Any, Dict, List, Optional

from ...core.config_manager import ParseContext
from ...lexicon.lookup import Lexicon
from ..core.calendar_math import date_to_iso_week, iso_week_to_date
from .base_strategy import DateStrategy
from .fragments import combine


class WeekDateStrategy(DateStrategy):
    """ISO week dates; Monday when no weekday is given."""

    name = "week"

    def _build_rules(self, lexicon: Lexicon) -> List[Dict[str, Any]]:
        article = lexicon.connector_pattern("article")
        week_terms = lexicon.week_term_pattern()
        return [
            {
                "type": "iso_week",
                "pattern": r"(?P<year>\d{4})-W(?P<week>\d{2})(?:-(?P<weekday>\d))?",
                "handler": self._handle_week,
                "confidence": 0.9,
            },
            {
                "type": "iso_week_basic",
                "pattern": r"(?P<year>\d{4})W(?P<week>\d{2})(?P<weekday>\d)?",
                "handler": self._handle_week,
                "confidence": 0.9,
            },
            {
                "type": "week_year",
                "pattern": r"W(?P<week>\d{1,2})(?:\s*[/\-]?\s*(?P<year>\d{4}))?",
                "handler": self._handle_week,
                "confidence": 0.9,
            },
            {
                "type": "week_term",
                "pattern": (
                    rf"(?:{article}\s+)?{week_terms}\.?\s*(?P<week>\d{{1,2}})"
                    r"(?:(?:\s*[,/]\s*|\s+)(?P<year>\d{4}))?"
                ),
                "handler": self._handle_week,
                "confidence": 0.9,
            },
        ]

    def _handle_week(self, match: re.Match, context: ParseContext,
                     zone: Optional[tzinfo]) -> datetime:
        if match.group("year"):
            year = int(match.group("year"))
        else:
            year = date_to_iso_week(context.relative_base.date())[0]
        weekday_text = match.groupdict().get("weekday")
        weekday = int(weekday_text) if weekday_text else 1
        day = iso_week_to_date(year, int(match.group("week")), weekday)
        return combine(day, None, context.tzinfo)
