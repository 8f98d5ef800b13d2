"""Clock time strategy: a time of day applied to the base date."""

import re
from datetime import datetime, tzinfo
from typing import Any, Dict, List, Optional

from ...core.config_manager import ParseContext
from ...lexicon.lookup import Lexicon
from .base_strategy import DateStrategy
from .fragments import combine, parse_time, time_fragment


class TimeStrategy(DateStrategy):
    """``14:30``, ``2:30:15.5 pm``, ``3pm``, noon, midnight."""

    name = "time"
    accepts_timezone = True

    def _build_rules(self, lexicon: Lexicon) -> List[Dict[str, Any]]:
        connector = lexicon.connector_pattern("time")
        return [
            {
                "type": "clock_time",
                "pattern": rf"(?:{connector}\s*)?" + time_fragment(lexicon),
                "handler": self._handle_time,
                "confidence": 0.8,
            },
        ]

    def _handle_time(self, match: re.Match, context: ParseContext,
                     zone: Optional[tzinfo]) -> Optional[datetime]:
        clock = parse_time(match, context.lexicon)
        if clock is None:
            return None
        target_zone = self.result_zone(context, zone)
        day = context.relative_base.astimezone(target_zone).date()
        return combine(day, clock, target_zone)
