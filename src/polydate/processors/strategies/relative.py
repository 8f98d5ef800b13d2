"""Relative date strategy.

Expressions anchored on the base instant: day words ("tomorrow", "ayer"),
offsets ("3 days ago", "hace 2 semanas", "3天前", compound "1 year and 2
months ago"), modified units and weekdays ("next week", "last Friday",
"lundi prochain"), bare weekdays and period edges ("end of next month").
"""

import re
from datetime import date, datetime, timedelta, tzinfo
from functools import lru_cache
from typing import Any, Dict, List, Optional

from dateutil.relativedelta import relativedelta

from ...core.config_manager import ParseContext
from ...core.error_handler import InvalidDateError
from ...lexicon.lookup import Lexicon
from ..core.calendar_math import period_bounds
from ..core.disambiguation import FUTURE, PAST, resolve_weekday
from .base_strategy import DateStrategy
from .fragments import combine, parse_time, time_suffix

DAY_WORD_OFFSETS = {
    "today": 0,
    "yesterday": -1,
    "tomorrow": 1,
    "day_after_tomorrow": 2,
    "day_before_yesterday": -2,
}

MODIFIER_STEPS = {"next": 1, "last": -1, "this": 0}

DIRECTION_KEYS = ("ago_prefix", "ago_suffix", "future_prefix", "future_suffix")

PERIOD_UNITS = ("week", "month", "quarter", "year")


def unit_delta(unit: str, amount: int) -> relativedelta:
    """relativedelta for ``amount`` canonical units."""
    if unit == "quarter":
        return relativedelta(months=3 * amount)
    return relativedelta(**{f"{unit}s": amount})


@lru_cache(maxsize=32)
def _quantity_regex(lexicon: Lexicon) -> "re.Pattern":
    return re.compile(
        rf"(?P<amount>{lexicon.number_pattern()})\s*(?P<unit>{lexicon.unit_pattern()})",
        re.IGNORECASE,
    )


class RelativeDateStrategy(DateStrategy):
    """Dates relative to the base instant."""

    name = "relative"

    def _build_rules(self, lexicon: Lexicon) -> List[Dict[str, Any]]:
        unit = lexicon.unit_pattern()
        weekday = lexicon.weekday_pattern()
        bare_weekday = lexicon.weekday_pattern(min_length=3)
        number = lexicon.number_pattern()
        article = rf"(?:{lexicon.connector_pattern('article')}\s+)?"
        modifier = lexicon.terms_pattern("next", "last", "this")
        postfix_modifier = lexicon.terms_pattern("next", "last")
        day_words = lexicon.terms_pattern(*DAY_WORD_OFFSETS)
        list_connector = lexicon.connector_pattern("list")
        clock = time_suffix(lexicon)

        quantity = rf"{number}\s*{unit}"
        amounts = rf"(?P<amounts>{quantity}(?:\s*,?\s*(?:{list_connector}\s+)?{quantity})*)"

        return [
            {
                "type": "now",
                "pattern": rf"(?P<now>{lexicon.term_pattern('now')})",
                "handler": self._handle_now,
                "confidence": 0.95,
            },
            {
                "type": "day_word",
                "pattern": rf"(?P<word>{day_words})" + clock,
                "handler": self._handle_day_word,
                "confidence": 0.95,
            },
            {
                "type": "offset_suffix",
                "pattern": (
                    amounts
                    + rf"\s*(?P<direction>{lexicon.terms_pattern('ago_suffix', 'future_suffix')})"
                ),
                "handler": self._handle_offset,
                "confidence": 0.9,
            },
            {
                "type": "offset_prefix",
                "pattern": (
                    rf"(?P<direction>{lexicon.terms_pattern('ago_prefix', 'future_prefix')})\s*"
                    + amounts
                ),
                "handler": self._handle_offset,
                "confidence": 0.9,
            },
            {
                "type": "period_edge",
                "pattern": (
                    rf"(?P<edge>{lexicon.terms_pattern('period_start', 'period_end')})\s*"
                    + article
                    + rf"(?:(?P<modifier>{modifier})\s*)?(?P<unit>{unit})"
                ),
                "handler": self._handle_period,
                "confidence": 0.9,
            },
            {
                "type": "modified_unit",
                "pattern": article + rf"(?P<modifier>{modifier})\s*(?P<unit>{unit})",
                "handler": self._handle_modified_unit,
                "confidence": 0.9,
            },
            {
                "type": "modified_unit_postfix",
                "pattern": article + rf"(?P<unit>{unit})\s+(?P<modifier>{postfix_modifier})",
                "handler": self._handle_modified_unit,
                "confidence": 0.9,
            },
            {
                "type": "modified_weekday",
                "pattern": article + rf"(?P<modifier>{modifier})\s*(?P<weekday>{weekday})" + clock,
                "handler": self._handle_weekday,
                "confidence": 0.85,
            },
            {
                "type": "modified_weekday_postfix",
                "pattern": (
                    article + rf"(?P<weekday>{weekday})\s+(?P<modifier>{postfix_modifier})" + clock
                ),
                "handler": self._handle_weekday,
                "confidence": 0.85,
            },
            {
                "type": "bare_weekday",
                "pattern": article + rf"(?P<weekday>{bare_weekday})" + clock,
                "handler": self._handle_weekday,
                "confidence": 0.7,
            },
        ]

    def _handle_now(self, match: re.Match, context: ParseContext,
                    zone: Optional[tzinfo]) -> datetime:
        return context.relative_base

    def _handle_day_word(self, match: re.Match, context: ParseContext,
                         zone: Optional[tzinfo]) -> Optional[datetime]:
        kind = context.lexicon.relative_kind(match.group("word"), DAY_WORD_OFFSETS)
        if kind is None:
            return None
        day = context.relative_base.date() + timedelta(days=DAY_WORD_OFFSETS[kind])
        return combine(day, parse_time(match, context.lexicon), context.tzinfo)

    def _handle_offset(self, match: re.Match, context: ParseContext,
                       zone: Optional[tzinfo]) -> Optional[datetime]:
        """Sum every ``<amount> <unit>`` pair and apply it in the matched direction."""
        lexicon = context.lexicon
        kind = lexicon.relative_kind(match.group("direction"), DIRECTION_KEYS)
        if kind is None:
            return None
        sign = -1 if kind.startswith("ago") else 1

        delta = relativedelta()
        for quantity in _quantity_regex(lexicon).finditer(match.group("amounts")):
            amount = lexicon.resolve_number(quantity.group("amount"))
            unit = lexicon.normalize_time_unit(quantity.group("unit"))
            if amount is None or unit is None:
                return None
            delta += unit_delta(unit, amount)

        return self._shift(context.relative_base, delta, sign)

    def _handle_modified_unit(self, match: re.Match, context: ParseContext,
                              zone: Optional[tzinfo]) -> Optional[datetime]:
        lexicon = context.lexicon
        kind = lexicon.relative_kind(match.group("modifier"), MODIFIER_STEPS)
        unit = lexicon.normalize_time_unit(match.group("unit"))
        if kind is None or unit is None:
            return None
        return self._shift(context.relative_base, unit_delta(unit, 1), MODIFIER_STEPS[kind])

    def _handle_weekday(self, match: re.Match, context: ParseContext,
                        zone: Optional[tzinfo]) -> Optional[datetime]:
        lexicon = context.lexicon
        weekday = lexicon.resolve_weekday(match.group("weekday"))
        if weekday is None:
            return None

        modifier = None
        if match.groupdict().get("modifier"):
            modifier = lexicon.relative_kind(match.group("modifier"), MODIFIER_STEPS)
            if modifier is None:
                return None

        direction = PAST if context.prefers_past else FUTURE
        day = resolve_weekday(context.relative_base, weekday, direction, modifier)
        return combine(day, parse_time(match, lexicon), context.tzinfo)

    def _handle_period(self, match: re.Match, context: ParseContext,
                       zone: Optional[tzinfo]) -> Optional[datetime]:
        """Start or end of the current, next or previous week/month/quarter/year."""
        lexicon = context.lexicon
        unit = lexicon.normalize_time_unit(match.group("unit"))
        edge = lexicon.relative_kind(match.group("edge"), ("period_start", "period_end"))
        if unit not in PERIOD_UNITS or edge is None:
            return None

        step = 0
        if match.group("modifier"):
            kind = lexicon.relative_kind(match.group("modifier"), MODIFIER_STEPS)
            if kind is None:
                return None
            step = MODIFIER_STEPS[kind]

        reference: date = context.relative_base.date() + unit_delta(unit, step)
        start, end = period_bounds(reference, unit)
        return combine(start if edge == "period_start" else end, None, context.tzinfo)

    @staticmethod
    def _shift(base: datetime, delta: relativedelta, sign: int) -> datetime:
        try:
            return base + delta * sign
        except (OverflowError, ValueError):
            raise InvalidDateError("relative offset leaves the supported calendar range")
