"""Base Strategy Class for polydate

Abstract base class for the date strategies. A strategy is a table of
regex rules, each paired with a handler that turns the match into a
datetime. Strategies never raise to their callers: every attempt returns a
tagged ``Outcome``.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, tzinfo
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple

from ...core.config_manager import ParseContext
from ...core.error_handler import PolyDateError, is_specific_error
from ...core.logging_manager import LoggingManager
from ...lexicon.lookup import Lexicon
from ...lexicon.timezones import extract_timezone
from .fragments import TOKEN_END


class OutcomeKind(Enum):
    """Result kinds of a strategy attempt."""
    MATCH = "match"
    NO_MATCH = "no_match"
    ERROR = "error"


@dataclass(frozen=True)
class Outcome:
    """Tagged result of one strategy attempt."""
    kind: OutcomeKind
    value: Optional[datetime] = None
    start: int = 0
    end: int = 0
    confidence: float = 0.0
    strategy: str = ""
    rule: str = ""
    error: Optional[PolyDateError] = None

    @classmethod
    def match(cls, value: datetime, start: int, end: int, confidence: float,
              strategy: str = "", rule: str = "") -> "Outcome":
        return cls(OutcomeKind.MATCH, value, start, end, confidence, strategy, rule)

    @classmethod
    def no_match(cls) -> "Outcome":
        return _NO_MATCH

    @classmethod
    def failure(cls, error: PolyDateError, strategy: str = "") -> "Outcome":
        return cls(OutcomeKind.ERROR, strategy=strategy, error=error)

    @property
    def is_match(self) -> bool:
        return self.kind is OutcomeKind.MATCH

    @property
    def is_error(self) -> bool:
        return self.kind is OutcomeKind.ERROR

    @property
    def length(self) -> int:
        return self.end - self.start


_NO_MATCH = Outcome(OutcomeKind.NO_MATCH)


@lru_cache(maxsize=512)
def _compile_rule(source: str) -> Tuple["re.Pattern", "re.Pattern"]:
    """Whole-input and token-bounded scan regexes for a rule pattern."""
    return (
        re.compile(source, re.IGNORECASE),
        re.compile(rf"(?:{source}){TOKEN_END}", re.IGNORECASE),
    )


class DateStrategy(ABC):
    """Abstract base class for date strategies.

    Subclasses provide ``name`` and ``_build_rules``. Rules are dicts with
    ``type``, ``pattern`` (regex source), ``handler`` and ``confidence``;
    they are compiled once per lexicon.
    """

    name: str = ""

    # Whether a timezone designator may follow a match
    accepts_timezone: bool = False

    def __init__(self):
        self.logger = LoggingManager.get_logger(self.__class__.__module__)
        self._compiled: Dict[Lexicon, List[Dict[str, Any]]] = {}

    @abstractmethod
    def _build_rules(self, lexicon: Lexicon) -> List[Dict[str, Any]]:
        """Return the rule table for a lexicon."""

    def rules(self, lexicon: Lexicon) -> List[Dict[str, Any]]:
        """Compiled rules for ``lexicon``.

        Each rule gets a ``full`` regex for whole-input matching and a
        ``scan`` regex that must end on a token boundary.
        """
        compiled = self._compiled.get(lexicon)
        if compiled is None:
            compiled = []
            for rule in self._build_rules(lexicon):
                full, scan = _compile_rule(rule["pattern"])
                compiled.append({**rule, "full": full, "scan": scan})
            self._compiled[lexicon] = compiled
        return compiled

    def attempt(self, text: str, context: ParseContext) -> Outcome:
        """Interpret the whole (trimmed) input.

        Args:
            text: Input text
            context: Normalized parse context

        Returns:
            MATCH covering the entire input, NO_MATCH, or ERROR
        """
        stripped = text.strip()
        if not stripped:
            return Outcome.no_match()

        for rule in self.rules(context.lexicon):
            match = rule["full"].fullmatch(stripped)
            zone = None
            if match is None:
                if not (self.accepts_timezone and context.timezone_enabled):
                    continue
                match = rule["scan"].match(stripped)
                if match is None:
                    continue
                found = extract_timezone(stripped, match.end())
                if found is None or match.end() + found[1] != len(stripped):
                    continue
                zone = found[0]

            outcome = self._apply(rule, match, context, zone, 0, len(stripped))
            if outcome.kind is not OutcomeKind.NO_MATCH:
                return outcome

        return Outcome.no_match()

    def match_at(self, text: str, pos: int, context: ParseContext) -> Outcome:
        """Longest match starting at ``pos`` that ends on a token boundary.

        Args:
            text: Full text being scanned
            pos: Start offset
            context: Normalized parse context

        Returns:
            Best MATCH for this offset, an ERROR if only errors were found,
            otherwise NO_MATCH
        """
        best: Optional[Outcome] = None
        error: Optional[Outcome] = None

        for rule in self.rules(context.lexicon):
            match = rule["scan"].match(text, pos)
            if match is None or match.end() == pos:
                continue

            end = match.end()
            zone = None
            if self.accepts_timezone and context.timezone_enabled:
                found = extract_timezone(text, end)
                if found is not None:
                    zone, end = found[0], end + found[1]

            outcome = self._apply(rule, match, context, zone, pos, end)
            if outcome.is_match:
                if best is None or outcome.length > best.length or (
                    outcome.length == best.length and outcome.confidence > best.confidence
                ):
                    best = outcome
            elif outcome.is_error and error is None:
                error = outcome

        if best is not None:
            return best
        return error or Outcome.no_match()

    def _apply(self, rule: Dict[str, Any], match: re.Match, context: ParseContext,
               zone: Optional[tzinfo], start: int, end: int) -> Outcome:
        """Run a rule handler and wrap its result."""
        try:
            value = rule["handler"](match, context, zone)
        except PolyDateError as e:
            if is_specific_error(e):
                self.logger.debug(f"{self.name}/{rule['type']} rejected '{match.group(0)}': {e}")
                return Outcome.failure(e, self.name)
            raise

        if value is None:
            return Outcome.no_match()
        confidence = rule["confidence"]
        # Handlers may refine the static confidence for the matched components
        if isinstance(value, tuple):
            value, confidence = value
        return Outcome.match(value, start, end, confidence, self.name, rule["type"])

    @staticmethod
    def result_zone(context: ParseContext, zone: Optional[tzinfo]) -> tzinfo:
        """Extracted timezone when present, else the preferred one."""
        return zone if zone is not None else context.tzinfo
