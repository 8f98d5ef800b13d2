"""Temporal Extractor for free text

Finds every date/time expression in arbitrary text. Each plausible start
offset is offered to the enabled strategies; the candidates are then ranked
and accepted greedily so the result never overlaps.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from ...core.config_manager import ParseContext
from ...core.error_handler import EmptyInputError
from ...core.logging_manager import LoggingManager
from ...lexicon.lookup import is_cjk
from ..strategies import DateStrategy, Outcome, default_strategies


@dataclass(frozen=True)
class ParsedDate:
    """One date expression found in text."""
    date: datetime
    position: int
    length: int
    matched_text: str
    confidence: float

    @property
    def end(self) -> int:
        return self.position + self.length

    def overlaps(self, other: "ParsedDate") -> bool:
        return self.position < other.end and other.position < self.end


class TemporalExtractor:
    """Scans text for date expressions with non-overlapping, ranked results."""

    def __init__(self, strategies: Optional[Sequence[DateStrategy]] = None):
        """Initialize temporal extractor.

        Args:
            strategies: Strategies in priority order (defaults to all seven)
        """
        self.logger = LoggingManager.get_logger(__name__)
        self.strategies: List[DateStrategy] = list(strategies or default_strategies())

    @staticmethod
    def candidate_offsets(text: str) -> List[int]:
        """Offsets where an expression may begin.

        An alphanumeric character starts a candidate when it follows a
        non-alphanumeric character, a CJK character or the start of text.
        Every CJK character is a candidate since those scripts have no spaces.
        """
        offsets = []
        previous = ""
        for index, char in enumerate(text):
            starts_token = not previous or not previous.isalnum() or is_cjk(previous)
            if is_cjk(char) or (char.isalnum() and starts_token):
                offsets.append(index)
            previous = char
        return offsets

    def find_candidates(self, text: str, context: ParseContext) -> List[ParsedDate]:
        """Every match at every candidate offset, in scan order."""
        strategies = [s for s in self.strategies if context.is_enabled(s.name)]
        candidates: List[ParsedDate] = []
        for offset in self.candidate_offsets(text):
            for strategy in strategies:
                outcome: Outcome = strategy.match_at(text, offset, context)
                # Errors at a single offset only mean "no date here"
                if not outcome.is_match:
                    continue
                matched = text[outcome.start:outcome.end]
                if self.is_lowercase_homograph(matched, context):
                    continue
                candidates.append(ParsedDate(
                    date=outcome.value,
                    position=outcome.start,
                    length=outcome.length,
                    matched_text=matched,
                    confidence=outcome.confidence,
                ))
        return candidates

    @staticmethod
    def is_lowercase_homograph(matched: str, context: ParseContext) -> bool:
        """A lone "may" or "sat" in running text is a word, not a date."""
        return not matched[:1].isupper() and context.lexicon.is_homograph(matched)

    @staticmethod
    def resolve_overlaps(candidates: Sequence[ParsedDate]) -> List[ParsedDate]:
        """Keep the longest, then most confident, then earliest non-overlapping matches.

        The sort is stable, so strategy priority breaks any remaining tie.
        """
        ranked = sorted(candidates, key=lambda c: (-c.length, -c.confidence, c.position))
        accepted: List[ParsedDate] = []
        for candidate in ranked:
            if any(candidate.overlaps(kept) for kept in accepted):
                continue
            accepted.append(candidate)
        return sorted(accepted, key=lambda c: c.position)

    def extract(self, text: str, context: ParseContext) -> List[ParsedDate]:
        """Extract all date expressions from text.

        Args:
            text: Input text
            context: Normalized parse context

        Returns:
            Non-overlapping matches sorted by position

        Raises:
            EmptyInputError: If the text is empty
        """
        if text is None or not text.strip():
            raise EmptyInputError()

        self.logger.debug("Starting temporal extraction")
        candidates = self.find_candidates(text, context)
        results = self.resolve_overlaps(candidates)
        self.logger.info(
            f"Temporal extraction complete: found {len(results)} expressions "
            f"from {len(candidates)} candidates"
        )
        return results
