"""Dispatch orchestrator.

Runs the enabled strategies in priority order against one input. The
first strategy that consumes the whole input wins; a terminal error from
any strategy ends the loop; if nothing matches the input is reported as an
unrecognized format.
"""

from datetime import datetime
from typing import List, Optional, Sequence

from ...core.config_manager import PARSER_NAMES, ParseContext
from ...core.error_handler import EmptyInputError, InvalidFormatError
from ...core.logging_manager import LoggingManager
from ..strategies import DateStrategy, Outcome, OutcomeKind, default_strategies


class Dispatcher:
    """Ordered strategy loop for single-value parsing."""

    def __init__(self, strategies: Optional[Sequence[DateStrategy]] = None):
        """Initialize dispatcher.

        Args:
            strategies: Strategies in priority order (defaults to all seven)
        """
        self.logger = LoggingManager.get_logger(__name__)
        self.strategies: List[DateStrategy] = list(strategies or default_strategies())
        unknown = [s.name for s in self.strategies if s.name not in PARSER_NAMES]
        if unknown:
            raise ValueError(f"unknown strategy names: {unknown}")

    def enabled(self, context: ParseContext) -> List[DateStrategy]:
        return [strategy for strategy in self.strategies if context.is_enabled(strategy.name)]

    def run(self, text: str, context: ParseContext) -> Outcome:
        """Try each enabled strategy and return the first MATCH or ERROR outcome."""
        for strategy in self.enabled(context):
            outcome = strategy.attempt(text, context)
            if outcome.kind is OutcomeKind.NO_MATCH:
                continue
            self.logger.debug(
                f"'{text}' -> {strategy.name}: {outcome.kind.value}"
                + (f" ({outcome.rule})" if outcome.rule else "")
            )
            return outcome
        return Outcome.no_match()

    def dispatch(self, text: str, context: ParseContext) -> datetime:
        """Parse ``text`` into a single datetime.

        Args:
            text: Input text
            context: Normalized parse context

        Returns:
            Timezone-aware datetime

        Raises:
            EmptyInputError: If the input is empty or whitespace
            InvalidDateError: If a strategy recognized an impossible date
            AmbiguousDateError: In strict mode for ambiguous numeric dates
            InvalidFormatError: If no strategy recognized the input
        """
        if text is None or not text.strip():
            raise EmptyInputError()

        outcome = self.run(text, context)
        if outcome.is_error:
            raise outcome.error
        if outcome.is_match:
            return outcome.value
        raise InvalidFormatError(text.strip())
