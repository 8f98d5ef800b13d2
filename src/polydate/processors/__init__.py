"""Date Processing Module

The interpretation engine and its strategies.
"""

from .core import Dispatcher, ParsedDate, TemporalExtractor
from .strategies import DateStrategy, Outcome, OutcomeKind, default_strategies

__all__ = [
    "DateStrategy",
    "Dispatcher",
    "Outcome",
    "OutcomeKind",
    "ParsedDate",
    "TemporalExtractor",
    "default_strategies",
]
