"""Date interpretation engine.

Calendar arithmetic, the disambiguation policy, the dispatch loop for
single-value parsing and the extractor for free text.
"""

from . import calendar_math, disambiguation
from .dispatcher import Dispatcher
from .temporal_extractor import ParsedDate, TemporalExtractor

__all__ = [
    "Dispatcher",
    "ParsedDate",
    "TemporalExtractor",
    "calendar_math",
    "disambiguation",
]
