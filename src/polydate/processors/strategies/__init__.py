"""Date strategies, one per syntactic family.

``default_strategies()`` returns them in dispatch priority order.
"""

from typing import List

from .absolute import AbsoluteDateStrategy
from .base_strategy import DateStrategy, Outcome, OutcomeKind
from .clock_time import TimeStrategy
from .incomplete import IncompleteDateStrategy
from .ordinal import OrdinalDateStrategy
from .relative import RelativeDateStrategy
from .timestamp import TimestampStrategy
from .week_date import WeekDateStrategy


def default_strategies() -> List[DateStrategy]:
    """Fresh strategy instances: timestamp, absolute, relative, time, incomplete, ordinal, week."""
    return [
        TimestampStrategy(),
        AbsoluteDateStrategy(),
        RelativeDateStrategy(),
        TimeStrategy(),
        IncompleteDateStrategy(),
        OrdinalDateStrategy(),
        WeekDateStrategy(),
    ]


__all__ = [
    "AbsoluteDateStrategy",
    "DateStrategy",
    "IncompleteDateStrategy",
    "OrdinalDateStrategy",
    "Outcome",
    "OutcomeKind",
    "RelativeDateStrategy",
    "TimeStrategy",
    "TimestampStrategy",
    "WeekDateStrategy",
    "default_strategies",
]
