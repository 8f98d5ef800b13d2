"""Error Types for polydate

Classified failures raised by the date interpretation engine. Every error
carries a displayable message and a severity, so callers can surface the
failure directly or route it through their own logging.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class PolyDateError(Exception):
    """Base exception class for polydate."""

    def __init__(self, message: str, severity: ErrorSeverity = ErrorSeverity.MEDIUM):
        self.message = message
        self.severity = severity
        super().__init__(self.message)


class ConfigurationError(PolyDateError):
    """Error raised when parser settings or config files are invalid."""

    def __init__(self, message: str):
        super().__init__(message, ErrorSeverity.HIGH)


class EmptyInputError(PolyDateError):
    """Error raised when the input text is empty."""

    def __init__(self, message: str = "empty input"):
        super().__init__(message, ErrorSeverity.LOW)


class InvalidDateError(PolyDateError):
    """Error raised when date components describe an impossible calendar date.

    Args:
        reason: Human readable description of the offending component
        components: Raw components that failed validation
    """

    def __init__(self, reason: str, components: Optional[Dict[str, Any]] = None):
        self.reason = reason
        self.components = dict(components or {})
        super().__init__(f"invalid date: {reason}")


class AmbiguousDateError(PolyDateError):
    """Error raised in strict mode when a numeric date has several valid readings."""

    def __init__(self, text: str, interpretations: List[Tuple[int, int, int]]):
        self.text = text
        self.interpretations = list(interpretations)
        readings = ", ".join(f"{y:04d}-{m:02d}-{d:02d}" for y, m, d in self.interpretations)
        super().__init__(f"ambiguous date '{text}': could be {readings}")


class InvalidFormatError(PolyDateError):
    """Error raised when no enabled strategy recognizes the input."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"unable to parse date: '{text}'")


# Failures that end the dispatch chain instead of falling through to the next strategy
SPECIFIC_ERRORS = (EmptyInputError, InvalidDateError, AmbiguousDateError)


def is_specific_error(error: Exception) -> bool:
    """Return True when the error must propagate verbatim."""
    return isinstance(error, SPECIFIC_ERRORS)
