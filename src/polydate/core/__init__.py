"""Core modules for polydate.

Errors, logging and configuration shared by the parsing engine, the
facade and the command line.
"""

from .error_handler import (
    AmbiguousDateError,
    ConfigurationError,
    EmptyInputError,
    ErrorSeverity,
    InvalidDateError,
    InvalidFormatError,
    PolyDateError,
)
from .logging_manager import LoggingManager

__all__ = [
    "AmbiguousDateError",
    "ConfigurationError",
    "EmptyInputError",
    "ErrorSeverity",
    "InvalidDateError",
    "InvalidFormatError",
    "LoggingManager",
    "PolyDateError",
]
