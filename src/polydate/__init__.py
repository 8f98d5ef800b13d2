"""polydate - Multilingual Date Parser

Converts free-form date and time expressions in ten languages into
timezone-aware datetimes, and finds such expressions in free text.
"""

__version__ = "0.1.0"
__author__ = "polydate Team"
__description__ = "Multilingual date and time expression parser"

from .core.config_manager import ConfigManager, DateOrder, ParserSettings
from .core.error_handler import (
    AmbiguousDateError,
    ConfigurationError,
    EmptyInputError,
    ErrorSeverity,
    InvalidDateError,
    InvalidFormatError,
    PolyDateError,
)
from .parser import DateParser, extract_dates, parse_date
from .processors.core.temporal_extractor import ParsedDate

__all__ = [
    "AmbiguousDateError",
    "ConfigManager",
    "ConfigurationError",
    "DateOrder",
    "DateParser",
    "EmptyInputError",
    "ErrorSeverity",
    "InvalidDateError",
    "InvalidFormatError",
    "ParsedDate",
    "ParserSettings",
    "PolyDateError",
    "extract_dates",
    "parse_date",
]
