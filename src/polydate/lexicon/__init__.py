"""Language tables, lexical lookups and timezone designators."""

from .language import Language
from .lookup import (
    Lexicon,
    build_alternation,
    contains_relative_term,
    is_cjk,
    matches_relative_term,
    month_pattern,
    normalize_time_unit,
    ordinal_pattern,
    resolve_month,
    resolve_weekday,
    term_pattern,
    unit_pattern,
    weekday_pattern,
)
from .registry import LanguageRegistry, default_registry
from .timezones import extract_timezone, resolve_timezone

__all__ = [
    "Language",
    "LanguageRegistry",
    "Lexicon",
    "build_alternation",
    "contains_relative_term",
    "default_registry",
    "extract_timezone",
    "is_cjk",
    "matches_relative_term",
    "month_pattern",
    "normalize_time_unit",
    "ordinal_pattern",
    "resolve_month",
    "resolve_timezone",
    "resolve_weekday",
    "term_pattern",
    "unit_pattern",
    "weekday_pattern",
]
