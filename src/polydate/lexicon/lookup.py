"""Lexical lookups and regex fragment builders.

The date engine never looks at a language table directly. It asks a
``Lexicon`` (an ordered, immutable selection of languages) to resolve a
token or to build an alternation that matches any known token.
"""

import re
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .language import Language

# Matches nothing; used when no selected language defines a term
NEVER = r"(?!)"

_CJK_RE = re.compile(r"[぀-ヿ㐀-䶿一-鿿豈-﫿]")


def normalize_token(token: str) -> str:
    """Lowercase a token and collapse internal whitespace."""
    return " ".join(str(token).lower().split())


def is_cjk(char: str) -> bool:
    return bool(char) and bool(_CJK_RE.match(char))


def _token_regex(token: str, compact: bool) -> str:
    body = re.escape(token).replace(r"\ ", r"\s+")
    if compact or is_cjk(token[0]):
        return body
    if token[-1].isalnum() or token[-1] == "_":
        body += r"(?!\w)"
    return body


def build_alternation(groups: Iterable[Tuple[Iterable[str], bool]]) -> str:
    """Build a non-capturing alternation from per-language token groups.

    Args:
        groups: ``(tokens, compact)`` pairs in language preference order.
            Tokens within a group are expected longest first.

    Returns:
        Regex source such as ``(?:december(?!\\w)|dec(?!\\w))``; a pattern
        that never matches when no tokens are given
    """
    seen = set()
    parts: List[str] = []
    for tokens, compact in groups:
        ordered = sorted(tokens, key=lambda token: -len(token))
        for token in ordered:
            token = normalize_token(token)
            if not token or token in seen:
                continue
            seen.add(token)
            parts.append(_token_regex(token, compact))
    if not parts:
        return NEVER
    return "(?:" + "|".join(parts) + ")"


def _lookup(token: str, tables: Iterable[Mapping[str, object]]):
    key = normalize_token(token)
    for table in tables:
        value = table.get(key)
        if value is not None:
            return value
    return None


def resolve_month(token: str, languages: Sequence[Language]) -> Optional[int]:
    """Month number (1-12) for a month name in any selected language."""
    return _lookup(token, (language.months for language in languages))


def resolve_weekday(token: str, languages: Sequence[Language]) -> Optional[int]:
    """Weekday number (0 = Monday) for a weekday name."""
    return _lookup(token, (language.weekdays for language in languages))


def normalize_time_unit(token: str, languages: Sequence[Language]) -> Optional[str]:
    """Canonical unit name ("días" -> "day")."""
    return _lookup(token, (language.units for language in languages))


def matches_relative_term(token: str, terms: Iterable[str]) -> bool:
    """Exact, case-insensitive, trimmed comparison against a term set."""
    key = normalize_token(token)
    if not key:
        return False
    return any(key == normalize_token(term) for term in terms if term)


def contains_relative_term(text: str, terms: Iterable[str]) -> bool:
    """Case-insensitive substring test against a term set."""
    haystack = normalize_token(text)
    return any(normalize_token(term) in haystack for term in terms if normalize_token(term))


def month_pattern(languages: Sequence[Language]) -> str:
    return build_alternation((language.months, language.compact) for language in languages)


def weekday_pattern(languages: Sequence[Language]) -> str:
    return build_alternation((language.weekdays, language.compact) for language in languages)


def unit_pattern(languages: Sequence[Language]) -> str:
    return build_alternation((language.units, language.compact) for language in languages)


def term_pattern(languages: Sequence[Language], key: str) -> str:
    """Alternation of the relative terms stored under ``key``."""
    return build_alternation((language.terms(key), language.compact) for language in languages)


def ordinal_pattern(languages: Sequence[Language]) -> str:
    """Alternation of ordinal words ("first", "primero", "premier")."""
    return build_alternation((language.ordinals, language.compact) for language in languages)


class Lexicon:
    """Ordered, read-only selection of languages used for one parse call.

    Lexicons compare and hash by their language codes so compiled
    strategy rules can be cached per selection.
    """

    def __init__(self, languages: Sequence[Language]):
        if not languages:
            raise ValueError("a lexicon needs at least one language")
        self._languages: Tuple[Language, ...] = tuple(languages)
        self._codes: Tuple[str, ...] = tuple(language.code for language in self._languages)

    def __repr__(self) -> str:
        return f"Lexicon({', '.join(self._codes)})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Lexicon) and other._codes == self._codes

    def __hash__(self) -> int:
        return hash(self._codes)

    @property
    def languages(self) -> Tuple[Language, ...]:
        return self._languages

    @property
    def codes(self) -> Tuple[str, ...]:
        return self._codes

    @property
    def has_compact(self) -> bool:
        return any(language.compact for language in self._languages)

    # Token resolution

    def resolve_month(self, token: str) -> Optional[int]:
        return resolve_month(token, self._languages)

    def resolve_weekday(self, token: str) -> Optional[int]:
        return resolve_weekday(token, self._languages)

    def normalize_time_unit(self, token: str) -> Optional[str]:
        return normalize_time_unit(token, self._languages)

    def resolve_number(self, token: str) -> Optional[int]:
        """Integer value of a digit string or a number word ("three", "tres")."""
        token = normalize_token(token)
        if token.isdigit():
            return int(token)
        return _lookup(token, (language.numbers for language in self._languages))

    def resolve_ordinal(self, token: str) -> Optional[int]:
        """Day number for "15th", "3.", "1er" or an ordinal word."""
        token = normalize_token(token)
        digits = re.match(r"^(\d{1,2})", token)
        if digits:
            rest = token[digits.end():]
            if not rest or any(rest == suffix for suffix in self.ordinal_suffixes):
                return int(digits.group(1))
            return None
        return _lookup(token, (language.ordinals for language in self._languages))

    def resolve_meridiem(self, token: str) -> Optional[str]:
        return _lookup(token, (language.meridiem for language in self._languages))

    def resolve_time_word(self, token: str) -> Optional[str]:
        """``noon`` or ``midnight`` for a named time of day."""
        return _lookup(token, (language.times for language in self._languages))

    def relative_kind(self, token: str, keys: Iterable[str]) -> Optional[str]:
        """First relative key whose terms contain ``token`` exactly."""
        keys = tuple(keys)
        for language in self._languages:
            for key in keys:
                if matches_relative_term(token, language.terms(key)):
                    return key
        return None

    def terms(self, key: str) -> Tuple[str, ...]:
        merged: Dict[str, None] = {}
        for language in self._languages:
            for term in language.terms(key):
                merged.setdefault(term)
        return tuple(merged)

    def connector_terms(self, key: str) -> Tuple[str, ...]:
        merged: Dict[str, None] = {}
        for language in self._languages:
            for term in language.connector_terms(key):
                merged.setdefault(term)
        return tuple(merged)

    def is_homograph(self, token: str) -> bool:
        """Whether ``token`` is a date word that is also an ordinary word."""
        token = normalize_token(token)
        return any(token in language.homographs for language in self._languages)

    @property
    def ordinal_suffixes(self) -> Tuple[str, ...]:
        merged: Dict[str, None] = {}
        for language in self._languages:
            for suffix in language.ordinal_suffixes:
                merged.setdefault(suffix)
        return tuple(sorted(merged, key=lambda suffix: -len(suffix)))

    # Pattern fragments

    def month_pattern(self) -> str:
        return month_pattern(self._languages)

    def weekday_pattern(self, min_length: int = 1) -> str:
        """Weekday alternation; ``min_length`` drops short abbreviations in spaced scripts."""
        if min_length <= 1:
            return weekday_pattern(self._languages)
        return build_alternation(
            ([token for token in language.weekdays
              if language.compact or len(token) >= min_length], language.compact)
            for language in self._languages
        )

    def unit_pattern(self) -> str:
        return unit_pattern(self._languages)

    def term_pattern(self, key: str) -> str:
        return term_pattern(self._languages, key)

    def terms_pattern(self, *keys: str) -> str:
        """One alternation over the terms of several relative keys."""
        return build_alternation(
            ([term for key in keys for term in language.terms(key)], language.compact)
            for language in self._languages
        )

    def ordinal_pattern(self) -> str:
        return ordinal_pattern(self._languages)

    def number_pattern(self) -> str:
        """Digits or a number word."""
        words = build_alternation(
            (language.numbers, language.compact) for language in self._languages
        )
        return rf"(?:\d+|{words})"

    def connector_pattern(self, key: str) -> str:
        return build_alternation(
            (language.connector_terms(key), language.compact) for language in self._languages
        )

    def meridiem_pattern(self) -> str:
        return build_alternation(
            (language.meridiem, language.compact) for language in self._languages
        )

    def time_word_pattern(self) -> str:
        return build_alternation(
            (language.times, language.compact) for language in self._languages
        )

    def week_term_pattern(self) -> str:
        return build_alternation(
            (language.week_terms, language.compact) for language in self._languages
        )

    def ordinal_suffix_pattern(self, allow_dot: bool = True) -> str:
        """Suffixes that may follow a day number; never matches when none exist.

        ``allow_dot=False`` leaves out the German "." suffix.
        """
        suffixes = [s for s in self.ordinal_suffixes if allow_dot or s != "."]
        if not suffixes:
            return NEVER
        return "(?:" + "|".join(re.escape(suffix) for suffix in suffixes) + ")"
