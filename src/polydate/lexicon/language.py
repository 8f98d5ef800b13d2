"""Language vocabulary tables.

A ``Language`` is pure data: month names, weekday names, relative terms,
time units and the few structural flags that differ between scripts. All
mappings are read-only so one instance can be shared between threads.
"""

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Tuple, Union

import yaml

from ..core.error_handler import ConfigurationError

RELATIVE_KEYS = (
    "now",
    "today",
    "yesterday",
    "tomorrow",
    "day_after_tomorrow",
    "day_before_yesterday",
    "next",
    "last",
    "this",
    "ago_prefix",
    "ago_suffix",
    "future_prefix",
    "future_suffix",
    "period_start",
    "period_end",
)

CONNECTOR_KEYS = ("date", "time", "list", "article")

CANONICAL_UNITS = ("second", "minute", "hour", "day", "week", "month", "quarter", "year")


def _longest_first(tokens: Iterable[str]) -> Tuple[str, ...]:
    """Deduplicate tokens and order them longest first."""
    unique = {str(token).strip().lower() for token in tokens if str(token).strip()}
    return tuple(sorted(unique, key=lambda token: (-len(token), token)))


def _invert(table: Mapping[Any, Iterable[str]], key_type=int) -> Mapping[str, Any]:
    """Turn ``{value: [tokens]}`` into a read-only ``{token: value}`` mapping."""
    inverted: Dict[str, Any] = {}
    for value, tokens in (table or {}).items():
        for token in tokens or ():
            normalized = str(token).strip().lower()
            if normalized and normalized not in inverted:
                inverted[normalized] = key_type(value)
    ordered = {token: inverted[token] for token in _longest_first(inverted)}
    return MappingProxyType(ordered)


@dataclass(frozen=True)
class Language:
    """Vocabulary for one language."""
    code: str
    name: str
    compact: bool = False
    months: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    weekdays: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    relative: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    units: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    numbers: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    ordinals: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    ordinal_suffixes: Tuple[str, ...] = ()
    times: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    meridiem: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    connectors: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    week_terms: Tuple[str, ...] = ()
    homographs: frozenset = frozenset()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Language":
        """Build a language from a parsed YAML document.

        Args:
            data: Mapping with the keys used in ``languages/*.yaml``

        Returns:
            Immutable language instance

        Raises:
            ConfigurationError: If the document lacks a code or uses unknown units
        """
        code = str(data.get("code") or "").strip().lower()
        if not code:
            raise ConfigurationError("language table is missing its 'code'")

        relative_table = data.get("relative") or {}
        unknown = set(relative_table) - set(RELATIVE_KEYS)
        if unknown:
            raise ConfigurationError(
                f"language '{code}' has unknown relative keys: {sorted(unknown)}"
            )

        units_table = data.get("units") or {}
        bad_units = set(units_table) - set(CANONICAL_UNITS)
        if bad_units:
            raise ConfigurationError(f"language '{code}' has unknown units: {sorted(bad_units)}")

        connectors_table = data.get("connectors") or {}

        return cls(
            code=code,
            name=str(data.get("name") or code),
            compact=bool(data.get("compact", False)),
            months=_invert(data.get("months")),
            weekdays=_invert(data.get("weekdays")),
            relative=MappingProxyType({
                key: _longest_first(relative_table.get(key) or ()) for key in RELATIVE_KEYS
            }),
            units=_invert(units_table, key_type=str),
            numbers=_invert(data.get("numbers")),
            ordinals=_invert(data.get("ordinals")),
            ordinal_suffixes=_longest_first(data.get("ordinal_suffixes") or ()),
            times=_invert(data.get("times"), key_type=str),
            meridiem=_invert(data.get("meridiem"), key_type=str),
            connectors=MappingProxyType({
                key: _longest_first(connectors_table.get(key) or ()) for key in CONNECTOR_KEYS
            }),
            week_terms=_longest_first(data.get("week_terms") or ()),
            homographs=frozenset(
                " ".join(str(word).lower().split()) for word in data.get("homographs") or ()
            ),
        )

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "Language":
        """Load a language table from a YAML file."""
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"cannot load language table {path}: {e}")
        if not isinstance(data, dict):
            raise ConfigurationError(f"language table {path} is not a mapping")
        return cls.from_mapping(data)

    def terms(self, key: str) -> Tuple[str, ...]:
        """Relative terms registered under ``key`` (``today``, ``next``, ``ago_suffix``...)."""
        return self.relative.get(key, ())

    def connector_terms(self, key: str) -> Tuple[str, ...]:
        return self.connectors.get(key, ())

    def detection_vocabulary(self) -> FrozenSet[str]:
        """Tokens that identify this language during detection.

        Units and connectors are left out: they are short and shared
        between languages too often to be a useful signal.
        """
        words = set(self.months) | set(self.weekdays)
        for key in ("now", "today", "yesterday", "tomorrow", "day_after_tomorrow",
                    "day_before_yesterday", "next", "last", "this",
                    "ago_prefix", "ago_suffix", "future_prefix", "future_suffix"):
            words.update(self.terms(key))
        if not self.compact:
            words = {word for word in words if len(word) >= 3}
        return frozenset(words)
