"""Public parsing API.

``DateParser`` ties the pieces together: it normalizes settings into a
``ParseContext`` once per call, then hands the text to the dispatcher
(single value) or the extractor (free text).
"""

from datetime import datetime
from functools import lru_cache
from typing import Any, List, Mapping, Optional, Union

from .core.config_manager import ParseContext, ParserSettings, build_settings, normalize_settings
from .core.logging_manager import LoggingManager
from .lexicon.registry import LanguageRegistry, default_registry
from .processors.core.dispatcher import Dispatcher
from .processors.core.temporal_extractor import ParsedDate, TemporalExtractor

SettingsLike = Union[ParserSettings, Mapping[str, Any], None]


class DateParser:
    """Multilingual date parser with an injected language registry."""

    def __init__(self, registry: Optional[LanguageRegistry] = None,
                 settings: SettingsLike = None):
        """Initialize date parser.

        Args:
            registry: Language registry (defaults to the shipped tables)
            settings: Default settings used when a call passes none
        """
        self.logger = LoggingManager.get_logger(__name__)
        self.registry = registry or default_registry()
        self.settings = self._coerce(settings)
        self.dispatcher = Dispatcher()
        self.extractor = TemporalExtractor(self.dispatcher.strategies)

    @staticmethod
    def _coerce(settings: SettingsLike) -> Optional[ParserSettings]:
        if settings is None or isinstance(settings, ParserSettings):
            return settings
        return build_settings(settings)

    def context(self, text: str, settings: SettingsLike = None) -> ParseContext:
        """Frozen context for one call; per-call settings replace the defaults."""
        effective = self._coerce(settings) or self.settings
        return normalize_settings(effective, self.registry, text or "")

    def parse(self, text: str, settings: SettingsLike = None) -> datetime:
        """Parse a single date expression that spans the whole input.

        Args:
            text: Date expression
            settings: Optional ``ParserSettings`` or mapping of its fields

        Returns:
            Timezone-aware datetime

        Raises:
            PolyDateError: One of its subclasses describing the failure
        """
        context = self.context(text, settings)
        value = self.dispatcher.dispatch(text, context)
        self.logger.debug(f"Parsed '{text}' as {value.isoformat()}")
        return value

    def extract(self, text: str, settings: SettingsLike = None) -> List[ParsedDate]:
        """Find every date expression in free text.

        Returns:
            Non-overlapping matches ordered by position
        """
        context = self.context(text, settings)
        return self.extractor.extract(text, context)


@lru_cache(maxsize=1)
def _default_parser() -> DateParser:
    return DateParser()


def parse_date(text: str, settings: SettingsLike = None) -> datetime:
    """Parse ``text`` with the shipped language tables."""
    return _default_parser().parse(text, settings)


def extract_dates(text: str, settings: SettingsLike = None) -> List[ParsedDate]:
    """Extract all date expressions from ``text`` with the shipped language tables."""
    return _default_parser().extract(text, settings)
