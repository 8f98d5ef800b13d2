"""Language registry.

The registry is built once from the shipped YAML tables and never mutated.
Parsers receive it by injection; ``default_registry()`` only exists so the
convenience functions have something to fall back on.
"""

import re
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ..core.error_handler import ConfigurationError
from ..core.logging_manager import LoggingManager
from .language import Language
from .lookup import Lexicon, normalize_token

LANGUAGES_DIR = Path(__file__).parent / "languages"

# Registration order; also the tie-break order for language detection
DEFAULT_LANGUAGE_ORDER = ("en", "es", "pt", "fr", "de", "it", "nl", "ru", "zh", "ja")

FALLBACK_LANGUAGE = "en"

_WORD_RE = re.compile(r"\w+")


class LanguageRegistry:
    """Immutable collection of languages keyed by code."""

    def __init__(self, languages: Iterable[Language]):
        """Initialize registry.

        Args:
            languages: Languages in registration order; duplicates keep the first

        Raises:
            ConfigurationError: If the English fallback is missing
        """
        self.logger = LoggingManager.get_logger(__name__)
        table: Dict[str, Language] = {}
        for language in languages:
            table.setdefault(language.code, language)
        if FALLBACK_LANGUAGE not in table:
            raise ConfigurationError(
                f"language registry requires the '{FALLBACK_LANGUAGE}' fallback table"
            )
        self._languages: Mapping[str, Language] = MappingProxyType(table)
        self._vocabulary = MappingProxyType({
            code: language.detection_vocabulary() for code, language in table.items()
        })
        self.logger.debug(f"Language registry ready: {', '.join(table)}")

    @classmethod
    def from_directory(cls, directory: Union[str, Path] = LANGUAGES_DIR,
                       order: Sequence[str] = DEFAULT_LANGUAGE_ORDER) -> "LanguageRegistry":
        """Load every ``*.yaml`` language table from a directory.

        Args:
            directory: Folder holding the YAML tables
            order: Preferred registration order; other codes follow alphabetically

        Returns:
            Registry with the loaded languages
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise ConfigurationError(f"language directory not found: {directory}")

        loaded = {}
        for path in sorted(directory.glob("*.yaml")):
            language = Language.from_yaml(path)
            loaded[language.code] = language

        ranked = [code for code in order if code in loaded]
        ranked += sorted(code for code in loaded if code not in ranked)
        return cls(loaded[code] for code in ranked)

    def __contains__(self, code: str) -> bool:
        return normalize_token(code) in self._languages

    def __len__(self) -> int:
        return len(self._languages)

    def supported_languages(self) -> List[str]:
        """Codes of every registered language, in registration order."""
        return list(self._languages)

    def get(self, code: Optional[str]) -> Language:
        """Language for ``code``; English when the code is unknown."""
        language = self._languages.get(normalize_token(code or ""))
        if language is None:
            return self._languages[FALLBACK_LANGUAGE]
        return language

    def get_multiple(self, codes: Iterable[str]) -> List[Language]:
        """Languages for the known codes, in the given order.

        Unknown codes are dropped. When nothing is left the English table
        is returned alone.
        """
        selected: List[Language] = []
        for code in codes or ():
            language = self._languages.get(normalize_token(code))
            if language is not None and language not in selected:
                selected.append(language)
        if not selected:
            selected.append(self._languages[FALLBACK_LANGUAGE])
        return selected

    def validate_codes(self, codes: Iterable[str]) -> Tuple[str, ...]:
        """Normalize codes, raising for the unknown ones."""
        normalized = tuple(normalize_token(code) for code in codes)
        unknown = [code for code in normalized if code not in self._languages]
        if unknown:
            raise ConfigurationError(
                f"unsupported language(s): {', '.join(unknown)}; "
                f"supported: {', '.join(self._languages)}"
            )
        return normalized

    def lexicon(self, codes: Iterable[str]) -> Lexicon:
        """Lexicon over the given codes (unknown codes dropped)."""
        return Lexicon(self.get_multiple(codes))

    def with_language(self, language: Language) -> "LanguageRegistry":
        """New registry with ``language`` added or replacing the same code."""
        replaced = [language if code == language.code else existing
                    for code, existing in self._languages.items()]
        if language.code not in self._languages:
            replaced.append(language)
        return LanguageRegistry(replaced)

    def detect_language(self, text: str) -> str:
        """Guess the language of ``text`` by keyword scoring.

        Each recognized month, weekday or relative word adds its length to
        the language's score. Languages written with spaces are scored on
        whole words; compact scripts on substrings. Ties go to the language
        registered first.

        Args:
            text: Input text

        Returns:
            Language code, ``en`` when nothing is recognized
        """
        lowered = normalize_token(text or "")
        if not lowered:
            return FALLBACK_LANGUAGE

        words = _WORD_RE.findall(lowered)
        best_code = FALLBACK_LANGUAGE
        best_score = 0
        for code, language in self._languages.items():
            vocabulary = self._vocabulary[code]
            if language.compact:
                score = sum(len(token) for token in vocabulary if token in lowered)
            else:
                score = sum(len(word) for word in words if word in vocabulary)
                # Multi-word terms ("il y a", "day after tomorrow")
                score += sum(len(token) for token in vocabulary
                             if " " in token and token in lowered)
            if score > best_score:
                best_code, best_score = code, score

        self.logger.debug(f"Detected language '{best_code}' (score {best_score})")
        return best_code


@lru_cache(maxsize=1)
def default_registry() -> LanguageRegistry:
    """Registry over the shipped language tables, built on first use."""
    return LanguageRegistry.from_directory()
