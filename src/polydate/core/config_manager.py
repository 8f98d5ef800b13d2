"""Configuration Management for polydate

Parser settings are validated with pydantic and can be loaded from YAML
files with ``POLYDATE_*`` environment overrides. Before any parsing starts
the settings are normalized into a frozen ``ParseContext``; that snapshot is
the only configuration the engine ever sees.
"""

import os
from dataclasses import dataclass
from datetime import datetime, tzinfo
from enum import Enum
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..lexicon.lookup import Lexicon
from ..lexicon.registry import LanguageRegistry
from ..lexicon.timezones import resolve_timezone
from .error_handler import ConfigurationError
from .logging_manager import LoggingManager

# Dispatch order
PARSER_NAMES = ("timestamp", "absolute", "relative", "time", "incomplete", "ordinal", "week")

# Feature switches accepted next to the parser names
FEATURE_NAMES = PARSER_NAMES + ("timezone",)


class DateOrder(Enum):
    """Role order of the components in an all-numeric date."""
    YMD = "YMD"
    MDY = "MDY"
    DMY = "DMY"


DEFAULT_DATE_ORDER = DateOrder.MDY


def _split_list(value: Any) -> Any:
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


class ParserSettings(BaseModel):
    """User-facing parser settings; every field is optional."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    date_order: Optional[str] = Field(default=None)
    languages: List[str] = Field(default_factory=list)
    relative_base: Optional[datetime] = None
    enable_parsers: Optional[List[str]] = None
    strict: bool = Field(default=False)
    preferred_timezone: str = Field(default="UTC")
    prefer_dates_from: Optional[str] = Field(default=None)

    @field_validator("date_order", mode="before")
    @classmethod
    def validate_date_order(cls, v):
        """Accept YMD, MDY or DMY in any case."""
        if v is None or v == "":
            return None
        if isinstance(v, DateOrder):
            return v.value
        normalized = str(v).strip().upper()
        if normalized not in DateOrder.__members__:
            raise ValueError("date_order must be one of YMD, MDY, DMY")
        return normalized

    @field_validator("languages", mode="before")
    @classmethod
    def validate_languages(cls, v):
        v = _split_list(v) or []
        return [str(code).strip().lower() for code in v if str(code).strip()]

    @field_validator("enable_parsers", mode="before")
    @classmethod
    def validate_enable_parsers(cls, v):
        """Reject parser identifiers that do not exist."""
        if v is None:
            return None
        names = [str(name).strip().lower() for name in _split_list(v)]
        unknown = [name for name in names if name not in FEATURE_NAMES]
        if unknown:
            raise ValueError(
                f"unknown parser(s) {unknown}; expected any of {list(FEATURE_NAMES)}"
            )
        return names

    @field_validator("prefer_dates_from", mode="before")
    @classmethod
    def validate_prefer_dates_from(cls, v):
        if v is None or v == "":
            return None
        normalized = str(v).strip().lower()
        if normalized not in ("future", "past"):
            raise ValueError("prefer_dates_from must be 'future' or 'past'")
        return normalized

    @field_validator("preferred_timezone")
    @classmethod
    def validate_preferred_timezone(cls, v):
        if not v or not v.strip():
            raise ValueError("preferred_timezone must not be empty")
        return v.strip()


class LoggingConfig(BaseModel):
    """Configuration for logging."""
    level: str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    file_path: Optional[str] = None
    colored: bool = Field(default=True)

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v):
        return str(v).upper() if v is not None else v


class PolyDateConfig(BaseModel):
    """Top-level configuration document."""
    model_config = ConfigDict(extra="forbid")

    parser: ParserSettings = Field(default_factory=ParserSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def build_settings(data: Optional[Mapping[str, Any]] = None, **overrides) -> ParserSettings:
    """Validate a plain mapping into ``ParserSettings``.

    Raises:
        ConfigurationError: If any field is invalid
    """
    values = dict(data or {})
    values.update(overrides)
    try:
        return ParserSettings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"invalid parser settings: {e}")


@dataclass(frozen=True)
class ParseContext:
    """Immutable configuration snapshot for one parse or extract call."""
    date_order: DateOrder
    auto_detect_order: bool
    lexicon: Lexicon
    relative_base: datetime
    enabled_parsers: FrozenSet[str]
    strict: bool
    tzinfo: tzinfo
    prefer_dates_from: str = "future"

    def is_enabled(self, name: str) -> bool:
        return name in self.enabled_parsers

    @property
    def timezone_enabled(self) -> bool:
        return "timezone" in self.enabled_parsers

    @property
    def prefers_past(self) -> bool:
        return self.prefer_dates_from == "past"


def normalize_settings(settings: Optional[ParserSettings], registry: LanguageRegistry,
                       text: str = "") -> ParseContext:
    """Resolve defaults and produce the frozen context for one call.

    Args:
        settings: User settings (None means all defaults)
        registry: Language registry to draw the lexicon from
        text: Input text, used for language detection when no languages are set

    Returns:
        Frozen parse context

    Raises:
        ConfigurationError: For unknown languages or timezones
    """
    settings = settings or ParserSettings()

    zone = resolve_timezone(settings.preferred_timezone)

    if settings.languages:
        codes = list(registry.validate_codes(settings.languages))
    else:
        detected = registry.detect_language(text)
        codes = [detected] if detected == "en" else [detected, "en"]

    if settings.date_order:
        order, auto_detect = DateOrder(settings.date_order), False
    else:
        order, auto_detect = DEFAULT_DATE_ORDER, True

    base = settings.relative_base
    if base is None:
        base = datetime.now(zone)
    elif base.tzinfo is None or base.utcoffset() is None:
        base = base.replace(tzinfo=zone)
    else:
        base = base.astimezone(zone)

    # An empty or missing list enables everything
    if not settings.enable_parsers:
        enabled = frozenset(FEATURE_NAMES)
    else:
        enabled = frozenset(settings.enable_parsers)

    return ParseContext(
        date_order=order,
        auto_detect_order=auto_detect,
        lexicon=registry.lexicon(codes),
        relative_base=base,
        enabled_parsers=enabled,
        strict=settings.strict,
        tzinfo=zone,
        prefer_dates_from=settings.prefer_dates_from or "future",
    )


class ConfigManager:
    """Loads polydate configuration from YAML with environment overrides."""

    ENV_PREFIX = "POLYDATE_"

    # Environment variable suffix -> parser setting
    ENV_FIELDS = {
        "DATE_ORDER": "date_order",
        "LANGUAGES": "languages",
        "TIMEZONE": "preferred_timezone",
        "STRICT": "strict",
        "PREFER_DATES_FROM": "prefer_dates_from",
        "PARSERS": "enable_parsers",
    }

    def __init__(self, config_path: Optional[Union[str, Path]] = None,
                 environ: Optional[Mapping[str, str]] = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional path to a YAML configuration file
            environ: Environment mapping (defaults to ``os.environ``)
        """
        self.logger = LoggingManager.get_logger(__name__)
        self.explicit_path = config_path is not None
        self.config_path = Path(config_path) if config_path else self._get_default_config_path()
        self.environ = os.environ if environ is None else environ
        self._config: Optional[PolyDateConfig] = None

    def _get_default_config_path(self) -> Path:
        """Get the default configuration file path."""
        # Looking for config in order of precedence
        config_locations = [
            Path("config") / "default_config.yaml",
            Path.home() / ".polydate" / "config.yaml",
        ]

        for location in config_locations:
            if location.is_file():
                return location

        return config_locations[0]

    def load_config(self) -> PolyDateConfig:
        """Load and validate the configuration document.

        Returns:
            Validated configuration

        Raises:
            ConfigurationError: If the file is unreadable or fails validation
        """
        if self._config is not None:
            return self._config

        config_data: Dict[str, Any] = {}
        if self.config_path.is_file():
            self.logger.info(f"Loading config from {self.config_path}")
            config_data = self._load_yaml_file(self.config_path)
        elif self.explicit_path:
            raise ConfigurationError(f"config file not found: {self.config_path}")

        env_overrides = self._get_env_overrides()
        if env_overrides:
            self.logger.info(f"Applying environment overrides: {list(env_overrides.keys())}")
            parser_section = config_data.setdefault("parser", {}) or {}
            if not isinstance(parser_section, dict):
                raise ConfigurationError("'parser' section must be a mapping")
            parser_section.update(env_overrides)
            config_data["parser"] = parser_section

        try:
            self._config = PolyDateConfig(**config_data)
        except ValidationError as e:
            self.logger.error(f"Configuration validation failed: {e}")
            raise ConfigurationError(f"invalid configuration: {e}")

        return self._config

    def load_settings(self) -> ParserSettings:
        """Parser settings section of the loaded configuration."""
        return self.load_config().parser

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load YAML configuration file.

        Returns:
            Configuration dictionary
        """
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            self.logger.error(f"Failed to parse YAML file {file_path}: {e}")
            raise ConfigurationError(f"invalid YAML in {file_path}: {e}")
        except OSError as e:
            raise ConfigurationError(f"cannot read {file_path}: {e}")

        if not isinstance(data, dict):
            raise ConfigurationError(f"{file_path} must contain a mapping")
        return data

    def _get_env_overrides(self) -> Dict[str, Any]:
        """Get parser overrides from environment variables.

        Example: POLYDATE_DATE_ORDER=DMY -> parser.date_order
        """
        overrides = {}
        for suffix, field_name in self.ENV_FIELDS.items():
            value = self.environ.get(self.ENV_PREFIX + suffix)
            if value is not None and value.strip():
                overrides[field_name] = self._convert_env_value(value.strip())
        return overrides

    def _convert_env_value(self, value: str) -> Union[str, bool, List[str]]:
        """Convert environment variable string to appropriate type."""
        if value.lower() in ("true", "false"):
            return value.lower() == "true"

        # List conversion (comma-separated)
        if "," in value:
            return [v.strip() for v in value.split(",")]

        return value
