"""
Pytest configuration and shared fixtures for polydate testing.

Every parse in the suite is anchored on a fixed base instant so relative
expressions resolve deterministically.
"""

from pathlib import Path

import pytest
import yaml

from polydate.core.config_manager import ParserSettings, normalize_settings
from polydate.core.logging_manager import LoggingManager
from polydate.lexicon.registry import default_registry
from polydate.parser import DateParser
from tests.fixtures.sample_data import BASE_TIME, SAMPLE_TEXTS


@pytest.fixture
def base_time():
    """Wednesday 2024-01-17 12:00 UTC"""
    return BASE_TIME


@pytest.fixture(scope="session")
def registry():
    """Registry over the shipped language tables"""
    return default_registry()


@pytest.fixture
def settings_factory():
    """Build ParserSettings anchored on the base instant"""
    def _make(**overrides):
        overrides.setdefault("relative_base", BASE_TIME)
        return ParserSettings(**overrides)
    return _make


@pytest.fixture
def make_context(registry, settings_factory):
    """Build a normalized ParseContext for a given text and settings"""
    def _make(text: str = "", **overrides):
        return normalize_settings(settings_factory(**overrides), registry, text)
    return _make


@pytest.fixture
def date_parser(registry):
    """DateParser whose default settings use the fixed base instant"""
    return DateParser(registry=registry, settings=ParserSettings(relative_base=BASE_TIME))


@pytest.fixture
def temp_config_file(tmp_path):
    """Write a YAML config document and return its path"""
    def _write(data, name: str = "config.yaml") -> Path:
        path = tmp_path / name
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f)
        return path
    return _write


@pytest.fixture
def sample_texts():
    """Free-text samples with their expected extractions"""
    return SAMPLE_TEXTS.copy()


@pytest.fixture(autouse=True)
def reset_logging():
    """Remove handlers installed by LoggingManager.configure during a test"""
    yield
    import logging
    root_logger = logging.getLogger(LoggingManager.ROOT_LOGGER)
    for handler in list(root_logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            root_logger.removeHandler(handler)
            handler.close()
