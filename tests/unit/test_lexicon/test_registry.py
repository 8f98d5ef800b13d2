"""
Unit tests for LanguageRegistry and language detection.
"""

import pytest

from polydate.core.error_handler import ConfigurationError
from polydate.lexicon.language import Language
from polydate.lexicon.registry import DEFAULT_LANGUAGE_ORDER, LanguageRegistry, default_registry


class TestLanguageRegistry:
    """Test suite for the immutable language registry"""

    @pytest.mark.unit
    def test_shipped_languages(self, registry):
        assert registry.supported_languages() == list(DEFAULT_LANGUAGE_ORDER)
        assert len(registry) == 10
        assert "ES" in registry
        assert "tlh" not in registry

    @pytest.mark.unit
    def test_default_registry_is_built_once(self):
        assert default_registry() is default_registry()

    @pytest.mark.unit
    def test_get_falls_back_to_english(self, registry):
        assert registry.get("de").code == "de"
        assert registry.get("tlh").code == "en"
        assert registry.get(None).code == "en"

    @pytest.mark.unit
    def test_get_multiple(self, registry):
        assert [lang.code for lang in registry.get_multiple(["tlh", "de", "de", "fr"])] == ["de", "fr"]
        assert [lang.code for lang in registry.get_multiple(["tlh"])] == ["en"]
        assert [lang.code for lang in registry.get_multiple([])] == ["en"]

    @pytest.mark.unit
    def test_validate_codes(self, registry):
        assert registry.validate_codes([" ES", "de"]) == ("es", "de")
        with pytest.raises(ConfigurationError):
            registry.validate_codes(["es", "tlh"])

    @pytest.mark.unit
    def test_english_is_required(self):
        with pytest.raises(ConfigurationError):
            LanguageRegistry([Language.from_mapping({"code": "xx"})])

    @pytest.mark.unit
    def test_missing_directory(self, tmp_path):
        with pytest.raises(ConfigurationError):
            LanguageRegistry.from_directory(tmp_path / "absent")

    @pytest.mark.unit
    def test_from_directory(self, tmp_path):
        (tmp_path / "en.yaml").write_text("code: en\nname: English\n", encoding="utf-8")
        (tmp_path / "xx.yaml").write_text(
            "code: xx\nname: Test\nmonths:\n  1: [primus]\n", encoding="utf-8"
        )
        loaded = LanguageRegistry.from_directory(tmp_path)
        assert loaded.supported_languages() == ["en", "xx"]
        assert loaded.get("xx").months["primus"] == 1

    @pytest.mark.unit
    def test_with_language_returns_new_registry(self, registry):
        extra = Language.from_mapping({"code": "xx", "months": {1: ["primus"]}})
        extended = registry.with_language(extra)
        assert "xx" in extended
        assert "xx" not in registry
        assert extended.supported_languages()[-1] == "xx"


class TestLanguageDetection:
    """Test suite for keyword-scored language detection"""

    @pytest.mark.unit
    @pytest.mark.parametrize("text, expected", [
        ("hace 3 días", "es"),
        ("vor 3 Tagen", "de"),
        ("il y a 2 jours", "fr"),
        ("lundi prochain", "fr"),
        ("через 2 дня", "ru"),
        ("15 de março de 2024", "pt"),
        ("3天前", "zh"),
        ("明日", "ja"),
        ("next Friday", "en"),
    ])
    def test_detect_language(self, registry, text, expected):
        assert registry.detect_language(text) == expected

    @pytest.mark.unit
    def test_empty_or_unknown_text_is_english(self, registry):
        assert registry.detect_language("") == "en"
        assert registry.detect_language("xyzzy 42") == "en"

    @pytest.mark.unit
    def test_ties_go_to_registration_order(self, registry):
        # "morgen" is tomorrow in both German and Dutch
        assert registry.detect_language("morgen") == "de"
