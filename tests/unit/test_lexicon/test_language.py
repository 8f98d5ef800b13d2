"""
Unit tests for Language vocabulary tables.
"""

import pytest

from polydate.core.error_handler import ConfigurationError
from polydate.lexicon.language import RELATIVE_KEYS, Language


class TestLanguage:
    """Test suite for Language construction and lookups"""

    @pytest.mark.unit
    def test_from_mapping_inverts_tables(self):
        language = Language.from_mapping({
            "code": "XX",
            "months": {1: ["Foo", "F"], 2: ["Barbar"]},
            "units": {"day": ["dd", "d"]},
        })
        assert language.code == "xx"
        assert language.name == "xx"
        assert language.months == {"foo": 1, "f": 1, "barbar": 2}
        assert list(language.months) == ["barbar", "foo", "f"]
        assert language.units["dd"] == "day"

    @pytest.mark.unit
    def test_homographs_are_normalized(self):
        language = Language.from_mapping({"code": "xx", "homographs": ["May", " sat "]})
        assert language.homographs == frozenset({"may", "sat"})
        assert Language.from_mapping({"code": "yy"}).homographs == frozenset()

    @pytest.mark.unit
    def test_every_relative_key_present(self):
        language = Language.from_mapping({"code": "xx"})
        assert set(language.relative) == set(RELATIVE_KEYS)
        assert language.terms("tomorrow") == ()
        assert language.connector_terms("time") == ()

    @pytest.mark.unit
    def test_missing_code(self):
        with pytest.raises(ConfigurationError):
            Language.from_mapping({"name": "Nameless"})

    @pytest.mark.unit
    def test_unknown_relative_key(self):
        with pytest.raises(ConfigurationError):
            Language.from_mapping({"code": "xx", "relative": {"fortnight": ["x"]}})

    @pytest.mark.unit
    def test_unknown_unit(self):
        with pytest.raises(ConfigurationError):
            Language.from_mapping({"code": "xx", "units": {"fortnight": ["x"]}})

    @pytest.mark.unit
    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            Language.from_yaml(tmp_path / "absent.yaml")

    @pytest.mark.unit
    def test_from_yaml_not_a_mapping(self, tmp_path):
        path = tmp_path / "xx.yaml"
        path.write_text("- january\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            Language.from_yaml(path)

    @pytest.mark.unit
    def test_shipped_english_table(self, registry):
        english = registry.get("en")
        assert english.months["january"] == 1
        assert english.months["sept"] == 9
        assert english.weekdays["mon"] == 0
        assert english.units["days"] == "day"
        assert "tomorrow" in english.terms("tomorrow")
        assert english.ordinals["twenty-first"] == 21
        assert english.meridiem["p.m."] == "pm"
        assert not english.compact

    @pytest.mark.unit
    def test_tables_are_read_only(self, registry):
        english = registry.get("en")
        with pytest.raises(TypeError):
            english.months["smarch"] = 13

    @pytest.mark.unit
    def test_detection_vocabulary(self, registry):
        german = registry.get("de")
        vocabulary = german.detection_vocabulary()
        assert "montag" in vocabulary
        assert "vor" in vocabulary
        # Two-letter abbreviations are too weak a signal
        assert "mo" not in vocabulary

    @pytest.mark.unit
    def test_compact_vocabulary_keeps_single_characters(self, registry):
        assert "前" in registry.get("zh").detection_vocabulary()
