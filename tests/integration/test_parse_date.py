"""
Integration tests for single-value parsing through DateParser.

Every sample goes through the full path: settings normalization, language
detection, the dispatcher and the strategies.
"""

from datetime import datetime, timedelta

import pytest
from dateutil.tz import gettz, tzutc

import polydate
from polydate import DateParser, ParserSettings, parse_date
from polydate.core.error_handler import (
    AmbiguousDateError,
    ConfigurationError,
    InvalidFormatError,
)
from tests.fixtures.sample_data import (
    BASE_TIME,
    SAMPLE_ABSOLUTE_DATES,
    SAMPLE_INCOMPLETE_DATES,
    SAMPLE_INVALID_INPUTS,
    SAMPLE_MULTILINGUAL,
    SAMPLE_ORDINAL_DATES,
    SAMPLE_RELATIVE_DATES,
    SAMPLE_TIMES,
    SAMPLE_TIMESTAMPS,
    SAMPLE_WEEK_DATES,
)

ENGLISH_SAMPLES = (
    SAMPLE_TIMESTAMPS
    + SAMPLE_ABSOLUTE_DATES
    + SAMPLE_RELATIVE_DATES
    + SAMPLE_INCOMPLETE_DATES
    + SAMPLE_ORDINAL_DATES
    + SAMPLE_WEEK_DATES
    + SAMPLE_TIMES
)


def _ids(samples):
    return [sample["text"] or "<empty>" for sample in samples]


class TestParseSamples:
    """Test suite for the sample expressions"""

    @pytest.mark.integration
    @pytest.mark.parametrize("sample", ENGLISH_SAMPLES, ids=_ids(ENGLISH_SAMPLES))
    def test_english(self, date_parser, sample):
        assert date_parser.parse(sample["text"]).isoformat() == sample["expected"]

    @pytest.mark.integration
    @pytest.mark.parametrize("sample", SAMPLE_MULTILINGUAL, ids=_ids(SAMPLE_MULTILINGUAL))
    def test_multilingual(self, date_parser, sample):
        settings = ParserSettings(languages=sample["languages"], relative_base=BASE_TIME)
        assert date_parser.parse(sample["text"], settings).isoformat() == sample["expected"]

    @pytest.mark.integration
    @pytest.mark.parametrize("sample", SAMPLE_INVALID_INPUTS, ids=_ids(SAMPLE_INVALID_INPUTS))
    def test_invalid(self, date_parser, sample):
        with pytest.raises(getattr(polydate, sample["error"])):
            date_parser.parse(sample["text"])


class TestParseBehaviour:
    """Test suite for settings flowing through a parse"""

    @pytest.mark.integration
    @pytest.mark.parametrize("text", [
        "hace 3 días",
        "vor 3 Tagen",
        "il y a 3 jours",
        "3天前",
    ])
    def test_language_detection(self, date_parser, text):
        assert date_parser.parse(text) == datetime(2024, 1, 14, 12, 0, tzinfo=tzutc())

    @pytest.mark.integration
    def test_results_are_timezone_aware(self, date_parser):
        for text in ["2024-01-15", "tomorrow", "3pm", "Dec 25", "15th", "W15", "1705312800"]:
            assert date_parser.parse(text).utcoffset() is not None

    @pytest.mark.integration
    def test_preferred_timezone(self, date_parser):
        settings = {"relative_base": BASE_TIME, "preferred_timezone": "America/New_York"}
        value = date_parser.parse("tomorrow", settings)
        assert value.tzinfo == gettz("America/New_York")
        assert (value.year, value.month, value.day, value.hour) == (2024, 1, 18, 0)

    @pytest.mark.integration
    def test_explicit_zone_beats_preferred(self, date_parser):
        settings = {"relative_base": BASE_TIME, "preferred_timezone": "Asia/Tokyo"}
        value = date_parser.parse("2024-01-15T10:30:00Z", settings)
        assert value.utcoffset() == timedelta(0)

    @pytest.mark.integration
    def test_date_order_setting(self, date_parser):
        settings = {"relative_base": BASE_TIME, "date_order": "DMY"}
        assert date_parser.parse("01/02/2024", settings).month == 2

    @pytest.mark.integration
    def test_strict_mode(self, date_parser):
        settings = {"relative_base": BASE_TIME, "strict": True}
        with pytest.raises(AmbiguousDateError):
            date_parser.parse("01/02/2024", settings)
        assert date_parser.parse("15/03/2024", settings).day == 15

    @pytest.mark.integration
    def test_prefer_past(self, date_parser):
        settings = {"relative_base": BASE_TIME, "prefer_dates_from": "past"}
        assert date_parser.parse("Dec 25", settings).year == 2023
        assert date_parser.parse("friday", settings).day == 12

    @pytest.mark.integration
    def test_enable_parsers(self, date_parser):
        settings = {"relative_base": BASE_TIME, "enable_parsers": ["relative", "time"]}
        assert date_parser.parse("tomorrow", settings).day == 18
        with pytest.raises(InvalidFormatError):
            date_parser.parse("2024-01-15", settings)

    @pytest.mark.integration
    def test_invalid_settings_mapping(self, date_parser):
        with pytest.raises(ConfigurationError):
            date_parser.parse("tomorrow", {"date_order": "XYZ"})
        with pytest.raises(ConfigurationError):
            date_parser.parse("tomorrow", {"languages": ["tlh"]})

    @pytest.mark.integration
    def test_same_input_same_result(self, date_parser):
        assert date_parser.parse("next friday at 3pm") == date_parser.parse("next friday at 3pm")

    @pytest.mark.integration
    def test_custom_registry(self, registry):
        parser = DateParser(registry=registry, settings={"relative_base": BASE_TIME})
        assert parser.parse("mañana").day == 18


class TestModuleFunctions:
    """Test suite for the module-level convenience API"""

    @pytest.mark.integration
    def test_parse_date(self):
        value = parse_date("2024-03-15 10:00", {"relative_base": BASE_TIME})
        assert value == datetime(2024, 3, 15, 10, 0, tzinfo=tzutc())

    @pytest.mark.integration
    def test_parse_date_without_base_uses_now(self):
        before = datetime.now(tzutc())
        value = parse_date("now")
        assert value >= before - timedelta(seconds=1)


def _cjk_format(value):
    return f"{value.year}年{value.month}月{value.day}日"


class TestFormatRoundTrip:
    """Test suite for reparsing a result written back in its own grammar"""

    @pytest.mark.integration
    @pytest.mark.parametrize("text, languages, render", [
        ("2024-03-15T10:30:00Z", None, lambda d: d.strftime("%Y-%m-%dT%H:%M:%SZ")),
        ("2024-03-15", None, lambda d: d.strftime("%Y-%m-%d")),
        ("March 15, 2024", None, lambda d: d.strftime("%B %d, %Y")),
        ("15 March 2024", None, lambda d: d.strftime("%d %B %Y")),
        ("03/15/2024", None, lambda d: d.strftime("%m/%d/%Y")),
        ("2024-075", None, lambda d: d.strftime("%Y-%j")),
        ("2024-W15-3", None, lambda d: d.strftime("%G-W%V-%u")),
        ("2024年3月15日", ["zh"], _cjk_format),
    ], ids=["iso-datetime", "iso-date", "month-day-year", "day-month-year",
            "numeric", "ordinal", "week", "cjk"])
    def test_reparse_gives_same_instant(self, date_parser, text, languages, render):
        settings = ParserSettings(languages=languages or [], relative_base=BASE_TIME)
        value = date_parser.parse(text, settings)
        rendered = render(value)
        again = date_parser.parse(rendered, settings)
        assert again == value
        assert render(again) == rendered
