"""
Integration tests for the polydate command line.
"""

import io
import json

import pytest

from polydate.cli import run

BASE = ["--base", "2024-01-17T12:00:00Z"]


@pytest.fixture
def cli_config(temp_config_file, monkeypatch):
    """Isolated config file with no POLYDATE_* environment overrides"""
    for name in ("POLYDATE_DATE_ORDER", "POLYDATE_LANGUAGES", "POLYDATE_TIMEZONE",
                 "POLYDATE_STRICT", "POLYDATE_PREFER_DATES_FROM", "POLYDATE_PARSERS"):
        monkeypatch.delenv(name, raising=False)
    path = temp_config_file({"parser": {"strict": False}, "logging": {"level": "WARNING"}})
    return ["--config", str(path)]


class TestParseCommand:
    """Test suite for 'polydate parse'"""

    @pytest.mark.integration
    def test_parse(self, cli_config, capsys):
        assert run(cli_config + BASE + ["parse", "tomorrow at 3pm"]) == 0
        assert capsys.readouterr().out.strip() == "2024-01-18T15:00:00+00:00"

    @pytest.mark.integration
    def test_parse_json(self, cli_config, capsys):
        assert run(cli_config + BASE + ["--json", "parse", "3 days ago"]) == 0
        assert json.loads(capsys.readouterr().out) == {"date": "2024-01-14T12:00:00+00:00"}

    @pytest.mark.integration
    def test_parse_with_options(self, cli_config, capsys):
        args = cli_config + BASE + ["--date-order", "dmy", "--timezone", "+02:00", "parse", "01/02/2024"]
        assert run(args) == 0
        assert capsys.readouterr().out.strip() == "2024-02-01T00:00:00+02:00"

    @pytest.mark.integration
    def test_parse_with_language(self, cli_config, capsys):
        assert run(cli_config + BASE + ["-l", "es", "parse", "pasado mañana"]) == 0
        assert capsys.readouterr().out.strip() == "2024-01-19T00:00:00+00:00"

    @pytest.mark.integration
    def test_strict_flag(self, cli_config, capsys):
        assert run(cli_config + BASE + ["--strict", "parse", "01/02/2024"]) == 1
        assert "ambiguous" in capsys.readouterr().err

    @pytest.mark.integration
    def test_unparseable_input(self, cli_config, capsys):
        assert run(cli_config + BASE + ["parse", "banana"]) == 1
        assert capsys.readouterr().err.startswith("Error: unable to parse date: 'banana'")

    @pytest.mark.integration
    def test_invalid_base(self, cli_config, capsys):
        assert run(cli_config + ["--base", "yesterday-ish", "parse", "today"]) == 1
        assert "--base" in capsys.readouterr().err

    @pytest.mark.integration
    def test_missing_config_file(self, tmp_path, capsys):
        assert run(["--config", str(tmp_path / "absent.yaml"), "parse", "today"]) == 1
        assert "config file not found" in capsys.readouterr().err

    @pytest.mark.integration
    def test_invalid_log_level(self, cli_config, capsys):
        assert run(cli_config + ["--log-level", "LOUD", "parse", "today"]) == 1
        assert capsys.readouterr().err.startswith("Error:")


class TestExtractCommand:
    """Test suite for 'polydate extract'"""

    @pytest.mark.integration
    def test_extract_lines(self, cli_config, capsys):
        assert run(cli_config + BASE + ["extract", "Meeting Dec 31 and deadline 2025-01-15"]) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert lines == [
            "8\t6\t2024-12-31T00:00:00+00:00\tDec 31",
            "28\t10\t2025-01-15T00:00:00+00:00\t2025-01-15",
        ]

    @pytest.mark.integration
    def test_extract_json(self, cli_config, capsys):
        assert run(cli_config + BASE + ["--json", "extract", "Nos vemos mañana"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload == [{
            "date": "2024-01-18T00:00:00+00:00",
            "position": 10,
            "length": 6,
            "matched_text": "mañana",
            "confidence": 0.95,
        }]

    @pytest.mark.integration
    def test_extract_from_stdin(self, cli_config, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("resend it by tomorrow\n"))
        assert run(cli_config + BASE + ["extract", "-"]) == 0
        assert capsys.readouterr().out.strip().endswith("2024-01-18T00:00:00+00:00\ttomorrow")

    @pytest.mark.integration
    def test_extract_nothing(self, cli_config, capsys):
        assert run(cli_config + BASE + ["extract", "no dates here"]) == 0
        assert capsys.readouterr().out == ""


class TestLanguagesCommand:
    """Test suite for 'polydate languages'"""

    @pytest.mark.integration
    def test_languages(self, cli_config, capsys):
        assert run(cli_config + ["languages"]) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert lines[0] == "en\tEnglish"
        assert len(lines) == 10

    @pytest.mark.integration
    def test_languages_json(self, cli_config, capsys):
        assert run(cli_config + ["--json", "languages"]) == 0
        codes = json.loads(capsys.readouterr().out)
        assert codes[0] == "en"
        assert {"es", "de", "fr", "zh", "ja"} <= set(codes)

    @pytest.mark.integration
    def test_subcommand_required(self, cli_config):
        with pytest.raises(SystemExit):
            run(cli_config)
