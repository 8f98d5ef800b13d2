"""Command line interface for polydate.

Usage:
    polydate parse "next friday at 3pm"
    polydate --json extract "Meeting Dec 31 and deadline 2025-01-15"
    echo "vor 3 Tagen" | polydate extract -
    polydate languages
"""

import json
import sys
from typing import Any, Dict, List, Optional, Sequence

from dateutil.parser import isoparse

from .core.config_manager import ConfigManager, ParserSettings, build_settings
from .core.error_handler import ConfigurationError, PolyDateError
from .core.logging_manager import LoggingManager
from .lexicon.registry import default_registry
from .parser import DateParser
from .processors.core.temporal_extractor import ParsedDate


def _build_arg_parser():
    import argparse

    parser = argparse.ArgumentParser(
        prog="polydate",
        description="Parse multilingual date and time expressions",
    )
    parser.add_argument("--config", help="Path to a YAML configuration file")
    parser.add_argument("--date-order", choices=["YMD", "MDY", "DMY"], type=str.upper,
                        help="Component order for all-numeric dates (auto-detected if omitted)")
    parser.add_argument("--language", "-l", action="append", dest="languages",
                        help="Language code; repeat for several (detected if omitted)")
    parser.add_argument("--base", help="Reference datetime for relative expressions (ISO-8601)")
    parser.add_argument("--timezone", help="Preferred timezone (IANA name or abbreviation)")
    parser.add_argument("--strict", action="store_true", default=None,
                        help="Reject ambiguous numeric dates")
    parser.add_argument("--prefer", choices=["future", "past"],
                        help="Direction for incomplete dates and bare weekdays")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--log-level", help="Console log level (DEBUG, INFO, WARNING, ERROR)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_cmd = subparsers.add_parser("parse", help="Parse one date expression")
    parse_cmd.add_argument("text", help="Date expression")

    extract_cmd = subparsers.add_parser("extract", help="Find date expressions in text")
    extract_cmd.add_argument("text", help="Text to scan, or '-' to read stdin")

    subparsers.add_parser("languages", help="List supported language codes")
    return parser


def _settings_from_args(args, config_manager: ConfigManager) -> ParserSettings:
    """Merge command line options over the loaded configuration."""
    overrides: Dict[str, Any] = {}
    if args.date_order:
        overrides["date_order"] = args.date_order
    if args.languages:
        overrides["languages"] = args.languages
    if args.timezone:
        overrides["preferred_timezone"] = args.timezone
    if args.strict is not None:
        overrides["strict"] = args.strict
    if args.prefer:
        overrides["prefer_dates_from"] = args.prefer
    if args.base:
        try:
            overrides["relative_base"] = isoparse(args.base)
        except ValueError as e:
            raise ConfigurationError(f"invalid --base value '{args.base}': {e}")

    settings = config_manager.load_settings()
    return build_settings(settings.model_dump(), **overrides)


def _format_match(match: ParsedDate) -> Dict[str, Any]:
    return {
        "date": match.date.isoformat(),
        "position": match.position,
        "length": match.length,
        "matched_text": match.matched_text,
        "confidence": match.confidence,
    }


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Execute the command line and return the exit status.

    Args:
        argv: Arguments without the program name (defaults to ``sys.argv[1:]``)

    Returns:
        0 on success, 1 on any polydate error
    """
    args = _build_arg_parser().parse_args(argv)

    try:
        config_manager = ConfigManager(args.config)
        config = config_manager.load_config()
        try:
            LoggingManager.configure(
                level=args.log_level or config.logging.level,
                log_file=config.logging.file_path,
                colored=config.logging.colored,
            )
        except ValueError as e:
            raise ConfigurationError(str(e))
        logger = LoggingManager.get_logger(__name__)

        if args.command == "languages":
            codes = default_registry().supported_languages()
            if args.json:
                print(json.dumps(codes))
            else:
                for code in codes:
                    print(f"{code}\t{default_registry().get(code).name}")
            return 0

        settings = _settings_from_args(args, config_manager)
        date_parser = DateParser(settings=settings)

        if args.command == "parse":
            value = date_parser.parse(args.text)
            print(json.dumps({"date": value.isoformat()}) if args.json else value.isoformat())
            return 0

        text = sys.stdin.read() if args.text == "-" else args.text
        matches: List[ParsedDate] = date_parser.extract(text)
        logger.debug(f"Extracted {len(matches)} expressions")
        if args.json:
            print(json.dumps([_format_match(m) for m in matches], ensure_ascii=False, indent=2))
        else:
            for m in matches:
                print(f"{m.position}\t{m.length}\t{m.date.isoformat()}\t{m.matched_text}")
        return 0

    except PolyDateError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def main():
    """Main entry point for the polydate command."""
    sys.exit(run())


if __name__ == "__main__":
    main()
