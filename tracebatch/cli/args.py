from __future__ import annotations

import argparse
from pathlib import Path


def existing_directory(value: str) -> Path:
    path = Path(value)
    if not path.is_dir():
        raise argparse.ArgumentTypeError(f"{value} is not a directory")
    return path


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value} is not an integer") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"{value} must be non-negative")
    return number


def positive_int(value: str) -> int:
    number = non_negative_int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"{value} must be at least 1")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tracebatch",
        description="Analyze every trace and types file pair in a directory",
        epilog=(
            "Exits with code 0 if highlights were found, 1 if no highlights "
            "were found, and 2 if an error occurred"
        ),
    )

    parser.add_argument(
        "trace_dir",
        type=existing_directory,
        help="Directory of trace and types files",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a settings file (.yml/.yaml, .toml or .json)",
    )
    parser.add_argument(
        "--analyzer",
        default=None,
        help="Command used to analyze a single trace file",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=positive_int,
        default=None,
        help="Maximum number of analyzers running at once (default: CPU count)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log analyzer launches and exits",
    )

    # Forwarded to the analyzer unchanged
    analyzer = parser.add_argument_group("analyzer options")
    analyzer.add_argument(
        "--force-millis",
        type=non_negative_int,
        default=None,
        help="Events of at least this duration are always reported (default: 500)",
    )
    analyzer.add_argument(
        "--skip-millis",
        type=non_negative_int,
        default=None,
        help="Events shorter than this are never reported (default: 100)",
    )
    analyzer.add_argument(
        "--expand-types",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Expand types when printing (default: on)",
    )
    analyzer.add_argument(
        "--color",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Color the output (default: on)",
    )
    analyzer.add_argument(
        "--json",
        action="store_true",
        default=None,
        help="Produce JSON output",
    )

    return parser
