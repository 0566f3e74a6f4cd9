from __future__ import annotations

import argparse
import dataclasses
import logging
import sys

from tracebatch.config import ConfigError, RunSettings, discover_projects, load_settings
from tracebatch.config.loader import parse_analyzer_command
from tracebatch.executor import Executor
from tracebatch.report import classify_all, print_report, status_code

from .args import build_parser

logger = logging.getLogger(__name__)

_OPTION_FLAGS = ("force_millis", "skip_millis", "expand_types", "color", "json")


def run_cli(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        return cmd_analyze(args)

    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    except OSError as exc:
        print(f"Internal error: {exc}", file=sys.stderr)
        return 2

    except KeyboardInterrupt:
        return 130


def main() -> None:
    sys.exit(run_cli())


def cmd_analyze(args: argparse.Namespace) -> int:
    settings = resolve_settings(args)
    projects = discover_projects(args.trace_dir)
    logger.debug("Analyzer command: %s", " ".join(settings.analyzer))

    executor = Executor(settings.analyzer, settings.options, settings.jobs)
    results = executor.run_all(projects)

    classified = classify_all(results)
    print_report(classified, len(projects))
    return status_code(classified)


def resolve_settings(args: argparse.Namespace) -> RunSettings:
    settings = load_settings(args.config) if args.config else RunSettings()

    overrides = {
        name: getattr(args, name)
        for name in _OPTION_FLAGS
        if getattr(args, name) is not None
    }
    options = dataclasses.replace(settings.options, **overrides)
    options.validate()

    analyzer = settings.analyzer
    if args.analyzer is not None:
        analyzer = parse_analyzer_command(args.analyzer)

    jobs = args.jobs if args.jobs is not None else settings.jobs

    return RunSettings(analyzer=analyzer, jobs=jobs, options=options)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )
