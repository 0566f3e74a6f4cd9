import json
import shlex
import tomllib
from pathlib import Path
from typing import Any, Mapping

import yaml

from .types import (
    AnalyzerOptions,
    ConfigError,
    RunSettings,
    UnsupportedConfigFormatError,
)


def load_settings(path: str | Path) -> RunSettings:
    pure_path = Path(path).expanduser().resolve()

    if not pure_path.exists():
        raise ConfigError(f"Config file not found: {pure_path}")

    if not pure_path.is_file():
        raise ConfigError(f"Config path is not a file: {pure_path}")

    fmt = _detect_format(pure_path)
    raw_file = _parse_file(pure_path, fmt)
    return _build_settings(raw_file)


def _detect_format(path: Path) -> str:
    fmt = path.suffix
    match fmt:
        case ".yaml" | ".yml":
            return "yaml"
        case ".toml":
            return "toml"
        case ".json":
            return "json"
        case _:
            raise UnsupportedConfigFormatError(
                f"Non supported file extension: {fmt}\n Expected format: .yml/.yaml, .toml, .json"
            )


def _parse_file(path: Path, fmt: str) -> Mapping[str, Any]:
    match fmt:
        case "yaml":
            return _parse_yaml(path)
        case "toml":
            return _parse_toml(path)
        case "json":
            return _parse_json(path)
        case _:
            raise AssertionError("Unreachable")


def _parse_yaml(path: Path) -> Mapping[str, Any]:
    try:
        raw_file = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid YAML") from exc

    # An empty YAML document means "all defaults"
    if raw_file is None:
        return {}

    if not isinstance(raw_file, Mapping):
        raise ConfigError(
            f"{path}: YAML parsed successfully but top-level value is not an object: {type(raw_file)}"
        )

    return raw_file


def _parse_toml(path: Path) -> Mapping[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: invalid TOML") from exc


def _parse_json(path: Path) -> Mapping[str, Any]:
    try:
        raw_file = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path}: invalid JSON") from exc

    if not isinstance(raw_file, Mapping):
        raise ConfigError(
            f"{path}: JSON parsed successfully but top-level value is not an object: {type(raw_file)}"
        )

    return raw_file


def _build_settings(raw: Mapping[str, Any]) -> RunSettings:
    keys = {"analyzer", "jobs", "options"}
    settings = RunSettings()

    for key in raw.keys():
        if key not in keys:
            raise ConfigError(f"Can't process: {key}")

    analyzer = settings.analyzer
    if "analyzer" in raw:
        analyzer = parse_analyzer_command(raw["analyzer"])

    jobs = settings.jobs
    if "jobs" in raw:
        jobs = raw["jobs"]
        # bool is an int subclass
        if isinstance(jobs, bool) or not isinstance(jobs, int):
            raise ConfigError(f"'jobs' must be an integer, got {type(jobs)}")
        if jobs < 1:
            raise ConfigError("'jobs' must be at least 1")

    options = settings.options
    if "options" in raw:
        options = _build_options(raw["options"])

    return RunSettings(analyzer=analyzer, jobs=jobs, options=options)


def parse_analyzer_command(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        try:
            parts = shlex.split(value)
        except ValueError as exc:
            raise ConfigError(f"Invalid analyzer command: {value!r}") from exc
    elif isinstance(value, list):
        for item in value:
            if not isinstance(item, str):
                raise ConfigError(f"{item} should be a string in the analyzer command")
        parts = list(value)
    else:
        raise ConfigError(
            f"'analyzer' must be a string or a list of strings, got {type(value)}"
        )

    if len(parts) < 1 or len(parts[0].strip()) < 1:
        raise ConfigError("Analyzer command missing")

    return tuple(parts)


def _build_options(fields: Any) -> AnalyzerOptions:
    ints = {"force_millis", "skip_millis"}
    flags = {"expand_types", "color", "json"}

    if not isinstance(fields, Mapping):
        raise ConfigError(f"'options' must be a mapping, got {type(fields)}")

    values: dict[str, Any] = {}
    for key, item in fields.items():
        if key in ints:
            if isinstance(item, bool) or not isinstance(item, int):
                raise ConfigError(f"options.{key} should be an integer")
        elif key in flags:
            if not isinstance(item, bool):
                raise ConfigError(f"options.{key} should be a boolean")
        else:
            raise ConfigError(f"options: Can't process: {key}")

        values[key] = item

    options = AnalyzerOptions(**values)
    options.validate()
    return options
