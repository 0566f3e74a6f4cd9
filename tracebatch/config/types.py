from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_ANALYZER = ("analyze-trace-file",)


@dataclass(frozen=True)
class Project:
    trace_path: Path
    types_path: Path
    config_file_path: str | None = None


@dataclass(frozen=True)
class AnalyzerOptions:
    force_millis: int = 500
    skip_millis: int = 100
    expand_types: bool = True
    color: bool = True
    json: bool = False

    def validate(self) -> None:
        if self.force_millis < 0 or self.skip_millis < 0:
            raise ConfigError("force_millis and skip_millis must be non-negative")

        if self.force_millis < self.skip_millis:
            raise ConfigError(
                f"force_millis ({self.force_millis}) must be at least skip_millis ({self.skip_millis})"
            )

    def to_args(self) -> list[str]:
        args = [
            "--force-millis",
            str(self.force_millis),
            "--skip-millis",
            str(self.skip_millis),
            "--expand-types" if self.expand_types else "--no-expand-types",
            "--color" if self.color else "--no-color",
        ]
        if self.json:
            args.append("--json")
        return args


@dataclass(frozen=True)
class RunSettings:
    analyzer: tuple[str, ...] = DEFAULT_ANALYZER
    jobs: int | None = None
    options: AnalyzerOptions = field(default_factory=AnalyzerOptions)


class ConfigError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class UnsupportedConfigFormatError(ConfigError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class LegendError(ConfigError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)
