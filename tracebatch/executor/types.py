from dataclasses import dataclass

from tracebatch.config.types import Project


@dataclass(frozen=True)
class ProjectResult:
    project: Project
    stdout: str
    stderr: str
    exit_code: int | None
    signal: str | None
