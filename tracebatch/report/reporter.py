from __future__ import annotations

import sys
from typing import Sequence, TextIO

from tracebatch.config.types import Project

from .types import ClassifiedResult, Outcome

EXIT_HIGHLIGHTS = 0
EXIT_NOTHING_FOUND = 1
EXIT_ERROR = 2


def rank_highlights(classified: Sequence[ClassifiedResult]) -> list[ClassifiedResult]:
    highlights = [c for c in classified if c.outcome is Outcome.HIGHLIGHT]
    # Descending score, trace path breaks ties so completion order never matters
    return sorted(
        highlights, key=lambda c: (-c.score, str(c.result.project.trace_path))
    )


def errors_of(classified: Sequence[ClassifiedResult]) -> list[ClassifiedResult]:
    return [c for c in classified if c.outcome is Outcome.ERROR]


def describe_project(project: Project) -> str:
    name = project.trace_path.name
    if project.config_file_path:
        return f"{project.config_file_path} ({name})"
    return name


def render_report(
    classified: Sequence[ClassifiedResult], project_count: int
) -> list[str]:
    blocks: list[list[str]] = []

    for entry in rank_highlights(classified):
        project = entry.result.project
        block = []
        if project_count > 1 or project.config_file_path:
            block.append(f"Analyzed {describe_project(project)}")
        block.append(entry.result.stdout)
        blocks.append(block)

    for entry in errors_of(classified):
        result = entry.result
        block = [f"Error analyzing {describe_project(result.project)}"]
        if result.stderr:
            block.append(result.stderr)
        elif result.exit_code:
            block.append(f"Exited with code {result.exit_code}")
        elif result.signal:
            block.append(f"Terminated by signal {result.signal}")
        blocks.append(block)

    interesting = len(blocks)
    nothing_count = project_count - interesting
    if nothing_count > 0 or project_count == 0:
        other = " other" if interesting else ""
        blocks.append([f"Found nothing in {nothing_count}{other} project(s)"])

    lines: list[str] = []
    for block in blocks:
        if lines:
            lines.append("")
        lines.extend(block)
    return lines


def status_code(classified: Sequence[ClassifiedResult]) -> int:
    outcomes = {c.outcome for c in classified}
    if Outcome.ERROR in outcomes:
        return EXIT_ERROR
    if Outcome.HIGHLIGHT in outcomes:
        return EXIT_HIGHLIGHTS
    return EXIT_NOTHING_FOUND


def print_report(
    classified: Sequence[ClassifiedResult],
    project_count: int,
    file: TextIO | None = None,
) -> None:
    out = file if file is not None else sys.stdout
    for line in render_report(classified, project_count):
        print(line, file=out)
