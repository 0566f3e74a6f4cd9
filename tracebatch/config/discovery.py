from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Mapping

from .types import LegendError, Project

logger = logging.getLogger(__name__)

LEGEND_FILE_NAME = "legend.json"

_TRACE_FILE_RE = re.compile(r"^trace(.*\.json)$")


def discover_projects(trace_dir: str | Path) -> list[Project]:
    root = Path(trace_dir).resolve()
    legend_path = root / LEGEND_FILE_NAME

    if legend_path.is_file():
        try:
            projects = load_legend(legend_path, root)
        except LegendError as exc:
            logger.error("Error reading legend file: %s", exc)
        else:
            logger.debug("Loaded %d project(s) from %s", len(projects), legend_path)
            return projects

    projects = scan_trace_dir(root)
    logger.debug("Found %d trace file(s) in %s", len(projects), root)
    return projects


def load_legend(legend_path: Path, root: Path) -> list[Project]:
    try:
        raw = json.loads(legend_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise LegendError(f"{legend_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise LegendError(f"{legend_path}: invalid JSON: {exc}") from exc

    if not isinstance(raw, list):
        raise LegendError(
            f"{legend_path}: top-level value is not a list: {type(raw)}"
        )

    return [_build_project(root, index, entry) for index, entry in enumerate(raw)]


def _build_project(root: Path, index: int, entry: Any) -> Project:
    if not isinstance(entry, Mapping):
        raise LegendError(f"entry {index} must be an object")

    for key in ("tracePath", "typesPath"):
        if not isinstance(entry.get(key), str) or len(entry[key].strip()) < 1:
            raise LegendError(f"entry {index}: '{key}' should be a non-empty string")

    label = entry.get("configFilePath")
    if label is not None and not isinstance(label, str):
        raise LegendError(f"entry {index}: 'configFilePath' should be a string")

    return Project(
        trace_path=_reroot(root, entry["tracePath"]),
        types_path=_reroot(root, entry["typesPath"]),
        config_file_path=label or None,
    )


def _reroot(root: Path, name: str) -> Path:
    # Only the base name is honoured so entries cannot point outside root.
    # Both separators are stripped whatever the host platform.
    base = name.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]
    if base in ("", ".", "..") or "\x00" in base:
        raise LegendError(f"{name!r} does not name a file")
    return root / base


def scan_trace_dir(root: Path) -> list[Project]:
    projects = []

    with os.scandir(root) as entries:
        names = sorted(
            entry.name for entry in entries if entry.is_file(follow_symlinks=False)
        )

    for name in names:
        match = _TRACE_FILE_RE.match(name)
        if match:
            projects.append(
                Project(
                    trace_path=root / name,
                    types_path=root / f"types{match.group(1)}",
                )
            )

    return projects
