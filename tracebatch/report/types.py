from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from tracebatch.executor.types import ProjectResult


class Outcome(Enum):
    HIGHLIGHT = auto()
    NOTHING_FOUND = auto()
    ERROR = auto()


@dataclass(frozen=True)
class ClassifiedResult:
    result: ProjectResult
    outcome: Outcome
    score: int = 0
