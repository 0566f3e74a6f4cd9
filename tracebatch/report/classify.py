import re

from tracebatch.executor.types import ProjectResult

from .types import ClassifiedResult, Outcome

# The analyzer exits with this code when it ran fine but found nothing notable
NO_HIGHLIGHTS_EXIT_CODE = 1

_DURATION_RE = re.compile(r"\((\d+) *ms\)")


def extract_score(stdout: str) -> int:
    # The analyzer prints its most significant finding first
    match = _DURATION_RE.search(stdout)
    return int(match.group(1)) if match else 0


def classify(result: ProjectResult) -> ClassifiedResult:
    if result.stderr or result.signal:
        return ClassifiedResult(result, Outcome.ERROR)

    if result.exit_code:
        if result.exit_code == NO_HIGHLIGHTS_EXIT_CODE:
            return ClassifiedResult(result, Outcome.NOTHING_FOUND)
        return ClassifiedResult(result, Outcome.ERROR)

    return ClassifiedResult(result, Outcome.HIGHLIGHT, extract_score(result.stdout))


def classify_all(results: list[ProjectResult]) -> list[ClassifiedResult]:
    return [classify(result) for result in results]
