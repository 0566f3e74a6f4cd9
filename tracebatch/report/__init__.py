from .classify import NO_HIGHLIGHTS_EXIT_CODE, classify, classify_all, extract_score
from .reporter import print_report, render_report, status_code
from .types import ClassifiedResult, Outcome

__all__ = [
    "NO_HIGHLIGHTS_EXIT_CODE",
    "classify",
    "classify_all",
    "extract_score",
    "print_report",
    "render_report",
    "status_code",
    "ClassifiedResult",
    "Outcome",
]
