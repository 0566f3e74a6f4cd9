from .discovery import discover_projects
from .loader import load_settings
from .types import (
    AnalyzerOptions,
    ConfigError,
    LegendError,
    Project,
    RunSettings,
)

__all__ = [
    "discover_projects",
    "load_settings",
    "AnalyzerOptions",
    "ConfigError",
    "LegendError",
    "Project",
    "RunSettings",
]
