from .executor import Executor, default_jobs
from .types import ProjectResult

__all__ = ["Executor", "ProjectResult", "default_jobs"]
