import logging
import os
import signal
import subprocess
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from tracebatch.config import AnalyzerOptions, ConfigError, Project

from .types import ProjectResult

logger = logging.getLogger(__name__)


def default_jobs() -> int:
    return os.cpu_count() or 1


class Executor:
    def __init__(
        self,
        analyzer_command: Sequence[str],
        options: AnalyzerOptions,
        jobs: int | None = None,
    ):
        if jobs is None:
            jobs = default_jobs()
        if jobs < 1:
            raise ConfigError(f"jobs must be at least 1, got {jobs}")

        self.analyzer_command = list(analyzer_command)
        self.options = options
        self.jobs = jobs

    def run_all(self, projects: Sequence[Project]) -> list[ProjectResult]:
        if not projects:
            return []

        logger.debug(
            "Analyzing %d project(s) with up to %d worker(s)", len(projects), self.jobs
        )

        # Each worker thread blocks on one child process, so the pool size
        # bounds the number of live analyzers. map() keeps input order.
        with ThreadPoolExecutor(max_workers=self.jobs) as pool:
            return list(pool.map(self.run_project, projects))

    def build_args(self, project: Project) -> list[str]:
        args = [*self.analyzer_command, str(project.trace_path)]
        if project.types_path.is_file():
            args.append(str(project.types_path))
        args.extend(self.options.to_args())
        return args

    def run_project(self, project: Project) -> ProjectResult:
        args = self.build_args(project)
        logger.debug("Starting: %s", " ".join(args))

        start = time.monotonic()
        try:
            result = subprocess.run(
                args,
                capture_output=True,
                text=True,
                errors="replace",
            )
        except (OSError, ValueError) as exc:
            logger.debug("Could not start analyzer for %s: %s", project.trace_path, exc)
            return ProjectResult(
                project,
                "",
                f"Failed to start analyzer: {exc}",
                None,
                None,
            )
        duration = time.monotonic() - start

        exit_code, signal_name = _split_returncode(result.returncode)
        logger.debug(
            "Finished %s in %.3fs (exit code = %s, signal = %s)",
            project.trace_path,
            duration,
            exit_code,
            signal_name,
        )

        return ProjectResult(
            project,
            result.stdout.strip(),
            result.stderr.strip(),
            exit_code,
            signal_name,
        )


def _split_returncode(returncode: int) -> tuple[int | None, str | None]:
    # subprocess reports death by signal N as -N on POSIX
    if returncode >= 0:
        return returncode, None

    try:
        return None, signal.Signals(-returncode).name
    except ValueError:
        return None, str(-returncode)
