from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Callable

import pytest

# Stand-in for the per-file analyzer. Behaviour per trace file name comes
# from a JSON file; every invocation appends its argv to a log.
_STUB_SOURCE = """\
import json
import os
import signal
import sys
import time
from pathlib import Path

behaviors = json.loads(Path({behaviors!r}).read_text(encoding="utf-8"))
args = sys.argv[1:]
with open({log!r}, "a", encoding="utf-8") as log:
    log.write(json.dumps(args) + "\\n")

running = Path({running!r})
marker = running / str(os.getpid())
marker.touch()
live = len(list(running.iterdir()))
with open({peak!r}, "a", encoding="utf-8") as peak:
    peak.write(str(live) + "\\n")

behavior = behaviors.get(Path(args[0]).name, {{}})
time.sleep(behavior.get("sleep", 0))
marker.unlink()

sys.stdout.write(behavior.get("stdout", ""))
sys.stderr.write(behavior.get("stderr", ""))
sys.stdout.flush()
sys.stderr.flush()
if behavior.get("kill"):
    os.kill(os.getpid(), signal.SIGKILL)
sys.exit(behavior.get("exit", 0))
"""


class StubAnalyzer:
    def __init__(self, root: Path):
        self.root = root
        self.behaviors_path = root / "behaviors.json"
        self.log_path = root / "calls.log"
        self.peak_path = root / "peak.log"
        self.running = root / "running"
        self.running.mkdir()
        self.script = root / "stub_analyzer.py"
        self.script.write_text(
            _STUB_SOURCE.format(
                behaviors=str(self.behaviors_path),
                log=str(self.log_path),
                running=str(self.running),
                peak=str(self.peak_path),
            ),
            encoding="utf-8",
        )
        self.set_behaviors({})

    @property
    def command(self) -> list[str]:
        return [sys.executable, str(self.script)]

    @property
    def command_line(self) -> str:
        return f'"{sys.executable}" "{self.script}"'

    def set_behaviors(self, behaviors: dict[str, dict]) -> None:
        self.behaviors_path.write_text(json.dumps(behaviors), encoding="utf-8")

    def calls(self) -> list[list[str]]:
        if not self.log_path.exists():
            return []
        lines = self.log_path.read_text(encoding="utf-8").splitlines()
        return [json.loads(line) for line in lines]

    def calls_by_trace(self) -> dict[str, list[str]]:
        return {Path(args[0]).name: args for args in self.calls()}

    def peak(self) -> int:
        if not self.peak_path.exists():
            return 0
        return max(int(n) for n in self.peak_path.read_text(encoding="utf-8").split())


@pytest.fixture
def stub_analyzer(tmp_path: Path) -> StubAnalyzer:
    root = tmp_path / "stub"
    root.mkdir()
    return StubAnalyzer(root)


@pytest.fixture
def trace_dir(tmp_path: Path) -> Path:
    d = tmp_path / "traces"
    d.mkdir()
    return d


@pytest.fixture
def touch() -> Callable[..., Path]:
    def _touch(directory: Path, *names: str) -> Path:
        for name in names:
            (directory / name).write_text("[]", encoding="utf-8")
        return directory

    return _touch
