import json
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from shipnext.artifacts.writer import ConfigWriter
from shipnext.config import ProjectContext
from shipnext.orchestrator import Orchestrator
from shipnext.steps.base import StepEnv
from shipnext.util.log import RecordingLogger
from shipnext.util.paths import LocalProbe
from shipnext.util.shell import RunOutcome

# What the real toolchain leaves behind, keyed by argv prefix.
TOOLCHAIN_EFFECTS = {
    ("cargo", "tauri", "init"): "src-tauri",
    ("cargo", "tauri", "ios", "init"): "src-tauri/gen/apple",
}


@dataclass
class StubRunner:
    """Records every invocation; optionally fails the Nth call (0-based)."""

    root: Path | None = None
    fail_at: int | None = None
    effects: dict[tuple[str, ...], str] = field(default_factory=lambda: dict(TOOLCHAIN_EFFECTS))
    calls: list[list[str]] = field(default_factory=list)

    def execute(self, command, args=()):
        argv = [command, *args]
        self.calls.append(argv)
        if self.fail_at is not None and len(self.calls) - 1 == self.fail_at:
            return RunOutcome(returncode=1, stdout=b"", stderr=b"boom")
        if self.root is not None:
            for prefix, rel in self.effects.items():
                if tuple(argv[: len(prefix)]) == prefix:
                    (self.root / rel).mkdir(parents=True, exist_ok=True)
        return RunOutcome(returncode=0, stdout=b"ok\n", stderr=b"")


@pytest.fixture
def next_project(tmp_path):
    """A minimal Next.js project directory."""
    proj = tmp_path / "app"
    proj.mkdir()
    (proj / "package.json").write_text(
        json.dumps({"name": "demo", "scripts": {"dev": "next dev"}, "dependencies": {"next": "15.0.0"}}, indent=2),
        encoding="utf-8",
    )
    return proj


def make_orchestrator(ctx: ProjectContext, runner, probe=None, log=None) -> Orchestrator:
    return Orchestrator(
        StepEnv(
            ctx=ctx,
            runner=runner,
            probe=probe or LocalProbe(ctx.project_dir),
            writer=ConfigWriter(ctx.project_dir),
            log=log or RecordingLogger(),
        )
    )
