"""Step model.

CONTRACT
- Inputs: a Step (precondition + action) and a StepEnv (runner, probe, writer, context)
- Outputs (required):
  - Action effects: an external process run, an artifact write, or a package.json merge
- Invariants:
  - Steps are immutable; a Step has no identity beyond its position in a Plan
  - A Step with `skip_if_exists` set is skipped when that path is present
  - Actions raise BootstrapError subclasses; they never exit the process
- Failure:
  - PreconditionUnmet, SpawnError, ProcessExitError, WriteError
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, Union

from ..artifacts.templates import ArtifactId, render_artifact
from ..artifacts.writer import ConfigWriter
from ..config import ProjectContext
from ..errors import PreconditionUnmet, ProcessExitError, WriteError
from ..util.log import Logger
from ..util.paths import FilesystemProbe
from ..util.shell import RunOutcome, format_command


class StepState(str, Enum):
    PENDING = "pending"
    SKIPPED = "skipped"
    APPLYING = "applying"
    DONE = "done"
    ABORTED = "aborted"


class Runner(Protocol):
    def execute(self, command: str, args: list[str] | tuple[str, ...] = ()) -> RunOutcome: ...


@dataclass(frozen=True)
class StepEnv:
    ctx: ProjectContext
    runner: Runner
    probe: FilesystemProbe
    writer: ConfigWriter
    log: Logger


@dataclass(frozen=True)
class RequirePath:
    path: str
    message: str = ""

    def apply(self, env: StepEnv) -> None:
        if not env.probe.exists(self.path):
            raise PreconditionUnmet(self.message or f"{self.path} not found in {env.ctx.project_dir}")


@dataclass(frozen=True)
class RunProcess:
    command: str
    args: tuple[str, ...] = ()

    def apply(self, env: StepEnv) -> None:
        outcome = env.runner.execute(self.command, list(self.args))
        if not outcome.success:
            raise ProcessExitError(format_command(self.command, self.args), outcome)


@dataclass(frozen=True)
class WriteArtifact:
    """Write an artifact; `alternatives` redirect the write to a file that already exists.

    Each alternative is (destination, artifact). The first one whose
    destination exists wins; otherwise `destination` gets `artifact_id`.
    """

    artifact_id: ArtifactId
    destination: str
    alternatives: tuple[tuple[str, ArtifactId], ...] = ()

    def resolve(self, probe: FilesystemProbe) -> tuple[str, ArtifactId]:
        for dest, artifact in self.alternatives:
            if probe.exists(dest):
                return dest, artifact
        return self.destination, self.artifact_id

    def apply(self, env: StepEnv) -> None:
        dest, artifact = self.resolve(env.probe)
        env.writer.write(artifact, dest, render_artifact(artifact, env.ctx))
        env.log.info(f"Wrote {dest}", style="yellow")


@dataclass(frozen=True)
class RegisterScript:
    """Merge one entry into package.json's `scripts` object."""

    name: str
    script: str
    manifest: str = "package.json"

    def apply(self, env: StepEnv) -> None:
        path = env.ctx.project_dir / self.manifest
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise WriteError(f"Cannot read {self.manifest}: {e}") from e
        if not isinstance(data, dict):
            raise WriteError(f"{self.manifest} is not a JSON object")
        scripts = data.get("scripts")
        if not isinstance(scripts, dict):
            scripts = {}
            data["scripts"] = scripts
        scripts[self.name] = self.script
        try:
            path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        except OSError as e:
            raise WriteError(f"Cannot write {self.manifest}: {e}") from e
        env.log.info(f"Added '{self.name}': '{self.script}' to {self.manifest} scripts", style="yellow")


Action = Union[RequirePath, RunProcess, WriteArtifact, RegisterScript]


@dataclass(frozen=True)
class Step:
    name: str
    action: Action
    skip_if_exists: str | None = None
    skip_message: str = ""

    def is_satisfied(self, probe: FilesystemProbe) -> bool:
        if self.skip_if_exists is None:
            return False
        return probe.exists(self.skip_if_exists)

    def apply(self, env: StepEnv) -> None:
        self.action.apply(env)
