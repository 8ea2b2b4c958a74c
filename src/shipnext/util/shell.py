from __future__ import annotations

"""Process execution.

CONTRACT
- Inputs: program name, argument list, cwd
- Outputs (required):
  - RunOutcome(returncode, stdout, stderr) with fully captured bytes
- Invariants:
  - Never uses a shell; arguments are passed verbatim
  - stdin is /dev/null; no timeout is applied
  - ProcessRunner logs the command line before and the result after
- Failure:
  - Raises SpawnError if the program or the working directory cannot be found,
    or the program cannot be started
  - Does NOT raise on non-zero exit; caller inspects `success`
"""

import os
import shlex
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import SpawnError
from .log import ConsoleLogger, Logger


def which(cmd: str) -> str | None:
    for p in os.environ.get("PATH", "").split(os.pathsep):
        candidate = Path(p) / cmd
        if candidate.exists() and os.access(candidate, os.X_OK):
            return str(candidate)
    return None


def format_command(command: str, args: list[str] | tuple[str, ...]) -> str:
    return shlex.join([command, *args])


@dataclass(frozen=True)
class RunOutcome:
    returncode: int
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def stdout_text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")


def run_cmd(command: str, args: list[str] | tuple[str, ...], cwd: Path) -> RunOutcome:
    """Run one program to completion and capture both streams in memory."""
    if not Path(cwd).is_dir():
        raise SpawnError(command, f"working directory {cwd} does not exist")
    try:
        p = subprocess.run(
            [command, *args],
            cwd=str(cwd),
            shell=False,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except FileNotFoundError as e:
        raise SpawnError(command, "program not found") from e
    except OSError as e:
        raise SpawnError(command, str(e)) from e
    return RunOutcome(returncode=p.returncode, stdout=p.stdout, stderr=p.stderr)


@dataclass
class ProcessRunner:
    cwd: Path = Path(".")
    log: Logger = field(default_factory=ConsoleLogger)

    def execute(self, command: str, args: list[str] | tuple[str, ...] = ()) -> RunOutcome:
        self.log.info(f"Running command: {format_command(command, args)}", style="yellow")
        outcome = run_cmd(command, args, self.cwd)
        if outcome.success:
            self.log.info("Command succeeded", style="green")
            if outcome.stdout:
                self.log.info(f"Output: {outcome.stdout_text.rstrip()}", style="cyan")
        else:
            self.log.error(f"Command failed (exit {outcome.returncode})")
            if outcome.stderr:
                self.log.error(f"Error: {outcome.stderr_text.rstrip()}")
        return outcome


if __name__ == "__main__":
    import argparse
    import sys

    parser = argparse.ArgumentParser(description="Run one external program")
    parser.add_argument("--cwd", default=".", help="Working directory")
    parser.add_argument("argv", nargs="+", help="Program and arguments")
    args = parser.parse_args()

    try:
        res = ProcessRunner(cwd=Path(args.cwd)).execute(args.argv[0], args.argv[1:])
        sys.exit(res.returncode)
    except SpawnError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
