"""Error taxonomy.

CONTRACT
- Every failure that should stop a run derives from BootstrapError.
- exit_code is the process exit code the CLI uses for the failure.
- Components raise; only the orchestrator catches.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .util.shell import RunOutcome


class BootstrapError(Exception):
    exit_code = 1


class PreconditionUnmet(BootstrapError):
    """A required marker file is missing from the project directory."""


class SpawnError(BootstrapError):
    """The external program could not be located or started."""

    def __init__(self, command: str, reason: str):
        super().__init__(f"Failed to execute '{command}': {reason}")
        self.command = command


class ProcessExitError(BootstrapError):
    def __init__(self, command_line: str, outcome: RunOutcome):
        super().__init__(f"Command failed: {command_line} (exit {outcome.returncode})")
        self.command_line = command_line
        self.outcome = outcome


class WriteError(BootstrapError):
    pass


class ConfigError(BootstrapError):
    pass
