from __future__ import annotations

"""User-facing output channel.

CONTRACT
- Inputs: messages at info/warn/error level
- Outputs:
  - ConsoleLogger prints info/warn to stdout, error to stderr (rich styles)
  - RecordingLogger keeps (level, message) tuples in memory
- Invariants:
  - Messages are printed verbatim (no rich markup interpretation)
  - Logging never raises into the caller's control flow
"""

from dataclasses import dataclass, field
from typing import Protocol

from rich.console import Console


class Logger(Protocol):
    def info(self, message: str, *, style: str | None = None) -> None: ...

    def warn(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


@dataclass
class ConsoleLogger:
    out: Console = field(default_factory=Console)
    err: Console = field(default_factory=lambda: Console(stderr=True))

    def info(self, message: str, *, style: str | None = None) -> None:
        self.out.print(message, style=style, markup=False, highlight=False, soft_wrap=True)

    def warn(self, message: str) -> None:
        self.out.print(message, style="yellow", markup=False, highlight=False, soft_wrap=True)

    def error(self, message: str) -> None:
        self.err.print(message, style="red", markup=False, highlight=False, soft_wrap=True)


@dataclass
class RecordingLogger:
    records: list[tuple[str, str]] = field(default_factory=list)

    def info(self, message: str, *, style: str | None = None) -> None:
        self.records.append(("info", message))

    def warn(self, message: str) -> None:
        self.records.append(("warn", message))

    def error(self, message: str) -> None:
        self.records.append(("error", message))

    def messages(self, level: str | None = None) -> list[str]:
        return [m for lvl, m in self.records if level is None or lvl == level]
