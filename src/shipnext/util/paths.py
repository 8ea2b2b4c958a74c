from __future__ import annotations

"""Filesystem probe.

CONTRACT
- Inputs: project-relative paths
- Outputs:
  - exists() answers whether a path is present right now
- Invariants:
  - Read-only; never caches between calls
  - Only used to decide "has this step's effect already happened"
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from loguru import logger


class FilesystemProbe(Protocol):
    def exists(self, path: str) -> bool: ...


@dataclass(frozen=True)
class LocalProbe:
    root: Path

    def exists(self, path: str) -> bool:
        present = (self.root / path).exists()
        logger.debug(f"probe {path}: {'present' if present else 'absent'}")
        return present


@dataclass
class MemoryProbe:
    """In-memory stand-in; a path exists if it or any child was added."""

    paths: set[str] = field(default_factory=set)

    def add(self, path: str) -> None:
        self.paths.add(path.strip("/"))

    def exists(self, path: str) -> bool:
        path = path.strip("/")
        return any(p == path or p.startswith(path + "/") for p in self.paths)
