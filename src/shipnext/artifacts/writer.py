"""Config writer.

CONTRACT
- Inputs: ArtifactId, destination path, rendered payload
- Outputs (required):
  - destination holds exactly `payload` (create-or-truncate)
- Invariants:
  - Never merges with prior content
  - Never creates missing parent directories
- Failure:
  - Raises WriteError if the parent is missing or the write fails
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from ..errors import WriteError
from .templates import ArtifactId


@dataclass(frozen=True)
class ConfigWriter:
    root: Path

    def write(self, artifact_id: ArtifactId, destination: str, payload: bytes) -> Path:
        target = self.root / destination
        if not target.parent.is_dir():
            raise WriteError(f"Cannot write {destination}: directory {target.parent} does not exist")
        try:
            target.write_bytes(payload)
        except OSError as e:
            raise WriteError(f"Cannot write {destination}: {e}") from e
        logger.debug(f"wrote {artifact_id.value} -> {target} ({len(payload)} bytes)")
        return target
