from __future__ import annotations

"""Artifact registry and rendering.

CONTRACT
- Inputs: ArtifactId, ProjectContext
- Outputs (required):
  - Rendered payload bytes (utf-8)
- Invariants:
  - Payloads are fixed text bundled in `shipnext.templates`
  - Only `{{token}}` placeholders are substituted; nothing else is templated
  - JSON artifacts get JSON-escaped values and must parse back as a TauriConf
- Failure:
  - Raises KeyError for a placeholder with no matching token
  - Raises pydantic.ValidationError if a JSON artifact does not validate
"""

import importlib.resources
import json
import re
from enum import Enum

from .. import templates
from ..config import ProjectContext
from .schemas import TauriConf

_TOKEN_RE = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")


class ArtifactId(str, Enum):
    NEXT_CONFIG_TS = "next.config.ts"
    NEXT_CONFIG_JS = "next.config.js"
    NEXT_CONFIG_MJS = "next.config.mjs"
    TAURI_CONF = "tauri.conf.json"
    TAURI_CONF_MINIMAL = "tauri.conf.minimal.json"

    @property
    def is_json(self) -> bool:
        return self.value.endswith(".json")


def tauri_conf_artifact(ctx: ProjectContext) -> ArtifactId:
    if ctx.conf_variant == "minimal":
        return ArtifactId.TAURI_CONF_MINIMAL
    return ArtifactId.TAURI_CONF


def load_template(artifact_id: ArtifactId) -> str:
    return importlib.resources.files(templates).joinpath(artifact_id.value).read_text(encoding="utf-8")


def substitute(text: str, tokens: dict[str, str], *, json_escape: bool = False) -> str:
    def repl(m: re.Match) -> str:
        name = m.group(1)
        if name not in tokens:
            raise KeyError(f"No value for template token: {name}")
        value = tokens[name]
        # Strip the quotes json.dumps adds; the template already has them.
        return json.dumps(value)[1:-1] if json_escape else value

    return _TOKEN_RE.sub(repl, text)


def render_artifact(artifact_id: ArtifactId, ctx: ProjectContext) -> bytes:
    text = substitute(load_template(artifact_id), ctx.tokens(), json_escape=artifact_id.is_json)
    if artifact_id.is_json:
        TauriConf.model_validate_json(text)
    return text.encode("utf-8")


if __name__ == "__main__":
    import argparse
    import sys
    from pathlib import Path

    parser = argparse.ArgumentParser(description="Render an artifact to stdout")
    parser.add_argument("artifact", choices=[a.value for a in ArtifactId])
    parser.add_argument("--app-name", default="shipnext")
    args = parser.parse_args()

    ctx = ProjectContext(project_dir=Path("."), app_name=args.app_name)
    sys.stdout.write(render_artifact(ArtifactId(args.artifact), ctx).decode("utf-8"))
