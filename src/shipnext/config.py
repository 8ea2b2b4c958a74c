from __future__ import annotations

"""Project configuration.

CONTRACT
- Inputs: project directory, optional YAML file (shipnext.yaml), CLI overrides
- Outputs (required):
  - Validated, frozen ProjectContext
- Invariants:
  - identifier is reverse-domain (`com.example.app`)
  - team_id is a 10-character Apple team id
  - Unknown keys are rejected
  - Loading never writes to the project directory
- Failure:
  - Raises ConfigError on unreadable file, invalid YAML or schema mismatch
"""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Literal

import yaml
from loguru import logger

from .errors import ConfigError

ConfVariant = Literal["full", "minimal"]

CONFIG_FILENAME = "shipnext.yaml"


@dataclass(frozen=True)
class ProjectContext:
    project_dir: Path
    app_name: str = "shipnext"
    identifier: str = "com.shipnext.dev"
    team_id: str = "NXR8WH6TN8"
    dev_url: str = "http://localhost:3000"
    frontend_dist: str = "../out"
    version: str = "0.1.0"
    minimum_ios: str = "13.0"
    device: str = "iPhone 15 Pro"
    conf_variant: ConfVariant = "full"
    tauri_cli_version: str = "^2.0.0-beta"

    def tokens(self) -> dict[str, str]:
        """Values substituted into artifact templates."""
        return {
            "app_name": self.app_name,
            "identifier": self.identifier,
            "team_id": self.team_id,
            "dev_url": self.dev_url,
            "frontend_dist": self.frontend_dist,
            "version": self.version,
            "minimum_ios": self.minimum_ios,
        }


CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "app_name": {"type": "string", "pattern": "^[A-Za-z0-9][A-Za-z0-9 _-]{0,63}$"},
        "identifier": {
            "type": "string",
            "pattern": "^[A-Za-z][A-Za-z0-9-]*(\\.[A-Za-z][A-Za-z0-9-]*)+$",
        },
        "team_id": {"type": "string", "pattern": "^[A-Z0-9]{10}$"},
        "dev_url": {"type": "string", "pattern": "^https?://"},
        "frontend_dist": {"type": "string"},
        "version": {"type": "string", "pattern": "^[0-9]+\\.[0-9]+\\.[0-9]+"},
        "minimum_ios": {"type": "string"},
        "device": {"type": "string"},
        "conf_variant": {"type": "string", "enum": ["full", "minimal"]},
        "tauri_cli_version": {"type": "string"},
    },
    "additionalProperties": False,
}


def _validate(data: Any, source: str) -> dict[str, Any]:
    import jsonschema  # lazy import

    try:
        jsonschema.validate(instance=data, schema=CONFIG_SCHEMA)
    except jsonschema.ValidationError as e:
        raise ConfigError(f"Invalid {source}: {e.message}") from e
    return data


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    return _validate(data, str(path))


def load_project_context(
    project_dir: Path,
    config_file: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> ProjectContext:
    """Build the context from defaults, then the config file, then overrides."""
    values: dict[str, Any] = {}
    if config_file is not None:
        if not config_file.exists():
            raise ConfigError(f"Config file not found: {config_file}")
        values.update(_read_config_file(config_file))
    else:
        default_file = project_dir / CONFIG_FILENAME
        if default_file.exists():
            logger.debug(f"using {default_file}")
            values.update(_read_config_file(default_file))

    given = {k: v for k, v in (overrides or {}).items() if v is not None}
    if given:
        values.update(_validate(given, "command-line options"))

    ctx = ProjectContext(project_dir=project_dir)
    known = {f.name for f in fields(ProjectContext)}
    return replace(ctx, **{k: v for k, v in values.items() if k in known})


if __name__ == "__main__":
    import argparse
    import sys

    parser = argparse.ArgumentParser(description="Config Loader CLI")
    parser.add_argument("--project-dir", default=".", help="Project directory")
    parser.add_argument("--config", help="Path to shipnext.yaml")
    args = parser.parse_args()

    try:
        ctx = load_project_context(Path(args.project_dir), Path(args.config) if args.config else None)
        for k, v in ctx.tokens().items():
            print(f"{k}: {v}")
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
