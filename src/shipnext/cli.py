"""CLI entrypoint.

One positional command selects what to run:
- shipnext status
- shipnext bootstrap
- shipnext simulator (alias: dev)
- shipnext doctor

CONTRACT
- Inputs: Command line arguments (parsed by Typer)
- Outputs (required):
  - Exit code 0 on success, usage, or unknown command; 1 on any fatal error
  - Console output (stdout/stderr) describing progress/results
- Invariants:
  - Usage and unknown-command paths never touch the project directory
  - Only this module turns a RunReport into a process exit code
- Failure:
  - Config errors and failed runs raise typer.Exit(1)
"""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import load_project_context
from .doctor import doctor_report
from .errors import ConfigError
from .orchestrator import Orchestrator
from .plans import PLANS
from .util.log import ConsoleLogger

app = typer.Typer(add_completion=False, help="Bootstrap Tauri v2 with iOS for an existing Next.js app.")

console = Console()

USAGE = """Usage: shipnext <command>
Commands:
  status    - Check git status
  bootstrap - Bootstrap Tauri v2 with iOS for an existing Next.js app
  simulator - Run the app in the iOS simulator (alias: dev)
  doctor    - Check the environment"""


def _version_callback(value: bool):
    if value:
        console.print(f"shipnext version: {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(
        lambda msg: sys.stderr.write(msg),
        level="DEBUG" if verbose else "WARNING",
        format="<level>{level: <8}</level> {message}",
    )


@app.command()
def main(
    command: str | None = typer.Argument(None, help="status | bootstrap | simulator | dev | doctor"),
    project_dir: Path = typer.Option(Path("."), "--project-dir", "-C", help="Next.js project root (default: current dir)."),
    config: Path | None = typer.Option(None, "--config", help="Config YAML (default: <project>/shipnext.yaml)."),
    app_name: str | None = typer.Option(None, "--app-name", help="Product name."),
    identifier: str | None = typer.Option(None, "--identifier", help="Reverse-domain bundle identifier."),
    team: str | None = typer.Option(None, "--team", help="Apple development team id."),
    device: str | None = typer.Option(None, "--device", help="Simulator device name."),
    verbose: bool = typer.Option(False, "--verbose", help="Show step transitions."),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version."
    ),
) -> None:
    """Bootstrap Tauri v2 with iOS for an existing Next.js app."""
    if command is None:
        console.print(USAGE, markup=False, highlight=False)
        return
    if command not in PLANS and command != "doctor":
        console.print(f"Unknown command: {command}", markup=False, highlight=False)
        return

    _configure_logging(verbose)

    if command == "doctor":
        _doctor(project_dir)
        return

    try:
        ctx = load_project_context(
            project_dir,
            config,
            {"app_name": app_name, "identifier": identifier, "team_id": team, "device": device},
        )
    except ConfigError as e:
        ConsoleLogger().error(f"Error: {e}")
        raise typer.Exit(code=e.exit_code)

    report = Orchestrator.for_context(ctx).run(PLANS[command](ctx))
    if not report.ok:
        raise typer.Exit(code=report.exit_code)


def _doctor(project_dir: Path) -> None:
    report = doctor_report(project_dir)
    table = Table(title="shipnext doctor")
    table.add_column("Check")
    table.add_column("Status")
    table.add_column("Details")
    for item in report.items:
        table.add_row(item.name, item.status, item.details)
    console.print(table)
    if report.ok:
        console.print("[green]OK[/green]")
    else:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
