from __future__ import annotations

"""Plan construction.

CONTRACT
- Inputs: ProjectContext
- Outputs (required):
  - A fixed, ordered Plan of Steps (bootstrap, status, simulator)
- Invariants:
  - Plans are rebuilt on every run; nothing is cached between runs
  - Bootstrap always starts with the package.json marker check
  - Only `tauri init` and `tauri ios init` are existence-gated; installs,
    builds and artifact writes always run
"""

from dataclasses import dataclass
from typing import Callable

from .artifacts.templates import ArtifactId, tauri_conf_artifact
from .config import ProjectContext
from .steps.base import RegisterScript, RequirePath, RunProcess, Step, WriteArtifact

MARKER_FILE = "package.json"
NATIVE_ROOT = "src-tauri"
IOS_ROOT = f"{NATIVE_ROOT}/gen/apple"
NATIVE_CONF = f"{NATIVE_ROOT}/tauri.conf.json"


@dataclass(frozen=True)
class Plan:
    name: str
    steps: tuple[Step, ...]
    banner: str = ""
    summary: tuple[str, ...] = ()


def bootstrap_plan(ctx: ProjectContext) -> Plan:
    """Convert a Next.js project into a Tauri v2 app with iOS support."""
    steps = (
        Step(
            "check-project",
            RequirePath(
                MARKER_FILE,
                "package.json not found. Please run this in a Next.js project directory.",
            ),
        ),
        Step(
            "next-config",
            WriteArtifact(
                ArtifactId.NEXT_CONFIG_TS,
                "next.config.ts",
                alternatives=(
                    ("next.config.ts", ArtifactId.NEXT_CONFIG_TS),
                    ("next.config.mjs", ArtifactId.NEXT_CONFIG_MJS),
                    ("next.config.js", ArtifactId.NEXT_CONFIG_JS),
                ),
            ),
        ),
        Step(
            "install-tauri-cli",
            RunProcess("cargo", ("install", "tauri-cli", "--version", ctx.tauri_cli_version)),
        ),
        Step("add-tauri-api", RunProcess("npm", ("install", "@tauri-apps/api", "--save"))),
        Step("add-tauri-cli-js", RunProcess("npm", ("install", "@tauri-apps/cli", "--save-dev"))),
        Step("register-tauri-script", RegisterScript("tauri", "tauri")),
        Step(
            "tauri-init",
            RunProcess(
                "cargo",
                (
                    "tauri",
                    "init",
                    "--ci",
                    "--app-name",
                    ctx.app_name,
                    "--frontend-dist",
                    ctx.frontend_dist,
                    "--dev-url",
                    ctx.dev_url,
                ),
            ),
            skip_if_exists=NATIVE_ROOT,
            skip_message=f"{NATIVE_ROOT} already exists, skipping initialization",
        ),
        Step(
            "ios-init",
            RunProcess("cargo", ("tauri", "ios", "init")),
            skip_if_exists=IOS_ROOT,
            skip_message="iOS support already initialized, skipping ios init",
        ),
        Step("tauri-conf", WriteArtifact(tauri_conf_artifact(ctx), NATIVE_CONF)),
        Step("npm-reinstall", RunProcess("npm", ("install",))),
        Step("ios-build", RunProcess("cargo", ("tauri", "ios", "build"))),
    )
    return Plan(
        name="bootstrap",
        steps=steps,
        banner="Bootstrapping Tauri v2 with iOS support...",
        summary=(
            "Tauri v2 with iOS bootstrapped successfully!",
            "To run:",
            "  npm run tauri dev  # For development",
            f"  Check {IOS_ROOT}/build/arm64/{ctx.app_name}.ipa for the .ipa",
        ),
    )


def status_plan(ctx: ProjectContext) -> Plan:
    return Plan(name="status", steps=(Step("git-status", RunProcess("git", ("status",))),))


def simulator_plan(ctx: ProjectContext) -> Plan:
    return Plan(
        name="simulator",
        steps=(Step("ios-dev", RunProcess("cargo", ("tauri", "ios", "dev", ctx.device))),),
        banner="Let's start the simulation for you as well",
        summary=(
            "Tauri v2 with iOS bootstrapped and Simulator started successfully!",
            f"Check the Simulator for your app running on {ctx.device}",
        ),
    )


PLANS: dict[str, Callable[[ProjectContext], Plan]] = {
    "status": status_plan,
    "bootstrap": bootstrap_plan,
    "simulator": simulator_plan,
    "dev": simulator_plan,
}
