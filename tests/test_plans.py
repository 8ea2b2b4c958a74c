from pathlib import Path

from shipnext.artifacts.templates import ArtifactId
from shipnext.config import ProjectContext
from shipnext.plans import PLANS, bootstrap_plan, simulator_plan, status_plan
from shipnext.steps.base import RequirePath, RunProcess, WriteArtifact


def _ctx(**kw):
    return ProjectContext(project_dir=Path("."), **kw)


def test_bootstrap_order():
    plan = bootstrap_plan(_ctx())
    assert [s.name for s in plan.steps] == [
        "check-project",
        "next-config",
        "install-tauri-cli",
        "add-tauri-api",
        "add-tauri-cli-js",
        "register-tauri-script",
        "tauri-init",
        "ios-init",
        "tauri-conf",
        "npm-reinstall",
        "ios-build",
    ]
    first = plan.steps[0].action
    assert isinstance(first, RequirePath) and first.path == "package.json"


def test_only_scaffold_steps_are_gated():
    gated = {s.name: s.skip_if_exists for s in bootstrap_plan(_ctx()).steps if s.skip_if_exists}
    assert gated == {"tauri-init": "src-tauri", "ios-init": "src-tauri/gen/apple"}


def test_bootstrap_uses_context():
    plan = bootstrap_plan(_ctx(app_name="demoapp", tauri_cli_version="^2.1", conf_variant="minimal"))
    steps = {s.name: s.action for s in plan.steps}

    assert steps["install-tauri-cli"] == RunProcess("cargo", ("install", "tauri-cli", "--version", "^2.1"))
    assert "demoapp" in steps["tauri-init"].args
    assert steps["tauri-conf"] == WriteArtifact(ArtifactId.TAURI_CONF_MINIMAL, "src-tauri/tauri.conf.json")
    assert any("arm64/demoapp.ipa" in line for line in plan.summary)


def test_status_and_simulator():
    assert status_plan(_ctx()).steps[0].action == RunProcess("git", ("status",))
    sim = simulator_plan(_ctx(device="iPhone 16"))
    assert sim.steps[0].action == RunProcess("cargo", ("tauri", "ios", "dev", "iPhone 16"))
    assert PLANS["dev"] is PLANS["simulator"]
