import json

import pytest

import shipnext
from shipnext.errors import ConfigError
from shipnext.util.log import RecordingLogger
from shipnext.util.shell import RunOutcome

SCAFFOLD = {
    ("tauri", "init"): "src-tauri",
    ("tauri", "ios", "init"): "src-tauri/gen/apple",
}


def test_bootstrap_api(next_project, monkeypatch):
    calls = []

    def fake_run_cmd(command, args, cwd):
        calls.append([command, *args])
        for prefix, rel in SCAFFOLD.items():
            if command == "cargo" and tuple(args[: len(prefix)]) == prefix:
                (cwd / rel).mkdir(parents=True, exist_ok=True)
        return RunOutcome(0)

    monkeypatch.setattr("shipnext.util.shell.run_cmd", fake_run_cmd)
    result = shipnext.bootstrap(next_project, log=RecordingLogger(), app_name="demoapp")

    assert result["status"] == "completed"
    assert result["error"] is None
    assert calls[-1] == ["cargo", "tauri", "ios", "build"]
    conf = json.loads((next_project / "src-tauri" / "tauri.conf.json").read_text())
    assert conf["productName"] == "demoapp"


def test_bootstrap_api_failure(tmp_path):
    result = shipnext.bootstrap(tmp_path, log=RecordingLogger())
    assert result["status"] == "failed"
    assert result["failed_step"] == "check-project"
    assert result["steps"]["next-config"] == "pending"


def test_bootstrap_api_bad_override(tmp_path):
    with pytest.raises(ConfigError):
        shipnext.bootstrap(tmp_path, log=RecordingLogger(), team_id="x")
