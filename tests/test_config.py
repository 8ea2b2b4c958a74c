from pathlib import Path

import pytest

from shipnext.config import ProjectContext, load_project_context
from shipnext.errors import ConfigError


def test_defaults(tmp_path):
    ctx = load_project_context(tmp_path)
    assert ctx == ProjectContext(project_dir=tmp_path)
    assert ctx.app_name == "shipnext"
    assert ctx.identifier == "com.shipnext.dev"
    assert ctx.dev_url == "http://localhost:3000"


def test_reads_project_yaml(tmp_path):
    (tmp_path / "shipnext.yaml").write_text(
        "app_name: demoapp\nidentifier: com.example.demo\nteam_id: ABCDE12345\nconf_variant: minimal\n"
    )
    ctx = load_project_context(tmp_path)
    assert ctx.app_name == "demoapp"
    assert ctx.identifier == "com.example.demo"
    assert ctx.team_id == "ABCDE12345"
    assert ctx.conf_variant == "minimal"


def test_overrides_beat_file(tmp_path):
    (tmp_path / "shipnext.yaml").write_text("app_name: fromfile\n")
    ctx = load_project_context(tmp_path, overrides={"app_name": "fromcli", "team_id": None})
    assert ctx.app_name == "fromcli"
    assert ctx.team_id == "NXR8WH6TN8"


def test_explicit_config_file(tmp_path):
    cfg = tmp_path / "elsewhere.yaml"
    cfg.write_text("device: iPhone 16\n")
    ctx = load_project_context(tmp_path / "proj", cfg)
    assert ctx.device == "iPhone 16"
    assert ctx.project_dir == tmp_path / "proj"


def test_missing_explicit_config(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_project_context(tmp_path, tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "body",
    [
        "identifier: notreverse\n",
        "team_id: short\n",
        "conf_variant: huge\n",
        "bogus_key: 1\n",
        "- just\n- a list\n",
    ],
)
def test_invalid_config_rejected(tmp_path, body):
    (tmp_path / "shipnext.yaml").write_text(body)
    with pytest.raises(ConfigError):
        load_project_context(tmp_path)


def test_invalid_yaml(tmp_path):
    (tmp_path / "shipnext.yaml").write_text("app_name: [unclosed\n")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_project_context(tmp_path)


def test_invalid_override(tmp_path):
    with pytest.raises(ConfigError, match="command-line"):
        load_project_context(tmp_path, overrides={"identifier": "bad id"})


def test_tokens():
    ctx = ProjectContext(project_dir=Path("."), app_name="demoapp")
    tokens = ctx.tokens()
    assert tokens["app_name"] == "demoapp"
    assert set(tokens) >= {"app_name", "identifier", "team_id", "dev_url"}
