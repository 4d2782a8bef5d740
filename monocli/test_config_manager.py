import json

import pytest

from monocli.config_manager import ConfigManager


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "app" / "config.json"
    monkeypatch.setattr(ConfigManager, "CONFIG_FILE", path)
    monkeypatch.delenv("MONO_LOG_LEVEL", raising=False)
    monkeypatch.delenv("MONO_LOG_FORMAT", raising=False)
    return path


def test_creates_user_config_with_defaults(config_file):
    manager = ConfigManager()
    assert config_file.exists()
    assert manager.get_config_value("turbo_command") == "pnpm turbo"


def test_precedence_user_workspace_runtime(config_file, tmp_path, monkeypatch):
    config_file.parent.mkdir(parents=True)
    config_file.write_text(json.dumps({"vendor": "user-vendor", "log_level": "INFO"}))
    root = tmp_path / "repo"
    root.mkdir()
    (root / "package.json").write_text(json.dumps({"mono": {"vendor": "repo-vendor"}}))
    monkeypatch.setenv("MONO_LOG_LEVEL", "DEBUG")

    config = ConfigManager(root=root).to_dict()
    assert config["vendor"] == "repo-vendor"
    assert config["log_level"] == "DEBUG"
    assert config["env_file"] == ".env"


def test_update_from_list_coerces_booleans(config_file):
    manager = ConfigManager()
    assert manager.update_config_from_list(["interactive=false"]) == {"interactive": False}
    assert json.loads(config_file.read_text())["interactive"] is False


@pytest.mark.parametrize("option", ["novalue", "unknown=1", "interactive=maybe"])
def test_update_from_list_rejects(config_file, option):
    with pytest.raises(ValueError):
        ConfigManager().update_config_from_list([option])


def test_reset(config_file):
    manager = ConfigManager()
    manager.set_config_value("vendor", "acme")
    manager.reset()
    assert manager.get_config_value("vendor") == ConfigManager.DEFAULT_CONFIG["vendor"]
