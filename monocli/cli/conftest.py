import json
from unittest.mock import MagicMock

import pytest

from monocli.adapters.process import ToolResult
from monocli.cli.context import AppContext
from monocli.cli.output import Console
from monocli.config_manager import ConfigManager


def _workspace(root, rel, name):
    directory = root / rel
    directory.mkdir(parents=True)
    (directory / "package.json").write_text(json.dumps({"name": name}))
    (directory / "composer.json").write_text(json.dumps({"name": f"mono-php/{directory.name}"}))
    return directory


@pytest.fixture
def monorepo(tmp_path):
    root = tmp_path / "repo"
    root.mkdir()
    (root / "turbo.json").write_text(json.dumps({"tasks": {"build": {}}}))
    (root / "pnpm-workspace.yaml").write_text("packages:\n  - 'apps/*'\n  - 'packages/*'\n")
    _workspace(root, "apps/api", "@mono/api")
    _workspace(root, "packages/lib", "@mono/lib")
    return root


@pytest.fixture
def app(monorepo, tmp_path, monkeypatch):
    monkeypatch.setattr(ConfigManager, "CONFIG_FILE", tmp_path / "user" / "config.json")
    runner = MagicMock()
    runner.run.return_value = ToolResult(exit_code=0, duration=0.01)
    runner.probe.return_value = None
    turbo = MagicMock()
    turbo.run.return_value = 0
    turbo.execute.return_value = 0
    turbo.version.return_value = None
    turbo.tasks.return_value = ["build", "dev", "lint", "test"]
    composer = MagicMock()
    composer.run_command.return_value = 0
    composer.require_package.return_value = 0
    composer.update_package.return_value = 0
    composer.install.return_value = 0
    composer.version.return_value = None
    return AppContext(
        config=dict(ConfigManager.DEFAULT_CONFIG),
        root=monorepo,
        cwd=monorepo,
        console=Console(interactive=False),
        runner=runner,
        turbo=turbo,
        composer=composer,
        scaffolder=MagicMock(),
    )
