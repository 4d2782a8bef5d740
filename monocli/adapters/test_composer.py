from pathlib import Path
from unittest.mock import MagicMock

import pytest

from monocli.adapters.composer import ComposerAdapter
from monocli.adapters.process import ToolResult
from monocli.workspace.registry import Workspace, WorkspaceType


@pytest.fixture
def runner():
    runner = MagicMock()
    runner.run.return_value = ToolResult(exit_code=0, duration=0.1)
    return runner


@pytest.fixture
def workspace(tmp_path):
    return Workspace(name="api", path=tmp_path, type=WorkspaceType.APP)


def invocation(runner):
    return runner.run.call_args.args[0]


def test_run_command_forwards_arguments(runner, tmp_path):
    ComposerAdapter(runner).run_command("show --installed", tmp_path)
    call = invocation(runner)
    assert call.argv == ["composer", "show", "--installed"]
    assert call.working_directory == tmp_path


def test_require_dev_package(runner, workspace):
    ComposerAdapter(runner).require_package(workspace, "phpunit/phpunit:^11", dev=True)
    assert invocation(runner).arguments == ["require", "--dev", "phpunit/phpunit:^11"]


def test_update_without_package(runner, workspace):
    ComposerAdapter(runner).update_package(workspace)
    assert invocation(runner).arguments == ["update"]


def test_install_flags(runner, workspace):
    ComposerAdapter(runner).install(workspace)
    assert invocation(runner).arguments == [
        "install",
        "--no-interaction",
        "--prefer-dist",
        "--optimize-autoloader",
    ]


def test_exit_code_is_not_translated(runner, workspace):
    runner.run.return_value = ToolResult(exit_code=2, duration=0.0)
    assert ComposerAdapter(runner).update_package(workspace, "monolog/monolog") == 2


def test_version_parsing(runner):
    runner.probe.return_value = "Composer version 2.7.1 2024-02-09 15:26:28"
    assert ComposerAdapter(runner).version() == "2.7.1"
    runner.probe.assert_called_once_with(["composer", "--version", "--no-ansi"])


def test_version_not_installed(runner):
    runner.probe.return_value = None
    assert ComposerAdapter(runner).version() is None
