import logging
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from monocli.adapters.process import COMMAND_NOT_FOUND, ProcessRunner, ToolInvocation
from monocli.errors import ConfigurationError


@pytest.fixture
def runner():
    return ProcessRunner(echo=False)


def test_invocation_command_line_quotes_arguments(tmp_path):
    invocation = ToolInvocation("composer", ["require", "vendor/pkg:^1.0 || ^2.0"], tmp_path)
    assert invocation.argv == ["composer", "require", "vendor/pkg:^1.0 || ^2.0"]
    assert invocation.command_line() == "composer require 'vendor/pkg:^1.0 || ^2.0'"


@patch("subprocess.run")
def test_run_returns_exit_code_unmodified(mock_run, runner, tmp_path):
    mock_run.return_value = subprocess.CompletedProcess(args=["composer"], returncode=3)
    result = runner.run(ToolInvocation("composer", ["validate"], tmp_path, env={"X": "1"}))
    assert result.exit_code == 3
    assert not result.ok
    kwargs = mock_run.call_args.kwargs
    assert kwargs["cwd"] == str(tmp_path)
    assert kwargs["env"]["X"] == "1"
    assert kwargs["timeout"] is None
    assert "capture_output" not in kwargs


@patch("subprocess.run")
def test_run_without_tty_detaches_stdin(mock_run, runner, tmp_path):
    mock_run.return_value = subprocess.CompletedProcess(args=["x"], returncode=0)
    runner.run(ToolInvocation("x", [], tmp_path, tty=False))
    assert mock_run.call_args.kwargs["stdin"] == subprocess.DEVNULL


def test_run_missing_working_directory(runner, tmp_path, caplog):
    with caplog.at_level(logging.DEBUG), pytest.raises(ConfigurationError):
        runner.run(ToolInvocation("composer", [], tmp_path / "missing"))
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


@patch("subprocess.run", side_effect=FileNotFoundError("composer"))
def test_run_missing_executable(mock_run, runner, tmp_path, caplog):
    with caplog.at_level(logging.DEBUG):
        assert runner.run(ToolInvocation("composer", [], tmp_path)).exit_code == COMMAND_NOT_FOUND
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


@patch("subprocess.run")
def test_probe_returns_stdout(mock_run, runner):
    mock_run.return_value = subprocess.CompletedProcess(args=["node"], returncode=0, stdout="v20.1.0\n")
    assert runner.probe(["node", "--version"]) == "v20.1.0"


@patch("subprocess.run", side_effect=FileNotFoundError("node"))
def test_probe_missing_tool(mock_run, runner):
    assert runner.probe(["node", "--version"]) is None


@patch("subprocess.run")
def test_probe_failed_tool(mock_run, runner):
    mock_run.return_value = subprocess.CompletedProcess(args=["node"], returncode=1, stdout="")
    assert runner.probe([str(Path("node")), "--version"]) is None
