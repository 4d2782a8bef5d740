import json
from unittest.mock import MagicMock

import pytest

from monocli.adapters.process import ToolResult
from monocli.adapters.turbo import TurboAdapter, TurboOptions


@pytest.fixture
def runner():
    runner = MagicMock()
    runner.run.return_value = ToolResult(exit_code=0, duration=0.1)
    return runner


def test_absent_fields_add_no_flags():
    assert TurboOptions().to_flags() == []
    assert TurboOptions().as_dict() == {}


def test_each_field_maps_to_one_flag():
    options = TurboOptions(
        filter="api",
        force=True,
        cache=False,
        parallel=True,
        continue_on_error=True,
        concurrency="4",
        dry="json",
        graph=True,
        output_logs="errors-only",
    )
    assert options.to_flags() == [
        "--filter=api",
        "--force",
        "--no-cache",
        "--parallel",
        "--continue",
        "--concurrency=4",
        "--dry=json",
        "--graph",
        "--output-logs=errors-only",
    ]


def test_as_dict_only_present_fields():
    assert TurboOptions(filter="foo", force=True).as_dict() == {"filter": "foo", "force": True}


def test_run_builds_turbo_invocation(runner, tmp_path):
    adapter = TurboAdapter(runner, tmp_path)
    assert adapter.run("build", TurboOptions(filter="api")) == 0
    call = runner.run.call_args.args[0]
    assert call.argv == ["pnpm", "turbo", "run", "build", "--filter=api"]
    assert call.working_directory == tmp_path


def test_run_passthrough_arguments(runner, tmp_path):
    TurboAdapter(runner, tmp_path).run("test", passthrough=["--filter=UserTest"])
    assert runner.run.call_args.args[0].arguments == ["turbo", "run", "test", "--", "--filter=UserTest"]


def test_exit_code_returned_unmodified(runner, tmp_path):
    runner.run.return_value = ToolResult(exit_code=137, duration=1.0)
    assert TurboAdapter(runner, tmp_path).execute(["prune", "api"]) == 137


def test_tasks_from_turbo_json(runner, tmp_path):
    (tmp_path / "turbo.json").write_text(json.dumps({"tasks": {"build": {}, "lint": {}}}))
    assert TurboAdapter(runner, tmp_path).tasks() == ["build", "lint"]


def test_tasks_without_turbo_json(runner, tmp_path):
    assert TurboAdapter(runner, tmp_path).tasks() == []


def test_version_uses_configured_command(runner, tmp_path):
    runner.probe.return_value = "2.1.3"
    assert TurboAdapter(runner, tmp_path, "pnpm turbo").version() == "2.1.3"
    runner.probe.assert_called_once_with(["pnpm", "turbo", "--version"], cwd=tmp_path)
