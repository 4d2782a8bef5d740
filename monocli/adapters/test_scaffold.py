import json
import logging
from unittest.mock import patch

import pytest
from git import GitCommandError, Repo

from monocli.adapters.scaffold import INITIAL_COMMIT_MESSAGE, TemplateScaffolder
from monocli.errors import ScaffoldError


@pytest.fixture
def template_repo(tmp_path):
    source = tmp_path / "template"
    source.mkdir()
    (source / "package.json").write_text(json.dumps({"name": "hive-template", "private": True}))
    (source / "composer.json").write_text(json.dumps({"name": "vendor/hive-template"}))
    repo = Repo.init(source)
    repo.git.add(all=True)
    repo.index.commit("template history")
    repo.index.commit("more template history")
    return source


def test_clone_renames_and_resets_history(template_repo, tmp_path):
    destination = tmp_path / "acme"
    repo = TemplateScaffolder(vendor="acme").clone_template(str(template_repo), destination, "acme")

    assert json.loads((destination / "package.json").read_text())["name"] == "acme"
    assert json.loads((destination / "composer.json").read_text())["name"] == "acme/acme"
    commits = list(repo.iter_commits())
    assert [c.message for c in commits] == [INITIAL_COMMIT_MESSAGE]


def test_non_empty_destination_rejected(template_repo, tmp_path):
    destination = tmp_path / "taken"
    destination.mkdir()
    (destination / "README.md").write_text("hello")
    with pytest.raises(ScaffoldError, match="not empty"):
        TemplateScaffolder().clone_template(str(template_repo), destination, "taken")


@patch("monocli.adapters.scaffold.Repo.clone_from")
def test_clone_failure_raises_scaffold_error(mock_clone, tmp_path, caplog):
    mock_clone.side_effect = GitCommandError(["git", "clone"], 128)
    with caplog.at_level(logging.DEBUG), pytest.raises(ScaffoldError, match="exit code 128"):
        TemplateScaffolder().clone_template("https://example.invalid/x.git", tmp_path / "x", "x")
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]
