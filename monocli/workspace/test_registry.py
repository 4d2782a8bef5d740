import json
from pathlib import Path

import pytest

from monocli.errors import ConfigurationError
from monocli.workspace.registry import (
    WorkspaceRegistry,
    WorkspaceType,
    find_monorepo_root,
)


def make_workspace(root: Path, rel: str, name: str = None, composer: bool = True) -> Path:
    directory = root / rel
    directory.mkdir(parents=True)
    (directory / "package.json").write_text(json.dumps({"name": name or f"@mono/{directory.name}"}))
    if composer:
        (directory / "composer.json").write_text(json.dumps({"name": f"mono/{directory.name}"}))
    return directory


@pytest.fixture
def monorepo(tmp_path):
    (tmp_path / "turbo.json").write_text("{}")
    make_workspace(tmp_path, "apps/api")
    make_workspace(tmp_path, "packages/lib", composer=False)
    return tmp_path


def test_discover_apps_and_packages(monorepo):
    registry = WorkspaceRegistry.discover(monorepo)
    workspaces = registry.all()
    assert [w.name for w in workspaces] == ["api", "lib"]
    assert workspaces[0].type is WorkspaceType.APP
    assert workspaces[1].type is WorkspaceType.PACKAGE
    assert workspaces[0].has_composer is True
    assert workspaces[1].has_composer is False


def test_find_by_name_and_missing(monorepo):
    registry = WorkspaceRegistry.discover(monorepo)
    assert registry.find("api") is registry.all()[0]
    assert registry.find("missing") is None


def test_find_by_package_name(monorepo):
    registry = WorkspaceRegistry.discover(monorepo)
    assert registry.find("@mono/lib").name == "lib"


def test_filter_by_type(monorepo):
    registry = WorkspaceRegistry.discover(monorepo)
    assert [w.name for w in registry.filter_by_type("app")] == ["api"]
    assert [w.name for w in registry.packages()] == ["lib"]


def test_directories_without_manifest_are_skipped(monorepo):
    (monorepo / "apps" / "notes").mkdir()
    registry = WorkspaceRegistry.discover(monorepo)
    assert "notes" not in registry.names()


def test_empty_root_returns_empty_registry(tmp_path):
    registry = WorkspaceRegistry.discover(tmp_path)
    assert len(registry) == 0
    assert not registry


def test_missing_root_raises(tmp_path):
    with pytest.raises(ConfigurationError):
        WorkspaceRegistry.discover(tmp_path / "nope")


def test_malformed_manifest_raises(monorepo):
    broken = monorepo / "apps" / "broken"
    broken.mkdir()
    (broken / "package.json").write_text("{not json")
    with pytest.raises(ConfigurationError):
        WorkspaceRegistry.discover(monorepo)


def test_duplicate_names_raise(monorepo):
    make_workspace(monorepo, "packages/api")
    with pytest.raises(ConfigurationError, match="Duplicate workspace name 'api'"):
        WorkspaceRegistry.discover(monorepo)


def test_pnpm_workspace_patterns_order(tmp_path):
    (tmp_path / "pnpm-workspace.yaml").write_text("packages:\n  - 'packages/*'\n  - 'apps/*'\n")
    make_workspace(tmp_path, "apps/web")
    make_workspace(tmp_path, "packages/b-lib")
    make_workspace(tmp_path, "packages/a-lib")
    names = WorkspaceRegistry.discover(tmp_path).names()
    assert sorted(names[:2]) == ["a-lib", "b-lib"]
    assert names[2] == "web"


def test_directory_scan_order_is_kept(monorepo, monkeypatch):
    make_workspace(monorepo, "packages/b-lib")
    make_workspace(monorepo, "packages/a-lib")
    scanned = {
        "apps/*": [monorepo / "apps" / "api"],
        "packages/*": [monorepo / "packages" / n for n in ("lib", "b-lib", "a-lib")],
    }
    monkeypatch.setattr(Path, "glob", lambda self, pattern: iter(scanned.get(pattern, [])))
    assert WorkspaceRegistry.discover(monorepo).names() == ["api", "lib", "b-lib", "a-lib"]


def test_find_monorepo_root_walks_up(monorepo):
    nested = monorepo / "apps" / "api" / "src"
    nested.mkdir()
    assert find_monorepo_root(nested) == monorepo.resolve()


def test_find_monorepo_root_outside_repo(tmp_path):
    with pytest.raises(ConfigurationError):
        find_monorepo_root(tmp_path)
