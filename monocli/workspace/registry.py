#!/usr/bin/env python3
"""
monocli/workspace/registry.py

Workspace Registry

Scans a monorepo root for app and package directories and exposes them as
an ordered, read-only collection of Workspace records: pattern order first,
then the order the filesystem lists each directory in. The registry is built
once per process and never updated in place.
"""

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from monocli.constants import (
    DEFAULT_WORKSPACE_PATTERNS,
    ROOT_MARKERS,
    WORKSPACE_MANIFESTS,
)
from monocli.errors import ConfigurationError
from monocli.utils import load_manifest, load_yaml

logger = logging.getLogger(__name__)


class WorkspaceType(str, Enum):
    APP = "app"
    PACKAGE = "package"


@dataclass(frozen=True)
class Workspace:
    name: str
    path: Path
    type: WorkspaceType
    package_name: Optional[str] = None
    has_composer: bool = False
    has_package_json: bool = False

    @property
    def is_app(self) -> bool:
        return self.type is WorkspaceType.APP

    @property
    def is_package(self) -> bool:
        return self.type is WorkspaceType.PACKAGE

    def to_dict(self) -> Dict[str, object]:
        data = asdict(self)
        data["path"] = str(self.path)
        data["type"] = self.type.value
        return data


def find_monorepo_root(start: Optional[Path] = None) -> Path:
    """
    Walk up from start (default: cwd) to the first directory holding one of
    the root markers.
    """
    current = (start or Path.cwd()).resolve()
    for candidate in [current, *current.parents]:
        if any((candidate / marker).is_file() for marker in ROOT_MARKERS):
            logger.debug("Monorepo root found at %s", candidate)
            return candidate
    raise ConfigurationError(
        f"Not inside a monorepo: no {' or '.join(ROOT_MARKERS)} found above {current}"
    )


def workspace_patterns(root: Path) -> List[str]:
    """Return the directory globs declared in pnpm-workspace.yaml."""
    workspace_file = root / "pnpm-workspace.yaml"
    if not workspace_file.is_file():
        return list(DEFAULT_WORKSPACE_PATTERNS)
    patterns = load_yaml(workspace_file).get("packages") or []
    if not isinstance(patterns, list):
        raise ConfigurationError(f"'packages' in {workspace_file} must be a list")
    # Negated globs only exclude; they never contribute workspaces.
    return [str(p) for p in patterns if not str(p).startswith("!")]


def _read_workspace(directory: Path) -> Workspace:
    package_json = directory / "package.json"
    composer_json = directory / "composer.json"
    package_name = None
    if package_json.is_file():
        package_name = load_manifest(package_json).get("name")
    if composer_json.is_file():
        # Parsed for validation only; a broken composer.json is a broken workspace.
        load_manifest(composer_json)
    is_app = directory.parent.name == "apps"
    return Workspace(
        name=directory.name,
        path=directory,
        type=WorkspaceType.APP if is_app else WorkspaceType.PACKAGE,
        package_name=package_name,
        has_composer=composer_json.is_file(),
        has_package_json=package_json.is_file(),
    )


class WorkspaceRegistry:
    """Ordered snapshot of the workspaces of one monorepo."""

    def __init__(self, root: Path, workspaces: List[Workspace]):
        self.root = root
        self._workspaces = list(workspaces)

    @classmethod
    def discover(cls, root: Path) -> "WorkspaceRegistry":
        root = Path(root)
        if not root.is_dir():
            raise ConfigurationError(f"Monorepo root '{root}' does not exist or is not a directory")

        workspaces: List[Workspace] = []
        seen: Dict[str, Path] = {}
        for pattern in workspace_patterns(root):
            try:
                candidates = [p for p in root.glob(pattern) if p.is_dir()]
            except OSError as e:
                raise ConfigurationError(f"Cannot scan '{pattern}' under {root}: {e}") from e
            for directory in candidates:
                if not any((directory / m).is_file() for m in WORKSPACE_MANIFESTS):
                    logger.debug("Skipping %s: no manifest", directory)
                    continue
                if directory.name in seen:
                    if seen[directory.name] == directory:
                        continue
                    raise ConfigurationError(
                        f"Duplicate workspace name '{directory.name}': "
                        f"{seen[directory.name]} and {directory}"
                    )
                workspace = _read_workspace(directory)
                seen[workspace.name] = directory
                workspaces.append(workspace)

        logger.info("Discovered %d workspace(s) under %s", len(workspaces), root)
        return cls(root, workspaces)

    def __iter__(self) -> Iterator[Workspace]:
        return iter(self._workspaces)

    def __len__(self) -> int:
        return len(self._workspaces)

    def __bool__(self) -> bool:
        return bool(self._workspaces)

    def all(self) -> List[Workspace]:
        return list(self._workspaces)

    def names(self) -> List[str]:
        return [w.name for w in self._workspaces]

    def find(self, name: str) -> Optional[Workspace]:
        for workspace in self._workspaces:
            if workspace.name == name:
                return workspace
        for workspace in self._workspaces:
            if workspace.package_name and workspace.package_name == name:
                return workspace
        return None

    def filter_by_type(self, workspace_type: WorkspaceType) -> List[Workspace]:
        return [w for w in self._workspaces if w.type is WorkspaceType(workspace_type)]

    def apps(self) -> List[Workspace]:
        return self.filter_by_type(WorkspaceType.APP)

    def packages(self) -> List[Workspace]:
        return self.filter_by_type(WorkspaceType.PACKAGE)
