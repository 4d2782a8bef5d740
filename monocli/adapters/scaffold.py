#!/usr/bin/env python3
"""
monocli/adapters/scaffold.py

Template Scaffolder

Clones a template repository with GitPython, renames it and restarts its
history from a single commit.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from git import GitCommandError, Repo

from monocli.errors import ScaffoldError
from monocli.utils import force_remove, load_json, save_json

logger = logging.getLogger(__name__)

INITIAL_COMMIT_MESSAGE = "Initial commit from template"


class TemplateScaffolder:
    def __init__(self, vendor: str = "mono-php"):
        self.vendor = vendor

    def clone_template(
        self, template_url: str, destination: Path, new_name: str, branch: Optional[str] = None
    ) -> Repo:
        destination = Path(destination)
        if destination.exists() and (not destination.is_dir() or any(destination.iterdir())):
            raise ScaffoldError(f"Destination '{destination}' already exists and is not empty")

        logger.info("Cloning template %s into %s", template_url, destination)
        try:
            if branch is None:
                Repo.clone_from(template_url, destination, depth=1)
            else:
                Repo.clone_from(template_url, destination, depth=1, branch=branch)
        except GitCommandError as e:
            logger.debug("Failed to clone template '%s': %s", template_url, e)
            raise ScaffoldError(
                f"Cloning {template_url} failed with exit code {e.status}"
            ) from e

        try:
            self.rename(destination, new_name)
        except (OSError, ValueError) as e:
            raise ScaffoldError(f"Failed to rename template to '{new_name}': {e}") from e
        return self.reinitialize(destination)

    def rename(self, destination: Path, new_name: str) -> None:
        """Rewrite the project name in package.json and composer.json."""
        package_json = destination / "package.json"
        if package_json.is_file():
            data = load_json(package_json)
            if not data:
                raise ValueError(f"{package_json} is empty or not valid JSON")
            data["name"] = new_name
            save_json(package_json, data)
            logger.debug("Renamed %s to %s", package_json, new_name)

        composer_json = destination / "composer.json"
        if composer_json.is_file():
            with composer_json.open("r", encoding="utf-8") as f:
                data = json.load(f)
            data["name"] = f"{self.vendor}/{new_name}"
            save_json(composer_json, data, indent=4)
            logger.debug("Renamed %s to %s/%s", composer_json, self.vendor, new_name)

    def reinitialize(self, destination: Path) -> Repo:
        """Drop the template history and start a fresh repository."""
        force_remove(destination / ".git")
        repo = Repo.init(destination)
        repo.git.add(all=True)
        repo.index.commit(INITIAL_COMMIT_MESSAGE)
        logger.info("Initialized fresh repository in %s", destination)
        return repo
