"""
monocli/adapters/composer.py

Composer Adapter

Thin wrapper around the composer binary. Every method runs composer inside a
workspace directory and returns the raw exit code.
"""

import logging
import re
import shlex
from pathlib import Path
from typing import List, Optional

from monocli.adapters.process import ProcessRunner, ToolInvocation
from monocli.workspace.registry import Workspace

logger = logging.getLogger(__name__)

VERSION_PATTERN = re.compile(r"Composer version ([0-9][0-9.]*)")
INSTALL_ARGS = ["install", "--no-interaction", "--prefer-dist", "--optimize-autoloader"]


class ComposerAdapter:
    def __init__(self, runner: ProcessRunner, command: str = "composer"):
        self.runner = runner
        self.command = shlex.split(command)

    def _run(self, arguments: List[str], working_dir: Path) -> int:
        invocation = ToolInvocation(
            self.command[0], [*self.command[1:], *arguments], Path(working_dir)
        )
        return self.runner.run(invocation).exit_code

    def run_command(self, raw_args: str, working_dir: Path) -> int:
        """Forward raw_args to composer without validating them."""
        return self._run(shlex.split(raw_args), working_dir)

    def require_package(self, workspace: Workspace, package_spec: str, dev: bool = False) -> int:
        arguments = ["require"]
        if dev:
            arguments.append("--dev")
        arguments.append(package_spec)
        return self._run(arguments, workspace.path)

    def update_package(self, workspace: Workspace, package_name: Optional[str] = None) -> int:
        arguments = ["update"]
        if package_name:
            arguments.append(package_name)
        return self._run(arguments, workspace.path)

    def install(self, workspace: Workspace) -> int:
        return self._run(list(INSTALL_ARGS), workspace.path)

    def version(self) -> Optional[str]:
        output = self.runner.probe([*self.command, "--version", "--no-ansi"])
        if output is None:
            return None
        match = VERSION_PATTERN.search(output)
        return match.group(1) if match else output.splitlines()[0]
