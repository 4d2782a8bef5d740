#!/usr/bin/env python3
"""
monocli/cli/context.py

Application Context

A small dependency container built once per process and handed to every
command as ctx.obj. Services are created lazily on first access and then
shared; any of them can be injected through the constructor instead.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from monocli.adapters.composer import ComposerAdapter
from monocli.adapters.process import ProcessRunner
from monocli.adapters.scaffold import TemplateScaffolder
from monocli.adapters.turbo import TurboAdapter
from monocli.cli.output import Console
from monocli.config.writer import ConfigWriter
from monocli.config_manager import ConfigManager
from monocli.errors import ConfigurationError
from monocli.workspace.registry import WorkspaceRegistry, find_monorepo_root

logger = logging.getLogger(__name__)


class AppContext:
    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        root: Optional[Path] = None,
        cwd: Optional[Path] = None,
        console: Optional[Console] = None,
        runner: Optional[ProcessRunner] = None,
        workspaces: Optional[WorkspaceRegistry] = None,
        composer: Optional[ComposerAdapter] = None,
        turbo: Optional[TurboAdapter] = None,
        scaffolder: Optional[TemplateScaffolder] = None,
        writer: Optional[ConfigWriter] = None,
    ):
        self._config = config
        self._root = Path(root) if root else None
        self.cwd = Path(cwd) if cwd else Path.cwd()
        self._console = console
        self._runner = runner
        self._workspaces = workspaces
        self._composer = composer
        self._turbo = turbo
        self._scaffolder = scaffolder
        self._writer = writer

    @property
    def config(self) -> Dict[str, Any]:
        if self._config is None:
            self._config = ConfigManager(root=self.root_or_none()).to_dict()
        return self._config

    @property
    def root(self) -> Path:
        """Monorepo root; raises ConfigurationError outside a monorepo."""
        if self._root is None:
            self._root = find_monorepo_root(self.cwd)
        return self._root

    def root_or_none(self) -> Optional[Path]:
        try:
            return self.root
        except ConfigurationError:
            logger.debug("No monorepo root above %s", self.cwd)
            return None

    @property
    def console(self) -> Console:
        if self._console is None:
            interactive = bool(self.config.get("interactive", True)) and sys.stdin.isatty()
            self._console = Console(interactive=interactive)
        return self._console

    @property
    def runner(self) -> ProcessRunner:
        if self._runner is None:
            self._runner = ProcessRunner()
        return self._runner

    @property
    def workspaces(self) -> WorkspaceRegistry:
        if self._workspaces is None:
            self._workspaces = WorkspaceRegistry.discover(self.root)
        return self._workspaces

    @property
    def composer(self) -> ComposerAdapter:
        if self._composer is None:
            self._composer = ComposerAdapter(
                self.runner, self.config.get("composer_command", "composer")
            )
        return self._composer

    @property
    def turbo(self) -> TurboAdapter:
        if self._turbo is None:
            self._turbo = TurboAdapter(
                self.runner, self.root, self.config.get("turbo_command", "pnpm turbo")
            )
        return self._turbo

    @property
    def scaffolder(self) -> TemplateScaffolder:
        if self._scaffolder is None:
            self._scaffolder = TemplateScaffolder(vendor=self.config.get("vendor", "mono-php"))
        return self._scaffolder

    @property
    def writer(self) -> ConfigWriter:
        if self._writer is None:
            self._writer = ConfigWriter()
        return self._writer
