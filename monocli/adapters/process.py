#!/usr/bin/env python
"""
monocli/adapters/process.py

Process Execution

Spawns external tools with subprocess.run(). Output is inherited from the
parent process so it streams live; only the exit code and duration survive
the call.
"""

import logging
import os
import shlex
import shutil
import subprocess
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import typer

from monocli.errors import ConfigurationError

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND = 127


@dataclass
class ToolInvocation:
    executable: str
    arguments: List[str] = field(default_factory=list)
    working_directory: Path = field(default_factory=Path.cwd)
    env: Dict[str, str] = field(default_factory=dict)
    tty: bool = True
    timeout: Optional[float] = None

    @property
    def argv(self) -> List[str]:
        return [self.executable, *self.arguments]

    def command_line(self) -> str:
        return shlex.join(self.argv)


@dataclass(frozen=True)
class ToolResult:
    exit_code: int
    duration: float

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class ProcessRunner:
    def __init__(self, echo: bool = True):
        self.echo = echo

    def run(self, invocation: ToolInvocation) -> ToolResult:
        """
        Execute the invocation and wait for it to finish.
        Raises ConfigurationError if the working directory does not exist.
        """
        cwd = Path(invocation.working_directory)
        if not cwd.is_dir():
            logger.debug("Working directory '%s' does not exist.", cwd)
            raise ConfigurationError(f"Working directory '{cwd}' does not exist.")

        env = {**os.environ, **invocation.env}
        logger.info("Executing command: %s", invocation.command_line())
        logger.info("Working directory: %s", cwd)
        logger.debug("Environment overrides: %s", invocation.env)

        if self.echo:
            terminal_width = min(shutil.get_terminal_size(fallback=(60, 20)).columns, 60)
            typer.secho(f"\n$ {invocation.command_line()}", fg=typer.colors.BRIGHT_CYAN, bold=True, err=True)
            typer.secho("═" * terminal_width, fg=typer.colors.BRIGHT_CYAN, err=True)

        started = time.monotonic()
        try:
            completed = subprocess.run(
                invocation.argv,
                cwd=str(cwd),
                env=env,
                stdin=None if invocation.tty else subprocess.DEVNULL,
                timeout=invocation.timeout,
                check=False,
            )
            exit_code = completed.returncode
        except FileNotFoundError:
            logger.debug("Executable not found: %s", invocation.argv[0])
            typer.secho(
                f"Command not found: {invocation.argv[0]}", fg=typer.colors.RED, err=True
            )
            exit_code = COMMAND_NOT_FOUND
        duration = time.monotonic() - started
        logger.info("Command finished with exit code %d in %.2fs", exit_code, duration)
        return ToolResult(exit_code=exit_code, duration=duration)

    def probe(self, argv: List[str], cwd: Optional[Path] = None) -> Optional[str]:
        """
        Run a short query (usually --version) and return its stripped stdout,
        or None when the tool is missing or exits non-zero.
        """
        logger.debug("Probing: %s", shlex.join(argv))
        try:
            completed = subprocess.run(
                argv,
                cwd=str(cwd) if cwd else None,
                capture_output=True,
                text=True,
                stdin=subprocess.DEVNULL,
                timeout=30,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug("Probe failed for %s: %s", argv[0], e)
            return None
        if completed.returncode != 0:
            logger.debug("Probe %s exited with %d", argv[0], completed.returncode)
            return None
        return completed.stdout.strip()
