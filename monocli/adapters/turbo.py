#!/usr/bin/env python3
"""
monocli/adapters/turbo.py

Turborepo Adapter

Translates a typed TurboOptions structure into turbo CLI flags and runs turbo
at the monorepo root. Caching, task ordering and parallelism all belong to
turbo itself.
"""

import logging
import shlex
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from monocli.adapters.process import ProcessRunner, ToolInvocation
from monocli.utils import load_json

logger = logging.getLogger(__name__)


@dataclass
class TurboOptions:
    filter: Optional[str] = None
    force: Optional[bool] = None
    cache: Optional[bool] = None
    parallel: Optional[bool] = None
    continue_on_error: Optional[bool] = None
    concurrency: Optional[str] = None
    dry: Optional[str] = None
    graph: Optional[bool] = None
    output_logs: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        """Only the fields that were set."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    def to_flags(self) -> List[str]:
        flags: List[str] = []
        if self.filter:
            flags.append(f"--filter={self.filter}")
        if self.force:
            flags.append("--force")
        if self.cache is False:
            flags.append("--no-cache")
        if self.parallel:
            flags.append("--parallel")
        if self.continue_on_error:
            flags.append("--continue")
        if self.concurrency:
            flags.append(f"--concurrency={self.concurrency}")
        if self.dry is not None:
            flags.append("--dry" if self.dry in ("", "text") else f"--dry={self.dry}")
        if self.graph:
            flags.append("--graph")
        if self.output_logs:
            flags.append(f"--output-logs={self.output_logs}")
        return flags


class TurboAdapter:
    def __init__(self, runner: ProcessRunner, root: Path, command: str = "pnpm turbo"):
        self.runner = runner
        self.root = Path(root)
        self.command = shlex.split(command)

    def execute(self, arguments: Sequence[str], options: Optional[TurboOptions] = None) -> int:
        """Run turbo with raw arguments followed by the option flags."""
        flags = options.to_flags() if options else []
        invocation = ToolInvocation(
            self.command[0], [*self.command[1:], *arguments, *flags], self.root
        )
        return self.runner.run(invocation).exit_code

    def run(
        self,
        task: str,
        options: Optional[TurboOptions] = None,
        passthrough: Optional[Sequence[str]] = None,
    ) -> int:
        """
        Run a turbo task. Arguments in passthrough are handed to the task
        scripts after "--".
        """
        arguments = ["run", *shlex.split(task)]
        flags = options.to_flags() if options else []
        extra = ["--", *passthrough] if passthrough else []
        logger.debug("turbo run %s with options %s", task, options.as_dict() if options else {})
        invocation = ToolInvocation(
            self.command[0], [*self.command[1:], *arguments, *flags, *extra], self.root
        )
        return self.runner.run(invocation).exit_code

    def version(self) -> Optional[str]:
        return self.runner.probe([*self.command, "--version"], cwd=self.root)

    def tasks(self) -> List[str]:
        """Task names declared in turbo.json."""
        config = load_json(self.root / "turbo.json")
        return list((config.get("tasks") or config.get("pipeline") or {}).keys())
