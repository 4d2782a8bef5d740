#!/usr/bin/env python3
"""
monocli/config/writer.py

Configuration Writer

Applies ConfigOperations to line-oriented KEY=VALUE files with python-dotenv.
Existing keys are replaced in place, new keys are appended, and every other
line is left as it was, so re-running an installer is safe.
"""

import logging
from pathlib import Path
from typing import Iterable

from dotenv import set_key

from monocli.config.operation import ConfigAction, ConfigOperation

logger = logging.getLogger(__name__)


def format_value(value: str) -> str:
    """Quote values containing whitespace; everything else is written bare."""
    if any(ch.isspace() for ch in value):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return value


class ConfigWriter:
    def target_path(self, operation: ConfigOperation, base_dir: Path) -> Path:
        return Path(base_dir) / operation.target_file

    def apply(self, operation: ConfigOperation, base_dir: Path) -> Path:
        path = self.target_path(operation, base_dir)
        path.parent.mkdir(parents=True, exist_ok=True)
        if not path.exists():
            logger.info("Environment file '%s' does not exist. Creating it.", path)
            path.touch()

        if operation.action is ConfigAction.APPEND:
            self._append(path, operation)
        else:
            for key, value in operation.payload.items():
                set_key(str(path), key, format_value(value), quote_mode="never")
        logger.debug(
            "Applied %s of %d key(s) to %s", operation.action.value, len(operation.payload), path
        )
        return path

    def apply_all(self, operations: Iterable[ConfigOperation], base_dir: Path) -> None:
        for operation in operations:
            self.apply(operation, base_dir)

    def _append(self, path: Path, operation: ConfigOperation) -> None:
        content = path.read_text(encoding="utf-8")
        lines = [f"{key}={format_value(value)}" for key, value in operation.payload.items()]
        with path.open("a", encoding="utf-8") as handle:
            if content and not content.endswith("\n"):
                handle.write("\n")
            handle.write("\n".join(lines) + "\n")
