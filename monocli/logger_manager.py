#!/usr/bin/env python3
"""
monocli/logger_manager.py

Logger Manager

Configures the root logger once per run: a size-capped log file under the
user app dir plus a stderr stream, so stdout stays free for command output
such as --json summaries.
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Optional, Tuple

from monocli.constants import APP_BINARY, USER_APP_DIR

MAX_LOG_BYTES = 1_000_000
LOG_BACKUPS = 3

# Libraries that log every subprocess they spawn at DEBUG.
NOISY_LOGGERS = ("git",)

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
FORMATS: Dict[str, Tuple[str, Optional[str]]] = {
    "default": ("%(levelname)s: %(message)s", None),
    "verbose": ("%(asctime)s [%(levelname)s] %(module)s:%(lineno)d - %(message)s", DATE_FORMAT),
    "detailed": (
        "%(asctime)s [%(levelname)s] %(pathname)s:%(lineno)d - %(funcName)s - %(message)s",
        DATE_FORMAT,
    ),
}


class SafeFileHandler(RotatingFileHandler):
    """Rotating file handler that reports write failures instead of raising."""

    def emit(self, record):
        try:
            super().emit(record)
        except OSError:
            self.handleError(record)


class LoggerManager:
    LOG_LEVELS = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
    }

    @classmethod
    def from_dict(cls, config: dict) -> "LoggerManager":
        return cls(
            log_level=config.get("log_level", "WARNING"),
            format_type=config.get("log_format", "default"),
        )

    def __init__(
        self,
        log_level: str = "WARNING",
        format_type: str = "default",
        logs_dir: Optional[Path] = None,
    ):
        self.logs_dir = logs_dir or USER_APP_DIR / "logs"
        self.log_file = self.logs_dir / f"{APP_BINARY}.log"
        self.logs_dir.mkdir(parents=True, exist_ok=True)
        self.handlers = []

        requested = self.LOG_LEVELS.get(str(log_level).upper())
        self.level = requested or logging.WARNING
        self.configure_levels()
        self.install_handlers(self.formatter(format_type))

        root_logger = logging.getLogger()
        if requested is None:
            root_logger.warning("Log level '%s' is not recognized. Defaulting to WARNING.", log_level)
        root_logger.debug("Logging at %s to %s", logging.getLevelName(self.level), self.log_file)

    def configure_levels(self) -> None:
        logging.getLogger().setLevel(self.level)
        quiet = logging.DEBUG if self.level == logging.DEBUG else logging.WARNING
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(quiet)

    @staticmethod
    def formatter(format_type: str) -> logging.Formatter:
        fmt, datefmt = FORMATS.get(format_type, FORMATS["default"])
        return logging.Formatter(fmt, datefmt=datefmt)

    def install_handlers(self, formatter: logging.Formatter) -> None:
        root_logger = logging.getLogger()
        # Replace handlers from an earlier run in the same interpreter, keep foreign ones.
        for handler in list(root_logger.handlers):
            if getattr(handler, "_monocli", False):
                root_logger.removeHandler(handler)
                handler.close()

        file_handler = SafeFileHandler(
            self.log_file, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, delay=True
        )
        stream_handler = logging.StreamHandler(sys.stderr)
        for handler in (file_handler, stream_handler):
            handler.setFormatter(formatter)
            handler._monocli = True
            root_logger.addHandler(handler)
            self.handlers.append(handler)
