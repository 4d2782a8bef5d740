#!/usr/bin/env python3
"""
monocli/error_wrapper.py

Error Handling Wrapper

Provides a decorator that turns uncaught exceptions into a one-line error
message and exit code 1.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

import typer

from monocli import __version__

T = TypeVar("T", bound=Callable[..., Any])
logger = logging.getLogger(__name__)


def render_error(message: str) -> None:
    typer.secho(f"✗ {message}", fg=typer.colors.RED, bold=True, err=True)


def handle_errors(func: T) -> T:
    """Decorator for the process-wide error boundary."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except Exception as err:
            if __version__ == "dev":
                raise  # Show full traceback in dev mode
            logger.debug("An error occurred in %s:", func.__name__, exc_info=True)
            render_error(str(err) or err.__class__.__name__)
            return 1

    return wrapper
