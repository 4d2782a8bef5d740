"""
monocli/cli/output.py

Console output and prompts shared by every command.
"""

import json
import logging
from typing import Any, List, Optional, Sequence

import click
import typer
from rich.console import Console as RichConsole
from rich.table import Table

logger = logging.getLogger(__name__)


class Console:
    def __init__(self, interactive: bool = True):
        self.interactive = interactive

    def line(self, message: str = "") -> None:
        typer.echo(message)

    def info(self, message: str) -> None:
        typer.secho(message, fg=typer.colors.CYAN)

    def comment(self, message: str) -> None:
        typer.secho(message, fg=typer.colors.BRIGHT_BLACK)

    def success(self, message: str) -> None:
        typer.secho(message, fg=typer.colors.GREEN)

    def warning(self, message: str) -> None:
        typer.secho(message, fg=typer.colors.YELLOW)

    def error(self, message: str) -> None:
        typer.secho(message, fg=typer.colors.RED, bold=True, err=True)

    def intro(self, title: str) -> None:
        typer.secho(f"\n{title}\n", fg=typer.colors.MAGENTA, bold=True)

    def outro(self, message: str) -> None:
        typer.secho(f"\n{message}", fg=typer.colors.GREEN, bold=True)

    def table(self, headers: Sequence[str], rows: Sequence[Sequence[Any]], title: Optional[str] = None) -> None:
        table = Table(title=title, show_lines=False)
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*[str(cell) for cell in row])
        RichConsole().print(table)

    def json(self, data: Any) -> None:
        typer.echo(json.dumps(data, indent=2, default=str))

    def select(self, question: str, choices: List[str], default: Optional[str] = None) -> str:
        """
        Ask for one of choices. Without interaction the default (or the first
        choice) is returned.
        """
        if not choices:
            raise ValueError("select() needs at least one choice")
        default = default if default in choices else choices[0]
        if not self.interactive:
            logger.debug("Non-interactive select '%s' -> %s", question, default)
            return default
        for index, choice in enumerate(choices, start=1):
            typer.echo(f"  [{index}] {choice}")
        answer = typer.prompt(
            question,
            default=choices.index(default) + 1,
            type=click.IntRange(1, len(choices)),
        )
        return choices[answer - 1]

    def confirm(self, question: str, default: bool = False) -> bool:
        if not self.interactive:
            logger.debug("Non-interactive confirm '%s' -> %s", question, default)
            return default
        return typer.confirm(question, default=default)
