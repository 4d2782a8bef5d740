#!/usr/bin/env python
"""
monocli/cli/main.py

Entry point for the Mono CLI.

Resolves the first argument to a registered command, lets click parse the
rest, and converts whatever happens into a process exit code. This is the
only place where uncaught errors are turned into output.
"""

import logging
import sys
from typing import List, Optional, Sequence

import click
import typer

from monocli import __version__
from monocli.cli.commands import build_registry
from monocli.cli.context import AppContext
from monocli.cli.registry import CommandDescriptor, CommandRegistry
from monocli.constants import APP_BINARY, APP_NAME
from monocli.error_wrapper import handle_errors, render_error
from monocli.errors import RegistrationError
from monocli.logger_manager import LoggerManager

logger = logging.getLogger(__name__)

HELP_TOKENS = ("list", "help", "-h", "--help")
VERSION_TOKENS = ("-V", "--version")


class Dispatcher:
    def __init__(self, registry: CommandRegistry, context: AppContext):
        self.registry = registry
        self.context = context

    def dispatch(self, argv: Sequence[str]) -> int:
        argv = list(argv)
        if not argv or argv[0] in HELP_TOKENS:
            if len(argv) > 1 and argv[0] == "help":
                return self.dispatch([argv[1], "--help"])
            self.print_commands()
            return 0
        if argv[0] in VERSION_TOKENS:
            typer.echo(f"{APP_NAME} {__version__}")
            return 0

        token, args = argv[0], argv[1:]
        descriptor = self.registry.resolve(token)
        if descriptor is None:
            render_error(f'Command "{token}" is not defined.')
            suggestions = self.registry.suggest(token)
            if suggestions:
                typer.echo("\nDid you mean one of these?", err=True)
                for name in suggestions:
                    typer.echo(f"    {name}", err=True)
            return 1
        logger.debug("Dispatching '%s' to command '%s' with %s", token, descriptor.name, args)
        return self.invoke(descriptor, args)

    @handle_errors
    def invoke(self, descriptor: CommandDescriptor, args: List[str]) -> int:
        command = descriptor.to_click()
        try:
            result = command.main(
                args=args,
                prog_name=f"{APP_BINARY} {descriptor.name}",
                standalone_mode=False,
                obj=self.context,
            )
        except click.ClickException as e:
            e.show()
            return e.exit_code
        except click.exceptions.Abort:
            render_error("Aborted")
            return 1
        return 0 if result is None else int(result)

    def print_commands(self) -> None:
        typer.secho(f"{APP_NAME} {__version__}", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"\nUsage:\n  {APP_BINARY} <command> [options] [arguments]\n")
        rows = [
            [d.name, ", ".join(d.aliases) or "-", d.summary] for d in self.registry
        ]
        self.context.console.table(["Command", "Aliases", "Description"], rows)
        typer.echo(f"\nRun '{APP_BINARY} help <command>' for the options of one command.")


def run(argv: Sequence[str], context: Optional[AppContext] = None) -> int:
    try:
        registry = build_registry()
    except RegistrationError as e:
        render_error(str(e))
        return 1
    return Dispatcher(registry, context or AppContext()).dispatch(argv)


def main() -> None:
    context = AppContext()
    LoggerManager.from_dict(context.config)
    logger.info("Starting %s %s", APP_NAME, __version__)
    sys.exit(run(sys.argv[1:], context))


if __name__ == "__main__":
    main()
