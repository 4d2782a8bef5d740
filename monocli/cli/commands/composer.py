#!/usr/bin/env python3
"""
monocli/cli/commands/composer.py

Composer Commands

Run Composer inside one workspace: add or update packages, or pass any other
composer command straight through.
"""

import logging
import shlex
from typing import List, Optional

import typer
from typing_extensions import Annotated

from monocli.cli.helpers import (
    ForceOption,
    NoCacheOption,
    NoInteractionOption,
    WorkspaceOption,
    initialize,
    select_workspace,
)
from monocli.cli.registry import PASSTHROUGH_SETTINGS, CommandDescriptor
from monocli.errors import WorkspaceNotFoundError

logger = logging.getLogger(__name__)


def require_command(
    ctx: typer.Context,
    package: Annotated[
        str, typer.Argument(help="Package to add, e.g. monolog/monolog or symfony/console:^7.0")
    ],
    dev: Annotated[bool, typer.Option("--dev", "-d", help="Add as a development dependency.")] = False,
    workspace: WorkspaceOption = None,
    force: ForceOption = False,
    no_cache: NoCacheOption = False,
    no_interaction: NoInteractionOption = False,
) -> int:
    """
    Add a Composer package to a workspace.
    """
    app = initialize(ctx, no_interaction)
    try:
        target = select_workspace(app, workspace, "Select workspace")
    except WorkspaceNotFoundError as e:
        app.console.error(str(e))
        return 1

    label = "dev dependency" if dev else "dependency"
    app.console.intro(f"Adding {package} as a {label} to {target.name}")
    if app.composer.require_package(target, package, dev) != 0:
        app.console.error(f"✗ Failed to add {package}")
        return 1
    app.console.outro(f"✓ {package} added to {target.name}")
    return 0


def update_command(
    ctx: typer.Context,
    package: Annotated[
        Optional[str], typer.Argument(help="Package to update; all packages when omitted.")
    ] = None,
    workspace: WorkspaceOption = None,
    force: ForceOption = False,
    no_cache: NoCacheOption = False,
    no_interaction: NoInteractionOption = False,
) -> int:
    """
    Update Composer dependencies of a workspace.
    """
    app = initialize(ctx, no_interaction)
    try:
        target = select_workspace(app, workspace, "Select workspace")
    except WorkspaceNotFoundError as e:
        app.console.error(str(e))
        return 1

    app.console.intro(f"Updating {package or 'all packages'} in {target.name}")
    if app.composer.update_package(target, package) != 0:
        app.console.error("✗ Update failed")
        return 1
    app.console.outro("✓ Dependencies updated")
    return 0


def composer_command(
    ctx: typer.Context,
    command: Annotated[List[str], typer.Argument(help="Composer command and its arguments.")],
    workspace: WorkspaceOption = None,
    force: ForceOption = False,
    no_cache: NoCacheOption = False,
    no_interaction: NoInteractionOption = False,
) -> int:
    """
    Run any Composer command in a workspace and return its exit code.
    """
    app = initialize(ctx, no_interaction)
    try:
        target = select_workspace(app, workspace, "Select workspace")
    except WorkspaceNotFoundError as e:
        app.console.error(str(e))
        return 1

    raw_args = shlex.join(command)
    app.console.comment(f"Running: composer {raw_args} (in {target.name})")
    return app.composer.run_command(raw_args, target.path)


COMMANDS = [
    CommandDescriptor("require", require_command, aliases=("req", "add")),
    CommandDescriptor("update", update_command, aliases=("up", "upgrade")),
    CommandDescriptor(
        "composer", composer_command, aliases=("comp",), context_settings=PASSTHROUGH_SETTINGS
    ),
]
