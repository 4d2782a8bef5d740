"""
monocli/cli/commands/lifecycle.py

Install and clean workspaces through Turbo.
"""

import logging

import typer

from monocli.cli.helpers import (
    ForceOption,
    NoCacheOption,
    NoInteractionOption,
    WorkspaceOption,
    initialize,
    turbo_options,
)
from monocli.cli.registry import CommandDescriptor

logger = logging.getLogger(__name__)


def _scope(app, workspace) -> str:
    if workspace:
        return f"workspace: {workspace}"
    return f"{len(app.workspaces)} workspace(s)"


def install_command(
    ctx: typer.Context,
    workspace: WorkspaceOption = None,
    force: ForceOption = False,
    no_cache: NoCacheOption = False,
    no_interaction: NoInteractionOption = False,
) -> int:
    """
    Install Composer dependencies in every workspace (or one).
    """
    app = initialize(ctx, no_interaction)
    app.console.intro("Installing Dependencies")
    app.console.info(f"Installing {_scope(app, workspace)}")

    options = turbo_options(workspace, force, no_cache)
    if app.turbo.run("composer:install", options) != 0:
        app.console.error("✗ Installation failed")
        return 1
    app.console.outro("✓ Dependencies installed successfully!")
    return 0


def clean_command(
    ctx: typer.Context,
    workspace: WorkspaceOption = None,
    force: ForceOption = False,
    no_cache: NoCacheOption = False,
    no_interaction: NoInteractionOption = False,
) -> int:
    """
    Remove caches and build artifacts. The Turbo cache is always bypassed.
    """
    app = initialize(ctx, no_interaction)
    app.console.intro("Cleaning Caches")
    app.console.info(f"Cleaning {_scope(app, workspace)}")

    options = turbo_options(workspace, force, no_cache=True)
    if app.turbo.run("clean", options) != 0:
        app.console.error("✗ Clean failed")
        return 1
    app.console.outro("✓ Caches cleaned successfully!")
    return 0


COMMANDS = [
    CommandDescriptor("install", install_command, aliases=("i",)),
    CommandDescriptor("clean", clean_command),
]
