#!/usr/bin/env python3
"""
monocli/cli/commands/dev.py

Build and Dev Server Commands
"""

import logging
import time
from typing import Optional

import typer
from typing_extensions import Annotated

from monocli.cli.helpers import (
    ForceOption,
    NoCacheOption,
    NoInteractionOption,
    WorkspaceOption,
    initialize,
    select_workspace,
    turbo_options,
)
from monocli.cli.registry import CommandDescriptor
from monocli.errors import WorkspaceNotFoundError

logger = logging.getLogger(__name__)


def build_command(
    ctx: typer.Context,
    workspace: WorkspaceOption = None,
    force: ForceOption = False,
    no_cache: NoCacheOption = False,
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Print a JSON summary.")] = False,
    table: Annotated[bool, typer.Option("--table", help="Print a table summary.")] = False,
    no_interaction: NoInteractionOption = False,
) -> int:
    """
    Build every workspace (or one) through Turbo.
    """
    app = initialize(ctx, no_interaction)
    quiet = json_output or table
    if not quiet:
        app.console.intro("Building for Production")

    started = time.monotonic()
    exit_code = app.turbo.run("build", turbo_options(workspace, force, no_cache))
    duration = time.monotonic() - started

    summary = {
        "task": "build",
        "workspace": workspace or "all",
        "status": "success" if exit_code == 0 else "failed",
        "exit_code": exit_code,
        "duration": round(duration, 2),
    }
    if json_output:
        app.console.json(summary)
    elif table:
        app.console.table(
            ["Task", "Workspace", "Status", "Exit Code", "Duration"],
            [[summary["task"], summary["workspace"], summary["status"], exit_code, f"{duration:.2f}s"]],
        )
    elif exit_code == 0:
        app.console.outro("✓ Build completed successfully!")
    else:
        app.console.error("✗ Build failed")
    return 0 if exit_code == 0 else 1


def dev_command(
    ctx: typer.Context,
    workspace: WorkspaceOption = None,
    port: Annotated[
        Optional[int], typer.Option("--port", "-p", help="Dev server port (reserved, not used yet).")
    ] = None,
    force: ForceOption = False,
    no_cache: NoCacheOption = False,
    no_interaction: NoInteractionOption = False,
) -> int:
    """
    Start the development server of an app.
    """
    app = initialize(ctx, no_interaction)
    if port is not None:
        logger.debug("--port=%s given; the option is reserved and has no effect", port)
    try:
        target = select_workspace(
            app, workspace, "Select app to run", candidates=app.workspaces.apps(), kind="app"
        )
    except WorkspaceNotFoundError as e:
        app.console.error(str(e))
        return 1

    app.console.intro(f"Starting development server for {target.name}")
    app.console.comment("Press Ctrl+C to stop")
    if app.turbo.run("dev", turbo_options(target.name, force, no_cache)) != 0:
        app.console.error("✗ Development server failed")
        return 1
    return 0


COMMANDS = [
    CommandDescriptor("build", build_command),
    CommandDescriptor("dev", dev_command),
]
