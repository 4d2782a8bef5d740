#!/usr/bin/env python3
"""
monocli/cli/commands/deploy.py

Deploy and Publish Commands
"""

import logging

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


def deploy_command(
    ctx: typer.Context,
    skip_tests: Annotated[
        bool, typer.Option("--skip-tests", help="Skip the test run before deploying.")
    ] = False,
    workspace: WorkspaceOption = None,
    force: ForceOption = False,
    no_cache: NoCacheOption = False,
    no_interaction: NoInteractionOption = False,
) -> int:
    """
    Run the deployment pipeline through Turbo.
    """
    app = initialize(ctx, no_interaction)
    app.console.intro("Running Deployment Pipeline")
    if skip_tests:
        app.console.warning("⚠ Skipping tests (not recommended for production)")

    if app.turbo.run("deploy", turbo_options(workspace, force, no_cache)) != 0:
        app.console.error("✗ Deployment failed")
        return 1
    app.console.outro("✓ Deployment completed successfully!")
    return 0


def publish_command(
    ctx: typer.Context,
    tag: Annotated[str, typer.Option("--tag", "-t", help="Release tag to publish under.")] = "latest",
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Show what would be published without publishing.")
    ] = False,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip the confirmation prompt.")] = False,
    workspace: WorkspaceOption = None,
    force: ForceOption = False,
    no_cache: NoCacheOption = False,
    no_interaction: NoInteractionOption = False,
) -> int:
    """
    Publish a package workspace. Asks for confirmation first.
    """
    app = initialize(ctx, no_interaction)
    try:
        target = select_workspace(
            app,
            workspace,
            "Select package to publish",
            candidates=app.workspaces.packages(),
            kind="package",
        )
    except WorkspaceNotFoundError as e:
        app.console.error(str(e))
        return 1
    if not target.is_package:
        app.console.error(f"'{target.name}' is an app; only packages can be published")
        return 1

    app.console.intro(f"Publishing {target.name}")
    app.console.info(f"Tag: {tag}")
    if dry_run:
        app.console.warning("DRY RUN MODE - nothing will be published")

    if not yes and not app.console.confirm("Are you sure you want to publish?", default=False):
        app.console.warning("Publish cancelled")
        return 0

    options = turbo_options(target.name, force, no_cache)
    if dry_run:
        options.dry = ""
    if app.turbo.run("publish", options, passthrough=[f"--tag={tag}"]) != 0:
        app.console.error("✗ Publish failed")
        return 1
    app.console.outro(f"✓ {target.name} published with tag '{tag}'")
    return 0


COMMANDS = [
    CommandDescriptor("deploy", deploy_command),
    CommandDescriptor("publish", publish_command),
]
