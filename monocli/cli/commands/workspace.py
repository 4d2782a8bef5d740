"""
monocli/cli/commands/workspace.py

Inspect the workspaces of the current monorepo.
"""

import logging
from typing import Optional

import typer
from typing_extensions import Annotated

from monocli.cli.helpers import (
    NoInteractionOption,
    WorkspaceOption,
    initialize,
    select_workspace,
)
from monocli.cli.registry import CommandDescriptor
from monocli.errors import WorkspaceNotFoundError

logger = logging.getLogger(__name__)


def list_command(
    ctx: typer.Context,
    apps: Annotated[bool, typer.Option("--apps", "-a", help="Only list apps.")] = False,
    packages: Annotated[bool, typer.Option("--packages", "-p", help="Only list packages.")] = False,
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Print as JSON.")] = False,
    no_interaction: NoInteractionOption = False,
) -> int:
    """
    List all workspaces in the monorepo.
    """
    app = initialize(ctx, no_interaction)
    if apps and not packages:
        workspaces = app.workspaces.apps()
    elif packages and not apps:
        workspaces = app.workspaces.packages()
    else:
        workspaces = app.workspaces.all()

    if json_output:
        app.console.json([w.to_dict() for w in workspaces])
        return 0
    if not workspaces:
        app.console.warning("No workspaces found")
        return 0

    rows = []
    for w in workspaces:
        try:
            location = w.path.relative_to(app.workspaces.root)
        except ValueError:
            location = w.path
        rows.append([w.name, w.type.value, w.package_name or "-", "✓" if w.has_composer else "✗", location])
    app.console.table(["Name", "Type", "Package Name", "Composer", "Path"], rows)
    app.console.comment(f"Total: {len(workspaces)} workspace(s)")
    return 0


def info_command(
    ctx: typer.Context,
    name: Annotated[Optional[str], typer.Argument(help="Workspace to describe.")] = None,
    workspace: WorkspaceOption = None,
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Print as JSON.")] = False,
    no_interaction: NoInteractionOption = False,
) -> int:
    """
    Show details about one workspace.
    """
    app = initialize(ctx, no_interaction)
    try:
        target = select_workspace(app, name or workspace, "Select workspace")
    except WorkspaceNotFoundError as e:
        app.console.error(str(e))
        return 1

    details = target.to_dict()
    if json_output:
        app.console.json(details)
        return 0
    app.console.intro(f"Workspace: {target.name}")
    app.console.table(
        ["Property", "Value"],
        [
            ["Type", target.type.value],
            ["Package Name", target.package_name or "-"],
            ["Path", target.path],
            ["Composer", "yes" if target.has_composer else "no"],
            ["package.json", "yes" if target.has_package_json else "no"],
        ],
    )
    return 0


COMMANDS = [
    CommandDescriptor("list-workspaces", list_command, aliases=("ls", "workspaces")),
    CommandDescriptor("info", info_command, aliases=("show", "details")),
]
