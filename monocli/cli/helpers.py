#!/usr/bin/env python3
"""
monocli/cli/helpers.py

Options and helpers shared by the command modules.
"""

import logging
from typing import List, Optional

import typer
from typing_extensions import Annotated

from monocli.adapters.turbo import TurboOptions
from monocli.cli.context import AppContext
from monocli.errors import WorkspaceNotFoundError
from monocli.workspace.registry import Workspace

logger = logging.getLogger(__name__)

WorkspaceOption = Annotated[
    Optional[str], typer.Option("--workspace", "-w", help="Target workspace name.", show_default=False)
]
ForceOption = Annotated[
    bool, typer.Option("--force", "-f", help="Force the operation and bypass the Turbo cache.")
]
NoCacheOption = Annotated[bool, typer.Option("--no-cache", help="Disable the Turbo cache.")]
NoInteractionOption = Annotated[
    bool, typer.Option("--no-interaction", "-n", help="Do not ask any interactive question.")
]


def initialize(ctx: typer.Context, no_interaction: bool = False) -> AppContext:
    """
    Runs after argument parsing and before the command body; returns the
    shared application context.
    """
    app: AppContext = ctx.obj
    if no_interaction:
        app.console.interactive = False
    logger.debug("Initialized command '%s' with params %s", ctx.info_name, ctx.params)
    return app


def require_workspace(app: AppContext, name: str) -> Workspace:
    workspace = app.workspaces.find(name)
    if workspace is None:
        raise WorkspaceNotFoundError(name, app.workspaces.names())
    return workspace


def select_workspace(
    app: AppContext,
    name: Optional[str],
    question: str = "Select workspace",
    candidates: Optional[List[Workspace]] = None,
    kind: str = "workspace",
) -> Workspace:
    """
    Return the named workspace, the only candidate, or the one the user picks.
    Raises WorkspaceNotFoundError when the name is unknown or nothing matches.
    """
    if name:
        return require_workspace(app, name)
    candidates = app.workspaces.all() if candidates is None else candidates
    if not candidates:
        raise WorkspaceNotFoundError(None, kind=kind)
    if len(candidates) == 1:
        app.console.info(f"Using {kind}: {candidates[0].name}")
        return candidates[0]
    chosen = app.console.select(question, [w.name for w in candidates])
    return next(w for w in candidates if w.name == chosen)


def turbo_options(
    workspace: Optional[str] = None,
    force: bool = False,
    no_cache: bool = False,
    **extra: Optional[object],
) -> TurboOptions:
    """
    Build TurboOptions holding only the flags that were actually given. The
    workspace name goes to turbo's --filter exactly as typed.
    """
    options = TurboOptions(filter=workspace or None)
    if force:
        options.force = True
    if no_cache:
        options.cache = False
    for key, value in extra.items():
        if value:
            setattr(options, key, value)
    return options
