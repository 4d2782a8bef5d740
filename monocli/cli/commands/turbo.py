"""
monocli/cli/commands/turbo.py

Direct access to Turbo: run a named task or pass raw arguments through.
Both commands return Turbo's exit code unchanged.
"""

import logging
from typing import List, Optional

import typer
from typing_extensions import Annotated

from monocli.cli.helpers import (
    ForceOption,
    NoCacheOption,
    NoInteractionOption,
    WorkspaceOption,
    initialize,
    turbo_options,
)
from monocli.cli.registry import PASSTHROUGH_SETTINGS, CommandDescriptor

logger = logging.getLogger(__name__)

ParallelOption = Annotated[bool, typer.Option("--parallel", "-p", help="Run tasks in parallel.")]
ContinueOption = Annotated[
    bool, typer.Option("--continue", help="Keep going when a task fails.")
]


def run_command(
    ctx: typer.Context,
    task: Annotated[str, typer.Argument(help="Turbo task to run, e.g. build or test:unit.")],
    parallel: ParallelOption = False,
    continue_on_error: ContinueOption = False,
    workspace: WorkspaceOption = None,
    force: ForceOption = False,
    no_cache: NoCacheOption = False,
    no_interaction: NoInteractionOption = False,
) -> int:
    """
    Run any Turbo task across the monorepo.
    """
    app = initialize(ctx, no_interaction)
    options = turbo_options(
        workspace, force, no_cache, parallel=parallel, continue_on_error=continue_on_error
    )
    declared = app.turbo.tasks()
    unknown = [name for name in task.split() if declared and name not in declared]
    if unknown:
        app.console.warning(
            f"Task '{' '.join(unknown)}' is not declared in turbo.json "
            f"(known: {', '.join(declared)})"
        )
    app.console.comment(f"Running task: {task}")
    return app.turbo.run(task, options)


def turbo_command(
    ctx: typer.Context,
    command: Annotated[List[str], typer.Argument(help="Raw Turbo arguments, e.g. prune api.")],
    turbo_filter: Annotated[
        Optional[str], typer.Option("--filter", help="Turbo filter (workspace name or pattern).")
    ] = None,
    parallel: ParallelOption = False,
    continue_on_error: ContinueOption = False,
    workspace: WorkspaceOption = None,
    force: ForceOption = False,
    no_cache: NoCacheOption = False,
    no_interaction: NoInteractionOption = False,
) -> int:
    """
    Pass arguments straight to Turbo.
    """
    app = initialize(ctx, no_interaction)
    options = turbo_options(
        turbo_filter or workspace,
        force,
        no_cache,
        parallel=parallel,
        continue_on_error=continue_on_error,
    )
    return app.turbo.execute(command, options)


COMMANDS = [
    CommandDescriptor("run", run_command, aliases=("exec", "execute")),
    CommandDescriptor(
        "turbo", turbo_command, aliases=("tb",), context_settings=PASSTHROUGH_SETTINGS
    ),
]
