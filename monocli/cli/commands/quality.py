#!/usr/bin/env python3
"""
monocli/cli/commands/quality.py

Quality Commands

Tests, static analysis, code style, mutation testing and automated
refactoring. Most commands are Turbo tasks; mutate and refactor run Infection
and Rector directly at the repository root with no timeout.
"""

import logging
from typing import Optional

import typer
from typing_extensions import Annotated

from monocli.adapters.process import ToolInvocation
from monocli.cli.helpers import (
    ForceOption,
    NoCacheOption,
    NoInteractionOption,
    WorkspaceOption,
    initialize,
    require_workspace,
    turbo_options,
)
from monocli.cli.registry import CommandDescriptor
from monocli.errors import WorkspaceNotFoundError
from monocli.utils import force_remove

logger = logging.getLogger(__name__)

INFECTION_BINARY = "vendor/bin/infection"
RECTOR_BINARY = "vendor/bin/rector"
RECTOR_CACHE_DIR = ".rector.cache"


def phpunit_command(
    ctx: typer.Context,
    unit: Annotated[bool, typer.Option("--unit", "-u", help="Run unit tests only.")] = False,
    feature: Annotated[bool, typer.Option("--feature", help="Run feature tests only.")] = False,
    coverage: Annotated[bool, typer.Option("--coverage", "-c", help="Collect code coverage.")] = False,
    test_filter: Annotated[
        Optional[str], typer.Option("--filter", help="Only run tests matching this pattern.")
    ] = None,
    workspace: WorkspaceOption = None,
    force: ForceOption = False,
    no_cache: NoCacheOption = False,
    no_interaction: NoInteractionOption = False,
) -> int:
    """
    Run PHPUnit tests through Turbo.
    """
    app = initialize(ctx, no_interaction)
    if workspace:
        try:
            require_workspace(app, workspace)
        except WorkspaceNotFoundError as e:
            app.console.error(str(e))
            return 1

    task = "test"
    if unit:
        task = "test:unit"
    elif feature:
        task = "test:feature"
    elif coverage:
        task = "test:coverage"

    app.console.intro("Running Tests")
    app.console.info(f"Task: {task}" + (f" (workspace: {workspace})" if workspace else ""))
    if test_filter:
        app.console.info(f"Filter: {test_filter}")

    passthrough = [f"--filter={test_filter}"] if test_filter else None
    exit_code = app.turbo.run(task, turbo_options(workspace, force, no_cache), passthrough)
    if exit_code != 0:
        app.console.error("✗ Tests failed")
        return 1
    app.console.outro("✓ All tests passed!")
    return 0


def typecheck_command(
    ctx: typer.Context,
    level: Annotated[
        Optional[int], typer.Option("--level", "-l", min=0, max=10, help="PHPStan rule level (0-10).")
    ] = None,
    workspace: WorkspaceOption = None,
    force: ForceOption = False,
    no_cache: NoCacheOption = False,
    no_interaction: NoInteractionOption = False,
) -> int:
    """
    Run PHPStan static analysis through Turbo.
    """
    app = initialize(ctx, no_interaction)
    app.console.intro("Running Static Analysis")
    if level is not None:
        app.console.info(f"Level: {level}")

    passthrough = [f"--level={level}"] if level is not None else None
    if app.turbo.run("typecheck", turbo_options(workspace, force, no_cache), passthrough) != 0:
        app.console.error("✗ Type errors found")
        return 1
    app.console.outro("✓ No type errors found!")
    return 0


def lint_command(
    ctx: typer.Context,
    fix: Annotated[bool, typer.Option("--fix", help="Fix issues instead of reporting them.")] = False,
    workspace: WorkspaceOption = None,
    force: ForceOption = False,
    no_cache: NoCacheOption = False,
    no_interaction: NoInteractionOption = False,
) -> int:
    """
    Check code style through Turbo.
    """
    app = initialize(ctx, no_interaction)
    if fix:
        app.console.info("Auto-fix enabled, running format command...")
        return format_command(ctx, False, workspace, force, no_cache, no_interaction)

    app.console.intro("Checking Code Style")
    if app.turbo.run("lint", turbo_options(workspace, force, no_cache)) != 0:
        app.console.error("✗ Code style issues found")
        app.console.comment('Run "mono format" to fix them')
        return 1
    app.console.outro("✓ Code style check passed!")
    return 0


def format_command(
    ctx: typer.Context,
    check: Annotated[bool, typer.Option("--check", help="Only report style issues.")] = False,
    workspace: WorkspaceOption = None,
    force: ForceOption = False,
    no_cache: NoCacheOption = False,
    no_interaction: NoInteractionOption = False,
) -> int:
    """
    Fix code style through Turbo.
    """
    app = initialize(ctx, no_interaction)
    if check:
        app.console.info("Check mode enabled, running lint command...")
        return lint_command(ctx, False, workspace, force, no_cache, no_interaction)

    app.console.intro("Formatting Code")
    if app.turbo.run("format", turbo_options(workspace, force, no_cache)) != 0:
        app.console.error("✗ Formatting failed")
        return 1
    app.console.outro("✓ Code formatted successfully!")
    return 0


def mutate_command(
    ctx: typer.Context,
    min_msi: Annotated[int, typer.Option("--min-msi", help="Minimum Mutation Score Indicator.")] = 80,
    min_covered_msi: Annotated[
        int, typer.Option("--min-covered-msi", help="Minimum covered-code MSI.")
    ] = 85,
    threads: Annotated[int, typer.Option("--threads", "-t", min=1, help="Parallel threads.")] = 4,
    show_mutations: Annotated[
        bool, typer.Option("--show-mutations", help="Print every escaped mutant.")
    ] = False,
    workspace: WorkspaceOption = None,
    force: ForceOption = False,
    no_cache: NoCacheOption = False,
    no_interaction: NoInteractionOption = False,
) -> int:
    """
    Run Infection mutation testing and return its exit code.
    """
    app = initialize(ctx, no_interaction)
    try:
        cwd = require_workspace(app, workspace).path if workspace else app.root
    except WorkspaceNotFoundError as e:
        app.console.error(str(e))
        return 1

    arguments = [
        f"--threads={threads}",
        f"--min-msi={min_msi}",
        f"--min-covered-msi={min_covered_msi}",
    ]
    if show_mutations:
        arguments.append("--show-mutations")

    app.console.intro("Running Mutation Tests")
    app.console.info(f"Minimum MSI: {min_msi}%, covered MSI: {min_covered_msi}%, threads: {threads}")
    invocation = ToolInvocation(str(cwd / INFECTION_BINARY), arguments, cwd, timeout=None)
    result = app.runner.run(invocation)
    if result.exit_code == 0:
        app.console.outro("✓ Mutation testing passed!")
    else:
        app.console.error("✗ Mutation testing failed")
    return result.exit_code


def refactor_command(
    ctx: typer.Context,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Show changes without applying them.")
    ] = False,
    clear_cache: Annotated[
        bool, typer.Option("--clear-cache", help="Clear the Rector cache before running.")
    ] = False,
    no_interaction: NoInteractionOption = False,
) -> int:
    """
    Run Rector for automated refactoring and return its exit code.
    """
    app = initialize(ctx, no_interaction)
    root = app.root
    app.console.intro(
        "Previewing refactoring changes..." if dry_run else "Running Rector refactoring..."
    )

    if clear_cache:
        cache_dir = root / RECTOR_CACHE_DIR
        app.console.info("Clearing Rector cache...")
        if cache_dir.is_dir():
            force_remove(cache_dir)
            logger.info("Removed %s", cache_dir)

    arguments = ["process"]
    if dry_run:
        arguments.append("--dry-run")
    invocation = ToolInvocation(str(root / RECTOR_BINARY), arguments, root, timeout=None)
    result = app.runner.run(invocation)
    if result.exit_code == 0:
        app.console.outro(
            "✓ Refactoring preview complete" if dry_run else "✓ Refactoring complete"
        )
    else:
        app.console.error("✗ Refactoring failed")
    return result.exit_code


COMMANDS = [
    CommandDescriptor("test", phpunit_command, aliases=("t", "phpunit")),
    CommandDescriptor("typecheck", typecheck_command, aliases=("tc", "phpstan")),
    CommandDescriptor("lint", lint_command),
    CommandDescriptor("format", format_command, aliases=("fmt",)),
    CommandDescriptor("mutate", mutate_command, aliases=("infection", "mutation")),
    CommandDescriptor("quality:refactor", refactor_command, aliases=("refactor", "rector")),
]
