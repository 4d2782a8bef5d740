#!/usr/bin/env python3
"""
monocli/cli/commands/utility.py

Utility Commands

Version information, environment health checks and the persistent CLI
configuration.
"""

import logging
import platform
import re
from typing import Callable, List, Optional, Tuple

import typer
from packaging.version import InvalidVersion, Version
from typing_extensions import Annotated

from monocli import __version__
from monocli.cli.context import AppContext
from monocli.cli.helpers import NoInteractionOption, initialize
from monocli.cli.registry import CommandDescriptor
from monocli.config_manager import ConfigManager
from monocli.constants import APP_NAME, NOT_INSTALLED
from monocli.errors import ConfigurationError

logger = logging.getLogger(__name__)

VERSION_NUMBER = re.compile(r"(\d+(?:\.\d+)*)")

MINIMUM_VERSIONS = {
    "PHP": "8.2",
    "Composer": "2.0",
    "Node.js": "18.0",
}


def parse_version(raw: Optional[str]) -> Optional[Version]:
    """Extract the first dotted number from tool output ("v20.11.1" -> 20.11.1)."""
    if not raw:
        return None
    match = VERSION_NUMBER.search(raw)
    if not match:
        return None
    try:
        return Version(match.group(1))
    except InvalidVersion:
        logger.debug("Unparseable version string: %s", raw)
        return None


def _first_line(output: Optional[str]) -> Optional[str]:
    return output.splitlines()[0].strip() if output else None


def turbo_version(app: AppContext) -> Optional[str]:
    """Turbo runs through the configured command at the monorepo root."""
    if app.root_or_none() is None:
        return None
    return _first_line(app.turbo.version())


def tool_probes(app: AppContext) -> List[Tuple[str, Callable[[], Optional[str]]]]:
    probe = app.runner.probe
    return [
        ("PHP", lambda: probe(["php", "-r", "echo PHP_VERSION;"])),
        ("Composer", app.composer.version),
        ("Turbo", lambda: turbo_version(app)),
        ("Node.js", lambda: _first_line(probe(["node", "--version"]))),
        ("pnpm", lambda: _first_line(probe(["pnpm", "--version"]))),
    ]


def version_command(
    ctx: typer.Context,
    no_interaction: NoInteractionOption = False,
) -> int:
    """
    Show the versions of Mono CLI and the tools it drives.
    """
    app = initialize(ctx, no_interaction)
    app.console.intro(f"{APP_NAME} {__version__}")
    app.console.info("Python")
    app.console.line(f"  {platform.python_version()}")
    for label, probe in tool_probes(app):
        app.console.info(label)
        app.console.line(f"  {probe() or NOT_INSTALLED}")
    return 0


def doctor_command(
    ctx: typer.Context,
    no_interaction: NoInteractionOption = False,
) -> int:
    """
    Check that the required tools are installed and the monorepo is readable.
    """
    app = initialize(ctx, no_interaction)
    app.console.intro("Running system health checks...")
    all_passed = True

    for label, probe in tool_probes(app):
        raw = probe()
        if raw is None:
            app.console.error(f"  ✗ {label}: {NOT_INSTALLED}")
            all_passed = False
            continue
        required = MINIMUM_VERSIONS.get(label)
        found = parse_version(raw)
        if required and found is not None and found < Version(required):
            app.console.error(f"  ✗ {label}: {found} (required: >= {required})")
            all_passed = False
        else:
            app.console.success(f"  ✓ {label}: {raw}")

    try:
        workspaces = app.workspaces
        app.console.success(
            f"  ✓ Workspaces: {len(workspaces.apps())} app(s), "
            f"{len(workspaces.packages())} package(s) in {workspaces.root}"
        )
    except ConfigurationError as e:
        app.console.error(f"  ✗ Workspaces: {e}")
        all_passed = False

    if all_passed:
        app.console.outro("✓ All checks passed! System is healthy.")
        return 0
    app.console.error("✗ Some checks failed. Please fix the issues above.")
    return 1


def config_command(
    ctx: typer.Context,
    options: Annotated[
        Optional[List[str]], typer.Argument(help="KEY=VALUE pairs to store in the user config.")
    ] = None,
    reset: Annotated[bool, typer.Option("--reset", help="Restore the default configuration.")] = False,
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Print as JSON.")] = False,
    no_interaction: NoInteractionOption = False,
) -> int:
    """
    Show or change the persistent configuration.
    """
    app = initialize(ctx, no_interaction)
    manager = ConfigManager(root=app.root_or_none())

    if reset:
        manager.reset()
        app.console.success("Configuration reset to defaults.")
    elif options:
        try:
            updates = manager.update_config_from_list(options)
        except ValueError as e:
            app.console.error(str(e))
            return 1
        for key, value in updates.items():
            app.console.success(f"Set {key} = {value}")
        return 0

    effective = manager.to_dict()
    if json_output:
        app.console.json(effective)
    else:
        app.console.table(["Key", "Value"], sorted(effective.items()), title=str(manager.CONFIG_FILE))
    return 0


COMMANDS = [
    CommandDescriptor("version", version_command, aliases=("ver", "v")),
    CommandDescriptor("doctor", doctor_command, aliases=("check", "health")),
    CommandDescriptor("config", config_command),
]
