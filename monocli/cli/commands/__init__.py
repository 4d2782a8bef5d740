"""
monocli/cli/commands/__init__.py

Static registration table of every CLI command.
"""

from typing import List

from monocli.cli.commands import (
    composer,
    deploy,
    dev,
    lifecycle,
    make,
    quality,
    turbo,
    utility,
    workspace,
)
from monocli.cli.registry import CommandDescriptor, CommandRegistry

COMMANDS: List[CommandDescriptor] = [
    *lifecycle.COMMANDS,
    *composer.COMMANDS,
    *dev.COMMANDS,
    *quality.COMMANDS,
    *deploy.COMMANDS,
    *turbo.COMMANDS,
    *workspace.COMMANDS,
    *make.COMMANDS,
    *utility.COMMANDS,
]


def build_registry() -> CommandRegistry:
    """Raises RegistrationError if two commands claim the same token."""
    return CommandRegistry(COMMANDS)
