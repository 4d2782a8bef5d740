"""
monocli/errors.py

Error taxonomy shared by every layer of the CLI.
"""

from typing import Iterable, Optional


class MonoCliError(Exception):
    """Base class for errors that are rendered to the user as one line."""


class ConfigurationError(MonoCliError):
    """Missing monorepo root, unreadable directory or malformed manifest."""


class RegistrationError(MonoCliError):
    """Two commands claim the same name or alias."""


class ScaffoldError(MonoCliError):
    """Template clone or rename failed."""


class WorkspaceNotFoundError(MonoCliError):
    """
    An unknown workspace name was given, or there was nothing to choose from
    (name is None).
    """

    def __init__(
        self, name: Optional[str], available: Optional[Iterable[str]] = None, kind: str = "workspace"
    ) -> None:
        self.name = name
        self.available = list(available or [])
        if name is None:
            message = f"No {kind}s found"
        else:
            message = f"{kind.capitalize()} '{name}' not found"
            if self.available:
                message += f". Available: {', '.join(self.available)}"
        super().__init__(message)
