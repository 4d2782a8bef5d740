#!/usr/bin/env python3
"""
monocli/cli/registry.py

Command Registry

Holds one CommandDescriptor per CLI verb and guarantees that no name or alias
is claimed twice. Each descriptor wraps a typer-annotated handler that is
turned into a click command on demand.
"""

import difflib
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

import click
import typer

from monocli.errors import RegistrationError

logger = logging.getLogger(__name__)

PASSTHROUGH_SETTINGS = {"ignore_unknown_options": True, "allow_extra_args": True}


@dataclass(frozen=True)
class CommandDescriptor:
    name: str
    handler: Callable[..., Optional[int]]
    help: str = ""
    aliases: Tuple[str, ...] = ()
    context_settings: Dict[str, Any] = field(default_factory=dict, hash=False)

    @property
    def tokens(self) -> Tuple[str, ...]:
        return (self.name, *self.aliases)

    @property
    def summary(self) -> str:
        text = self.help or (self.handler.__doc__ or "")
        return text.strip().splitlines()[0] if text.strip() else ""

    def to_click(self) -> click.Command:
        app = typer.Typer(add_completion=False)
        app.command(
            self.name,
            help=self.help or None,
            context_settings=self.context_settings or None,
        )(self.handler)
        return typer.main.get_command(app)

    @property
    def option_schema(self) -> Dict[str, Dict[str, Any]]:
        """Flag name -> shortcut, arity and default, as parsed by click."""
        schema: Dict[str, Dict[str, Any]] = {}
        for param in self.to_click().params:
            if not isinstance(param, click.Option):
                continue
            long_names = [o for o in param.opts if o.startswith("--")]
            short_names = [o for o in param.opts if not o.startswith("--")]
            schema[long_names[0] if long_names else param.opts[0]] = {
                "shortcut": short_names[0] if short_names else None,
                "arity": 0 if param.is_flag else param.nargs,
                "default": param.default,
            }
        return schema


class CommandRegistry:
    def __init__(self, descriptors: Iterable[CommandDescriptor] = ()):
        self._commands: Dict[str, CommandDescriptor] = {}
        self._tokens: Dict[str, CommandDescriptor] = {}
        for descriptor in descriptors:
            self.register(descriptor)

    def register(self, descriptor: CommandDescriptor) -> None:
        """Add a descriptor; any name or alias collision raises RegistrationError."""
        claimed = set()
        for token in descriptor.tokens:
            owner = self._tokens.get(token)
            if owner is not None:
                raise RegistrationError(
                    f"Command '{descriptor.name}' cannot register '{token}': "
                    f"already claimed by command '{owner.name}'"
                )
            if token in claimed:
                raise RegistrationError(
                    f"Command '{descriptor.name}' claims '{token}' more than once"
                )
            claimed.add(token)
        self._commands[descriptor.name] = descriptor
        for token in descriptor.tokens:
            self._tokens[token] = descriptor
        logger.debug("Registered command '%s' (aliases: %s)", descriptor.name, descriptor.aliases)

    def resolve(self, token: str) -> Optional[CommandDescriptor]:
        """Exact, case-sensitive match on a name or alias."""
        return self._tokens.get(token)

    def suggest(self, token: str, limit: int = 3) -> List[str]:
        """Command names that look like token, best first."""
        close = difflib.get_close_matches(token, list(self._tokens), n=limit, cutoff=0.6)
        lowered = token.lower()
        close += [t for t in sorted(self._tokens) if lowered and lowered in t.lower()]
        suggestions: List[str] = []
        for candidate in close:
            name = self._tokens[candidate].name
            if name not in suggestions:
                suggestions.append(name)
        return suggestions[:limit]

    def __iter__(self) -> Iterator[CommandDescriptor]:
        return iter(sorted(self._commands.values(), key=lambda d: d.name))

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, token: str) -> bool:
        return token in self._tokens
