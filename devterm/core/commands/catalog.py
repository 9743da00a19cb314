"""
Registry of command specifications.

The catalog is built once at startup from an iterable of ``CommandSpec`` and
is read-only afterwards. It owns two lookup tables: canonical names
(``"add todo"``, ``"help"``) and aliases (``"todo"``, ``"todos"``,
``"add-todo"``), both keyed in lower case.
"""

from __future__ import annotations

import difflib
import logging
from collections.abc import Iterable

from devterm.constants import DEFAULT_SUGGESTION_LIMIT
from devterm.core.domain.command_spec import CommandSpec

logger = logging.getLogger(__name__)


def _normalize(key: str) -> str:
    return " ".join(key.lower().split())


class CommandCatalog:
    """Immutable table of registered commands and their aliases."""

    def __init__(self, specs: Iterable[CommandSpec]) -> None:
        """
        Build the catalog.

        Args:
            specs: Command specifications to register.

        Raises:
            ValueError: If a name or alias is registered twice.
        """
        self._commands: dict[str, CommandSpec] = {}
        self._aliases: dict[str, str] = {}

        for spec in specs:
            name = _normalize(spec.name)
            if name in self._commands:
                raise ValueError(f"Command '{name}' is already registered.")
            self._commands[name] = spec

        for name, spec in self._commands.items():
            for alias in sorted(spec.aliases):
                key = _normalize(alias)
                if key in self._commands:
                    raise ValueError(
                        f"Alias '{key}' of '{name}' collides with a command name."
                    )
                if key in self._aliases and self._aliases[key] != name:
                    raise ValueError(
                        f"Alias '{key}' is already registered for '{self._aliases[key]}'."
                    )
                self._aliases[key] = name

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Command catalog built with %d commands and %d aliases",
                len(self._commands),
                len(self._aliases),
            )

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and _normalize(name) in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def get(self, name: str) -> CommandSpec | None:
        """Look up a command by canonical name."""
        return self._commands.get(_normalize(name))

    def get_by_alias(self, alias: str) -> CommandSpec | None:
        """Look up a command by alias."""
        name = self._aliases.get(_normalize(alias))
        return self._commands[name] if name is not None else None

    def find(self, words: str) -> CommandSpec | None:
        """Look up by canonical name first, then alias."""
        return self.get(words) or self.get_by_alias(words)

    def all(self) -> list[CommandSpec]:
        return list(self._commands.values())

    def aliases(self) -> dict[str, str]:
        """Alias → canonical name."""
        return dict(self._aliases)

    def suggestions(self, partial: str, limit: int = DEFAULT_SUGGESTION_LIMIT) -> list[str]:
        """
        Get command suggestions for partial input.

        Args:
            partial: Partial input, e.g. ``"/ad"`` or ``"view t"``.
            limit: Maximum number of suggestions.

        Returns:
            ``"/<name> - <description>"`` strings, canonical names first.
        """
        prefix = _normalize(partial.lstrip("/"))
        suggestions: list[str] = []
        for name, spec in self._commands.items():
            if name.startswith(prefix):
                suggestions.append(f"/{name} - {spec.description}")
        for alias, name in self._aliases.items():
            if alias.startswith(prefix):
                suggestions.append(f"/{alias} - {self._commands[name].description}")
        return suggestions[:limit]

    def similar(self, words: str, limit: int = 3) -> list[str]:
        """Close matches for an unknown command, as ``/name`` strings."""
        keys = list(self._commands) + list(self._aliases)
        matches = difflib.get_close_matches(_normalize(words), keys, n=limit, cutoff=0.6)
        return [f"/{match}" for match in matches]
