"""
Registry mapping canonical command names to async handlers.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from devterm.core.interfaces.command_handler_interface import CommandHandler

logger = logging.getLogger(__name__)


class HandlerRegistry:
    """
    Registry for command handlers.

    Handlers are registered explicitly against canonical command names
    (``"add todo"``), never against aliases.
    """

    def __init__(self) -> None:
        """Initialize the handler registry."""
        self._handlers: dict[str, CommandHandler] = {}

    def register(self, name: str, handler: CommandHandler, *, replace: bool = False) -> None:
        """
        Register a handler.

        Args:
            name: Canonical command name
            handler: Async callable receiving a ``ValidatedCommand``
            replace: Allow overriding an existing registration

        Raises:
            ValueError: If the name is empty or already registered
            TypeError: If the handler is not callable
        """
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Command name must be a non-empty string.")
        if not callable(handler):
            raise TypeError("Command handler must be a callable.")
        key = name.strip().lower()
        if key in self._handlers and not replace:
            raise ValueError(f"Command '{key}' is already registered.")

        self._handlers[key] = handler
        logger.debug("Registered command handler: %s", key)

    def handler(self, name: str) -> Callable[[CommandHandler], CommandHandler]:
        """
        A decorator to register a command handler.

        Args:
            name: The canonical name of the command to register.

        Returns:
            A decorator that registers the handler and returns it unchanged.
        """

        def decorator(func: CommandHandler) -> CommandHandler:
            self.register(name, func)
            return func

        return decorator

    def get(self, name: str) -> CommandHandler | None:
        return self._handlers.get(name.strip().lower())

    def has(self, name: str) -> bool:
        return name.strip().lower() in self._handlers

    def get_all(self) -> dict[str, CommandHandler]:
        """
        Gets all registered handlers.

        Returns:
            A dictionary of command names to their handlers.
        """
        return self._handlers.copy()

    def unregister(self, name: str) -> None:
        self._handlers.pop(name.strip().lower(), None)
