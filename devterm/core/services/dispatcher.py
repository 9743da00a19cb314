"""
Dispatches validated commands to their registered handlers.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from devterm.core.commands.registry import HandlerRegistry
from devterm.core.common.exceptions import CommandEngineError
from devterm.core.domain.commands import ValidatedCommand
from devterm.core.domain.responses import CommandResponse

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "An error occurred while executing the command"


class CommandDispatcher:
    """Looks up the handler for a canonical name and runs it.

    Handler failures never escape: engine errors become ``error`` responses
    with their message, anything else is logged with its traceback and
    becomes a generic ``error`` response.
    """

    def __init__(self, registry: HandlerRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    async def dispatch(self, command: ValidatedCommand) -> CommandResponse:
        handler = self._registry.get(command.name)
        if handler is None:
            logger.warning("No handler registered for command '%s'", command.name)
            return CommandResponse.error(
                f"Command /{command.name} is not implemented",
                suggestions=["/help"],
            )

        try:
            result = await handler(command)
        except CommandEngineError as e:
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Handler for '%s' failed: %s", command.name, e.message)
            return CommandResponse.from_error(e)
        except Exception as e:
            logger.exception("Unexpected error executing '%s'", command.name)
            return CommandResponse.error(GENERIC_FAILURE_MESSAGE, data={"error": str(e)})

        if isinstance(result, CommandResponse):
            response = result
        else:
            try:
                response = CommandResponse.model_validate(result)
            except ValidationError as e:
                logger.error("Handler for '%s' returned an invalid response: %s", command.name, e)
                return CommandResponse.error(GENERIC_FAILURE_MESSAGE, data={"error": str(e)})

        if command.entity is not None:
            response = response.with_metadata(**command.entity.to_metadata())
        return response
