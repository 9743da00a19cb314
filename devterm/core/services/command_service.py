"""
Entry point for one line of user input.
"""

from __future__ import annotations

import logging
from typing import Any

from devterm.core.commands.catalog import CommandCatalog
from devterm.core.commands.tokenizer import split_batch
from devterm.core.common.exceptions import BatchLimitExceededError, CommandEngineError
from devterm.core.common.logging_utils import (
    AUDIT_LOGGER_NAME,
    LogContext,
    get_logger,
    truncate_command,
)
from devterm.core.config.app_config import EngineConfig
from devterm.core.domain.command_context import ExecutionContext
from devterm.core.domain.responses import CommandResponse, ResponseType
from devterm.core.services.batch_executor import BatchExecutor
from devterm.core.services.command_pipeline import CommandPipeline
from devterm.core.services.dispatcher import GENERIC_FAILURE_MESSAGE, CommandDispatcher
from devterm.core.services.wizard_service import WizardService

logger = logging.getLogger(__name__)
audit_logger = get_logger(AUDIT_LOGGER_NAME)


class CommandService:
    """
    A service for processing and executing terminal input.

    Input is routed to the conversation's active wizard if there is one,
    to the batch executor if it chains commands, and otherwise through the
    single-command pipeline. Errors never escape ``execute``; they
    are returned as ``error`` responses.
    """

    def __init__(
        self,
        catalog: CommandCatalog,
        pipeline: CommandPipeline,
        dispatcher: CommandDispatcher,
        config: EngineConfig | None = None,
    ) -> None:
        self._config = config or EngineConfig()
        self._catalog = catalog
        self._pipeline = pipeline
        self._dispatcher = dispatcher
        self._wizards = WizardService(pipeline, dispatcher, self._config)
        self._batches = BatchExecutor(self.run_single, self._config.max_batch_size)

    @property
    def catalog(self) -> CommandCatalog:
        return self._catalog

    @property
    def wizards(self) -> WizardService:
        return self._wizards

    @property
    def dispatcher(self) -> CommandDispatcher:
        return self._dispatcher

    async def execute(
        self, text: str, context: ExecutionContext | None = None
    ) -> CommandResponse:
        """
        Execute one line of input.

        Args:
            text: Raw input, possibly several commands chained with ``&&``.
            context: Caller identity, conversation and current project.

        Returns:
            The command's response, a wizard prompt, or a batch response whose
            ``data`` is the batch envelope.
        """
        context = context or ExecutionContext()

        if self._wizards.has_active(context.conversation_id):
            try:
                return await self._wizards.advance(text, context)
            except CommandEngineError as e:
                return CommandResponse.from_error(e)
            except Exception as e:
                logger.exception("Unexpected error in wizard for %s", context.conversation_id)
                return CommandResponse.error(GENERIC_FAILURE_MESSAGE, data={"error": str(e)})

        segments = split_batch(text)
        if len(segments) > 1:
            return await self._execute_batch(text, context)
        return await self.run_single(segments[0] if segments else text, context)

    async def run_single(self, raw: str, context: ExecutionContext) -> CommandResponse:
        """Run one command through parse, wizard check, validation, resolution and dispatch."""
        with LogContext(
            audit_logger,
            conversation_id=context.conversation_id,
            user_id=context.user_id,
        ) as log:
            try:
                spec, parsed = self._pipeline.parse(raw)
                if self._pipeline.needs_wizard(spec, parsed, context):
                    response = await self._wizards.start(spec, parsed, context)
                else:
                    validated = await self._pipeline.prepare(spec, parsed, context)
                    response = await self._dispatcher.dispatch(validated)
            except CommandEngineError as e:
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug("Command rejected: %s (%s)", e.message, type(e).__name__)
                response = CommandResponse.from_error(e)
            except Exception as e:
                logger.exception("Unexpected error running '%s'", truncate_command(raw))
                response = CommandResponse.error(GENERIC_FAILURE_MESSAGE, data={"error": str(e)})

            log.info(
                "command_executed",
                command=truncate_command(raw),
                response_type=response.type.value,
            )
        return response

    async def _execute_batch(self, text: str, context: ExecutionContext) -> CommandResponse:
        try:
            outcome = await self._batches.run_batch(text, context)
        except BatchLimitExceededError as e:
            logger.warning("Rejected batch: %s", e.message)
            return CommandResponse.from_error(e)

        if outcome.failed:
            message = (
                f"Batch stopped after {outcome.executed_count} of "
                f"{outcome.total_count} commands"
            )
            response_type = ResponseType.ERROR
        else:
            message = f"Executed {outcome.executed_count} commands"
            response_type = ResponseType.SUCCESS
        return CommandResponse(type=response_type, message=message, data=outcome.to_envelope())

    def validate(self, text: str) -> dict[str, Any]:
        """Check the syntax of ``text`` without executing anything."""
        commands = split_batch(text)
        if not commands:
            return {"is_valid": False, "errors": ["Empty command"]}
        if len(commands) > self._config.max_batch_size:
            error = BatchLimitExceededError(len(commands), self._config.max_batch_size)
            return {"is_valid": False, "errors": [error.message]}

        errors: list[str] = []
        for raw in commands:
            errors.extend(self._pipeline.parser.validate_syntax(raw))
        return {"is_valid": not errors, "errors": errors}

    def suggestions(self, partial: str) -> list[str]:
        return self._catalog.suggestions(partial, self._config.suggestion_limit)

    def commands(self) -> dict[str, Any]:
        """Catalog listing for autocomplete."""
        return {
            "commands": [spec.describe() for spec in self._catalog.all()],
            "aliases": self._catalog.aliases(),
        }
