"""
Sequential execution of ``&&``-chained commands.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from devterm.constants import DEFAULT_MAX_BATCH_SIZE
from devterm.core.commands.tokenizer import split_batch
from devterm.core.common.exceptions import BatchLimitExceededError
from devterm.core.common.logging_utils import (
    AUDIT_LOGGER_NAME,
    LogContext,
    get_logger,
    truncate_command,
)
from devterm.core.domain.batch import BatchOutcome, BatchResult
from devterm.core.domain.command_context import ExecutionContext
from devterm.core.domain.responses import CommandResponse

logger = logging.getLogger(__name__)
audit_logger = get_logger(AUDIT_LOGGER_NAME)

CommandRunner = Callable[[str, ExecutionContext], Awaitable[CommandResponse]]


class BatchExecutor:
    """Runs the commands of a batch in order and stops at the first error.

    Each command goes through the full single-command pipeline with a batch
    context, which disables wizards so missing arguments are plain errors.
    """

    def __init__(self, runner: CommandRunner, max_batch_size: int = DEFAULT_MAX_BATCH_SIZE):
        self._runner = runner
        self.max_batch_size = max_batch_size

    async def run_batch(self, text: str, context: ExecutionContext) -> BatchOutcome:
        """
        Execute every command chained in ``text``.

        Returns:
            The per-command results, how many commands completed and the raw
            text of the commands that never ran.

        Raises:
            BatchLimitExceededError: More than ``max_batch_size`` commands are
                chained; nothing is executed.
        """
        commands = split_batch(text)
        if len(commands) > self.max_batch_size:
            raise BatchLimitExceededError(len(commands), self.max_batch_size)

        batch_context = context.for_batch()
        outcome = BatchOutcome(total_count=len(commands))

        for index, raw in enumerate(commands):
            with LogContext(
                audit_logger,
                conversation_id=context.conversation_id,
                batch_position=index + 1,
                batch_total=len(commands),
            ) as log:
                response = await self._runner(raw, batch_context)
                log.info(
                    "batch_command_executed",
                    command=truncate_command(raw),
                    response_type=response.type.value,
                )

            result = BatchResult.from_response(raw, response)
            outcome.results.append(result)
            if result.is_error:
                outcome.unexecuted = list(commands[index + 1 :])
                logger.info(
                    "Batch stopped at command %d of %d; %d not executed",
                    index + 1,
                    len(commands),
                    len(outcome.unexecuted),
                )
                break
            outcome.executed_count += 1

        return outcome
