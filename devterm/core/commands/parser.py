"""
Parses a single raw command into a ``ParsedCommand``.
"""

from __future__ import annotations

import logging

from devterm.constants import DEFAULT_COMMAND_PREFIX, DEFAULT_MAX_COMMAND_LENGTH
from devterm.core.commands.extractor import extract
from devterm.core.commands.matcher import CommandMatcher
from devterm.core.commands.tokenizer import tokenize
from devterm.core.common.exceptions import CommandEngineError, InvalidCommandFormatError
from devterm.core.domain.commands import ParsedCommand

logger = logging.getLogger(__name__)


class CommandParser:
    """Runs the format guard, tokenizer, extractor and matcher for one command."""

    def __init__(
        self,
        matcher: CommandMatcher,
        command_prefix: str = DEFAULT_COMMAND_PREFIX,
        max_command_length: int = DEFAULT_MAX_COMMAND_LENGTH,
    ):
        """Initialize the parser with the desired command prefix."""
        self._matcher = matcher
        self._command_prefix: str = ""
        self.command_prefix = command_prefix
        self.max_command_length = max_command_length

    @property
    def command_prefix(self) -> str:
        """Return the current command prefix."""
        return self._command_prefix

    @command_prefix.setter
    def command_prefix(self, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError("Command prefix must be a string.")
        if value == "":
            raise ValueError("Command prefix must not be empty.")
        self._command_prefix = value

    def is_command(self, text: str) -> bool:
        return text.strip().startswith(self._command_prefix)

    def check_format(self, text: str) -> str:
        """
        Validate the overall shape of a raw command.

        Returns:
            The command body with surrounding whitespace and the prefix removed.

        Raises:
            InvalidCommandFormatError: If the prefix is missing, the command is
                empty or longer than ``max_command_length``.
        """
        stripped = text.strip()
        if not stripped.startswith(self._command_prefix):
            raise InvalidCommandFormatError(
                f"Commands must start with {self._command_prefix}"
            )
        if len(stripped) > self.max_command_length:
            raise InvalidCommandFormatError(
                f"Command is too long ({len(stripped)} characters, "
                f"maximum {self.max_command_length})",
                {"length": len(stripped), "limit": self.max_command_length},
            )
        body = stripped[len(self._command_prefix) :].strip()
        if not body:
            raise InvalidCommandFormatError("Empty command")
        return body

    def parse(self, text: str) -> ParsedCommand:
        """
        Parse one raw command.

        Args:
            text: A single command (no ``&&`` chaining).

        Returns:
            The parsed command.

        Raises:
            CommandEngineError: Any format, tokenizer, flag or matching error.
        """
        body = self.check_format(text)
        tokens = tokenize(body)
        positional, mention, flags = extract(tokens)
        spec, remaining = self._matcher.match(positional)

        parsed = ParsedCommand(
            name=spec.name,
            verb=spec.verb,
            noun=spec.noun,
            positional_args=tuple(token.value for token in remaining),
            flags=flags,
            project_mention=mention,
            raw=text.strip(),
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Parsed command '%s' args=%s flags=%s mention=%s",
                parsed.name,
                parsed.positional_args,
                dict(parsed.flags),
                parsed.project_mention,
            )
        return parsed

    def validate_syntax(self, text: str) -> list[str]:
        """Return the syntax errors of ``text`` without executing anything."""
        try:
            self.parse(text)
        except CommandEngineError as e:
            return [e.message]
        return []
