"""
Common exception classes for the devterm command engine.

Every failure the engine can produce is represented by a subclass of
``CommandEngineError`` so the command service can convert it into an
``error``-typed response at the command boundary.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


class CommandEngineError(Exception):
    """Base exception class for all command engine errors."""

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        *,
        status_code: int | None = None,
        suggestions: Iterable[str] | None = None,
        **kwargs: Any,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error details
            status_code: Optional HTTP status code hint for transport adapters
            suggestions: Optional follow-up commands to show the user
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.status_code = status_code or 400
        self.suggestions: list[str] = list(suggestions or [])
        for key, value in (kwargs or {}).items():
            setattr(self, key, value)

    def to_dict(self) -> dict:
        error_dict = {
            "message": self.message,
            "type": self.__class__.__name__,
            "details": self.details,
        }
        if self.suggestions:
            error_dict["suggestions"] = list(self.suggestions)
        return {"error": error_dict}


class InvalidCommandFormatError(CommandEngineError):
    """Raised when raw input is not shaped like a command at all."""

    def __init__(
        self, message: str = "Invalid command format", details: dict | None = None, **kwargs
    ):
        kwargs.setdefault("suggestions", ["/help"])
        super().__init__(message, details, **kwargs)


class UnterminatedQuoteError(CommandEngineError):
    """Raised when a quote is opened and never closed."""

    def __init__(self, quote_char: str, position: int, **kwargs):
        super().__init__(
            f"Unterminated {quote_char} quote starting at position {position}",
            {"quote": quote_char, "position": position},
            **kwargs,
        )
        self.quote_char = quote_char
        self.position = position


class InvalidFlagError(CommandEngineError):
    """Raised when a ``--flag`` token has a malformed key."""

    def __init__(self, token: str, **kwargs):
        super().__init__(
            f"Invalid flag '{token}': flag names may only contain letters, digits and underscores",
            {"token": token},
            **kwargs,
        )
        self.token = token


class UnknownCommandError(CommandEngineError):
    """Raised when no registered command matches the input."""

    def __init__(self, command: str, **kwargs):
        kwargs.setdefault("suggestions", ["/help"])
        super().__init__(
            f"Unknown command: {command}. Type /help for available commands.",
            {"command": command},
            status_code=404,
            **kwargs,
        )
        self.command = command


class MissingFlagError(CommandEngineError):
    """Raised when a required flag is absent."""

    def __init__(self, flag_name: str, **kwargs):
        super().__init__(
            f"Missing required flag --{flag_name}", {"flag": flag_name}, **kwargs
        )
        self.flag_name = flag_name


class InvalidEnumValueError(CommandEngineError):
    """Raised when a flag value is not one of the command's allowed values."""

    def __init__(
        self, flag_name: str, provided_value: str, allowed_values: Iterable[str], **kwargs
    ):
        allowed = tuple(allowed_values)
        super().__init__(
            f"Invalid value '{provided_value}' for --{flag_name}. "
            f"Must be one of: {', '.join(allowed)}",
            {"flag": flag_name, "value": provided_value, "allowed": list(allowed)},
            **kwargs,
        )
        self.flag_name = flag_name
        self.provided_value = provided_value
        self.allowed_values = allowed


class ArityError(CommandEngineError):
    """Raised when a command receives too few or too many positional arguments."""

    def __init__(self, command: str, provided: int, syntax: str = "", **kwargs):
        message = f"Wrong number of arguments for /{command} (got {provided})"
        if syntax:
            message = f"{message}. Usage: {syntax}"
        super().__init__(message, {"command": command, "provided": provided}, **kwargs)
        self.command = command
        self.provided = provided


class EntityNotFoundError(CommandEngineError):
    """Raised when a reference resolves to nothing in any tier."""

    def __init__(self, reference: str, kind: str | None = None, **kwargs):
        what = kind or "item"
        super().__init__(
            f'No {what} found matching "{reference}"',
            {"reference": reference, "kind": kind},
            status_code=404,
            **kwargs,
        )
        self.reference = reference
        self.kind = kind


class AmbiguousMatchError(CommandEngineError):
    """Raised when strict ambiguity handling rejects multiple fuzzy candidates."""

    def __init__(self, reference: str, candidates: Iterable[str], **kwargs):
        candidate_ids = list(candidates)
        super().__init__(
            f'"{reference}" matches {len(candidate_ids)} items; be more specific',
            {"reference": reference, "candidates": candidate_ids},
            status_code=409,
            **kwargs,
        )
        self.reference = reference
        self.candidates = candidate_ids


class ProjectNotFoundError(CommandEngineError):
    """Raised when an ``@mention`` names no accessible project."""

    def __init__(self, mention: str, **kwargs):
        super().__init__(
            f'Project "@{mention}" not found', {"mention": mention}, status_code=404, **kwargs
        )
        self.mention = mention


class ProjectRequiredError(CommandEngineError):
    """Raised when a project-scoped command has neither a mention nor a current project."""

    def __init__(
        self,
        message: str = "Please specify a project using @projectname",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)


class BatchLimitExceededError(CommandEngineError):
    """Raised when a batch chains more commands than allowed."""

    def __init__(self, count: int, limit: int, **kwargs):
        super().__init__(
            f"Too many chained commands: {count} (maximum {limit})",
            {"count": count, "limit": limit},
            status_code=413,
            **kwargs,
        )
        self.count = count
        self.limit = limit


class WizardError(CommandEngineError):
    """Raised when a wizard session cannot be advanced."""

    def __init__(self, message: str = "Wizard error", details: dict | None = None, **kwargs):
        super().__init__(message, details, **kwargs)


class HandlerError(CommandEngineError):
    """Raised by command handlers for domain failures."""

    def __init__(
        self, message: str = "Command failed", details: dict | None = None, **kwargs
    ):
        kwargs.setdefault("status_code", 422)
        super().__init__(message, details, **kwargs)


class PermissionDeniedError(HandlerError):
    """Raised by handlers when the caller may not perform the operation."""

    def __init__(
        self, message: str = "Permission denied", details: dict | None = None, **kwargs
    ):
        super().__init__(message, details, status_code=403, **kwargs)


class ConfigurationError(CommandEngineError):
    """Raised when there's a configuration issue."""

    def __init__(
        self,
        message: str = "Configuration error",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, status_code=500, **kwargs)
