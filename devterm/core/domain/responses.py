"""
Response envelope returned for every command and every batch item.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field

from devterm.core.common.exceptions import CommandEngineError
from devterm.core.interfaces.model_bases import DomainModel


class ResponseType(str, Enum):
    """Response types for terminal commands."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"
    DATA = "data"
    PROMPT = "prompt"


class CommandResponse(DomainModel):
    """Structured response from command execution."""

    type: ResponseType
    message: str
    data: Any | None = None
    metadata: dict[str, Any] | None = None
    suggestions: list[str] = Field(default_factory=list)

    @property
    def is_error(self) -> bool:
        return self.type == ResponseType.ERROR

    @classmethod
    def success(cls, message: str, data: Any | None = None, **metadata: Any) -> CommandResponse:
        return cls(type=ResponseType.SUCCESS, message=message, data=data, metadata=metadata or None)

    @classmethod
    def error(
        cls,
        message: str,
        data: Any | None = None,
        suggestions: list[str] | None = None,
    ) -> CommandResponse:
        return cls(
            type=ResponseType.ERROR,
            message=message,
            data=data,
            suggestions=list(suggestions or []),
        )

    @classmethod
    def from_error(cls, error: CommandEngineError) -> CommandResponse:
        """Convert an engine error into an ``error`` response."""
        return cls.error(
            error.message,
            data=error.details or None,
            suggestions=error.suggestions or ["/help"],
        )

    @classmethod
    def prompt(cls, message: str, data: Any | None = None, **metadata: Any) -> CommandResponse:
        return cls(type=ResponseType.PROMPT, message=message, data=data, metadata=metadata or None)

    @classmethod
    def info(cls, message: str, data: Any | None = None) -> CommandResponse:
        return cls(type=ResponseType.INFO, message=message, data=data)

    def with_metadata(self, **metadata: Any) -> CommandResponse:
        """Return a copy with ``metadata`` merged over the existing metadata."""
        merged = dict(self.metadata or {})
        merged.update(metadata)
        return self.model_copy(update={"metadata": merged})

    def to_envelope(self) -> dict[str, Any]:
        """Serialize without the optional fields that are unset."""
        envelope: dict[str, Any] = {"type": self.type.value, "message": self.message}
        if self.data is not None:
            envelope["data"] = self.data
        if self.metadata:
            envelope["metadata"] = self.metadata
        if self.suggestions:
            envelope["suggestions"] = list(self.suggestions)
        return envelope
