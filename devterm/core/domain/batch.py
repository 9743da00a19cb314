"""
Batch execution results.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field

from devterm.core.domain.responses import CommandResponse, ResponseType
from devterm.core.interfaces.model_bases import DomainModel


class BatchResultType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


_RESPONSE_TO_BATCH_TYPE = {
    ResponseType.SUCCESS: BatchResultType.SUCCESS,
    ResponseType.DATA: BatchResultType.SUCCESS,
    ResponseType.ERROR: BatchResultType.ERROR,
    ResponseType.WARNING: BatchResultType.WARNING,
    ResponseType.INFO: BatchResultType.INFO,
    ResponseType.PROMPT: BatchResultType.INFO,
}


class BatchResult(DomainModel):
    """Outcome of one command inside a batch."""

    command: str
    type: BatchResultType
    message: str
    data: Any | None = None
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_response(cls, command: str, response: CommandResponse) -> BatchResult:
        return cls(
            command=command,
            type=_RESPONSE_TO_BATCH_TYPE[response.type],
            message=response.message,
            data=response.data,
            metadata=response.metadata,
        )

    @property
    def is_error(self) -> bool:
        return self.type == BatchResultType.ERROR


class BatchOutcome(DomainModel):
    """What ran, what failed and what was skipped in a batch."""

    results: list[BatchResult] = Field(default_factory=list)
    executed_count: int = 0
    total_count: int = 0
    unexecuted: list[str] = Field(default_factory=list)

    @property
    def failed(self) -> bool:
        return any(result.is_error for result in self.results)

    def to_envelope(self) -> dict[str, Any]:
        return {
            "results": [
                result.model_dump(mode="json", exclude_none=True) for result in self.results
            ],
            "executed": self.executed_count,
            "total": self.total_count,
            "unexecuted": list(self.unexecuted),
        }
