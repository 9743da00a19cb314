"""Signature of a command handler."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from devterm.core.domain.commands import ValidatedCommand
    from devterm.core.domain.responses import CommandResponse

CommandHandler = Callable[["ValidatedCommand"], Awaitable["CommandResponse | dict[str, Any]"]]
