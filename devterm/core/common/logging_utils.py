"""
Logging utilities.

Module code logs through ``logging.getLogger(__name__)``. The structured
command audit trail goes through structlog so that each executed command is
a single event with bound fields.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from devterm.core.config.app_config import LoggingConfig

AUDIT_LOGGER_NAME = "devterm.audit"
MAX_LOGGED_COMMAND_LENGTH = 100


class LogFormat(str, Enum):
    """Log format options."""

    JSON = "json"
    CONSOLE = "console"
    PLAIN = "plain"


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger.

    Args:
        name: Optional logger name

    Returns:
        A structured logger
    """
    return structlog.get_logger(name)  # type: ignore


def truncate_command(text: str, limit: int = MAX_LOGGED_COMMAND_LENGTH) -> str:
    """Shorten raw command text before it is written to logs."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def configure_logging(config: LoggingConfig) -> None:
    """Configure the stdlib root logger and structlog from a ``LoggingConfig``.

    Args:
        config: Logging section of the engine configuration
    """
    level = logging.getLevelName(config.level.value)
    log_format = "%(asctime)s [%(levelname)-8s] %(name)s:%(lineno)d %(message)s"

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file))
    for handler in handlers:
        handler.setFormatter(logging.Formatter(fmt=log_format))

    logging.basicConfig(level=level, handlers=handlers, force=True)

    renderer: Any
    if config.format == LogFormat.JSON:
        renderer = structlog.processors.JSONRenderer()
    elif config.format == LogFormat.CONSOLE:
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.KeyValueRenderer(key_order=["event"])

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


class LogContext:
    """Context manager for adding context to logs."""

    def __init__(self, logger: structlog.stdlib.BoundLogger, **context: Any):
        self.logger = logger
        self.context = context
        self.bound_logger: structlog.stdlib.BoundLogger | None = None

    def __enter__(self) -> structlog.stdlib.BoundLogger:
        self.bound_logger = self.logger.bind(**self.context)
        return self.bound_logger

    def __exit__(self, *args: Any) -> None:
        self.bound_logger = None
