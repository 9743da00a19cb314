from __future__ import annotations

import logging
from unittest.mock import MagicMock

from devterm.core.common.logging_utils import (
    MAX_LOGGED_COMMAND_LENGTH,
    LogContext,
    LogFormat,
    configure_logging,
    truncate_command,
)
from devterm.core.config.app_config import LoggingConfig, LogLevel


def test_truncate_command() -> None:
    assert truncate_command("/help") == "/help"

    long_command = "/add todo " + "x" * 200
    truncated = truncate_command(long_command)

    assert len(truncated) == MAX_LOGGED_COMMAND_LENGTH + 3
    assert truncated.endswith("...")


def test_log_context_binds_fields() -> None:
    logger = MagicMock()
    context = LogContext(logger, conversation_id="c1", user_id="u1")

    with context as bound:
        assert bound is logger.bind.return_value
        assert context.bound_logger is bound

    logger.bind.assert_called_once_with(conversation_id="c1", user_id="u1")
    assert context.bound_logger is None


def test_configure_logging_sets_root_level(tmp_path) -> None:  # type: ignore[no-untyped-def]
    log_file = tmp_path / "devterm.log"

    configure_logging(
        LoggingConfig(level=LogLevel.WARNING, format=LogFormat.JSON, log_file=str(log_file))
    )
    logging.getLogger("devterm.test").warning("written to file")

    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert any(isinstance(h, logging.FileHandler) for h in root.handlers)
    for handler in root.handlers:
        handler.flush()
    assert "written to file" in log_file.read_text(encoding="utf-8")

    configure_logging(LoggingConfig())
