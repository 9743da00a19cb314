from __future__ import annotations

from pathlib import Path

import pytest

from devterm.core.common.exceptions import ConfigurationError
from devterm.core.common.logging_utils import LogFormat
from devterm.core.config.app_config import EngineConfig, LogLevel, load_config


def test_defaults() -> None:
    config = EngineConfig()

    assert config.command_prefix == "/"
    assert config.max_batch_size == 10
    assert config.max_command_length == 500
    assert config.strict_ambiguity is False
    assert config.logging.level == LogLevel.INFO
    assert config.is_cancel_keyword("  CANCEL ")


def test_cancel_keywords_are_normalized() -> None:
    config = EngineConfig(wizard_cancel_keywords=(" Stop ", "", "QUIT"))

    assert config.wizard_cancel_keywords == ("stop", "quit")
    assert config.is_cancel_keyword("quit")
    assert not config.is_cancel_keyword("cancel")


@pytest.mark.parametrize(
    "data",
    [
        {"max_batch_size": 0},
        {"command_prefix": "/ "},
        {"wizard_cancel_keywords": ["  "]},
        {"logging": {"level": "LOUD"}},
    ],
)
def test_invalid_values_raise_configuration_error(data: dict) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        EngineConfig.from_dict(data)

    assert exc_info.value.details["errors"]


def test_from_env_overrides_base() -> None:
    env = {
        "DEVTERM_MAX_BATCH_SIZE": "3",
        "DEVTERM_STRICT_AMBIGUITY": "yes",
        "DEVTERM_WIZARD_CANCEL_KEYWORDS": "abort, stop",
        "DEVTERM_LOG_LEVEL": "debug",
        "DEVTERM_LOG_FORMAT": "JSON",
    }

    config = EngineConfig.from_env(env)

    assert config.max_batch_size == 3
    assert config.strict_ambiguity is True
    assert config.wizard_cancel_keywords == ("abort", "stop")
    assert config.logging.level == LogLevel.DEBUG
    assert config.logging.format == LogFormat.JSON


def test_from_env_ignores_non_integer_values() -> None:
    config = EngineConfig.from_env({"DEVTERM_MAX_BATCH_SIZE": "many"})

    assert config.max_batch_size == 10


def test_from_file_reads_yaml(tmp_path: Path) -> None:
    path = tmp_path / "devterm.yaml"
    path.write_text(
        "max_batch_size: 5\nstrict_ambiguity: true\nlogging:\n  level: WARNING\n",
        encoding="utf-8",
    )

    config = EngineConfig.from_file(path)

    assert config.max_batch_size == 5
    assert config.strict_ambiguity is True
    assert config.logging.level == LogLevel.WARNING


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("- just\n- a list\n", "must contain a mapping"),
        ("max_batch_size: [1\n", "not valid YAML"),
    ],
)
def test_from_file_rejects_bad_content(tmp_path: Path, content: str, message: str) -> None:
    path = tmp_path / "devterm.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError, match=message):
        EngineConfig.from_file(path)


def test_from_file_missing(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        EngineConfig.from_file(tmp_path / "missing.yaml")


def test_load_config_applies_env_over_file(tmp_path: Path) -> None:
    path = tmp_path / "devterm.yaml"
    path.write_text("max_batch_size: 5\nsuggestion_limit: 4\n", encoding="utf-8")

    config = load_config(path, env={"DEVTERM_MAX_BATCH_SIZE": "7"})

    assert config.max_batch_size == 7
    assert config.suggestion_limit == 4
