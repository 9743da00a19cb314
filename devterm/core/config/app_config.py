from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import ConfigDict, Field, ValidationError, field_validator

from devterm.constants import (
    DEFAULT_COMMAND_PREFIX,
    DEFAULT_MAX_BATCH_SIZE,
    DEFAULT_MAX_COMMAND_LENGTH,
    DEFAULT_SUGGESTION_LIMIT,
    DEFAULT_WIZARD_CANCEL_KEYWORDS,
)
from devterm.core.common.exceptions import ConfigurationError
from devterm.core.common.logging_utils import LogFormat
from devterm.core.interfaces.model_bases import DomainModel

logger = logging.getLogger(__name__)

ENV_PREFIX = "DEVTERM_"


def _env_to_bool(name: str, default: bool, env: Mapping[str, str]) -> bool:
    """Return an environment variable parsed as a boolean flag."""
    value = env.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_to_int(name: str, default: int, env: Mapping[str, str]) -> int:
    """Return an environment variable parsed as an integer."""
    value = env.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-integer value for %s: %r", name, value)
        return default


def _env_to_list(name: str, default: tuple[str, ...], env: Mapping[str, str]) -> tuple[str, ...]:
    """Return a comma-separated environment variable as a tuple of strings."""
    value = env.get(name)
    if value is None:
        return default
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items or default


class LogLevel(str, Enum):
    """Log levels for configuration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(DomainModel):
    """Logging configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.PLAIN
    log_file: str | None = None


class EngineConfig(DomainModel):
    """Complete command engine configuration."""

    model_config = ConfigDict(frozen=True)

    command_prefix: str = DEFAULT_COMMAND_PREFIX
    max_batch_size: int = Field(default=DEFAULT_MAX_BATCH_SIZE, ge=1)
    max_command_length: int = Field(default=DEFAULT_MAX_COMMAND_LENGTH, ge=1)
    wizard_cancel_keywords: tuple[str, ...] = DEFAULT_WIZARD_CANCEL_KEYWORDS
    strict_ambiguity: bool = False
    suggestion_limit: int = Field(default=DEFAULT_SUGGESTION_LIMIT, ge=1)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("command_prefix")
    @classmethod
    def _validate_prefix(cls, value: str) -> str:
        if not value or any(ch.isspace() for ch in value):
            raise ValueError("Command prefix must be non-empty and contain no whitespace.")
        return value

    @field_validator("wizard_cancel_keywords")
    @classmethod
    def _normalize_keywords(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        keywords = tuple(keyword.strip().lower() for keyword in value if keyword.strip())
        if not keywords:
            raise ValueError("At least one wizard cancel keyword is required.")
        return keywords

    def is_cancel_keyword(self, text: str) -> bool:
        return text.strip().lower() in self.wizard_cancel_keywords

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EngineConfig:
        """Build a configuration from a plain mapping, raising ``ConfigurationError``."""
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise ConfigurationError(
                "Invalid engine configuration", {"errors": exc.errors()}
            ) from exc

    @classmethod
    def from_env(
        cls, env: Mapping[str, str] | None = None, base: EngineConfig | None = None
    ) -> EngineConfig:
        """Build a configuration from ``DEVTERM_*`` environment variables.

        Args:
            env: Environment mapping, ``os.environ`` by default
            base: Values used where no variable is set
        """
        env = os.environ if env is None else env
        base = base or cls()
        data: dict[str, Any] = {
            "command_prefix": env.get(f"{ENV_PREFIX}COMMAND_PREFIX", base.command_prefix),
            "max_batch_size": _env_to_int(
                f"{ENV_PREFIX}MAX_BATCH_SIZE", base.max_batch_size, env
            ),
            "max_command_length": _env_to_int(
                f"{ENV_PREFIX}MAX_COMMAND_LENGTH", base.max_command_length, env
            ),
            "wizard_cancel_keywords": _env_to_list(
                f"{ENV_PREFIX}WIZARD_CANCEL_KEYWORDS", base.wizard_cancel_keywords, env
            ),
            "strict_ambiguity": _env_to_bool(
                f"{ENV_PREFIX}STRICT_AMBIGUITY", base.strict_ambiguity, env
            ),
            "suggestion_limit": _env_to_int(
                f"{ENV_PREFIX}SUGGESTION_LIMIT", base.suggestion_limit, env
            ),
            "logging": {
                "level": env.get(f"{ENV_PREFIX}LOG_LEVEL", base.logging.level.value).upper(),
                "format": env.get(f"{ENV_PREFIX}LOG_FORMAT", base.logging.format.value).lower(),
                "log_file": env.get(f"{ENV_PREFIX}LOG_FILE", base.logging.log_file),
            },
        }
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str | Path) -> EngineConfig:
        """Load a configuration from a YAML file."""
        config_path = Path(path)
        try:
            with config_path.open("r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except FileNotFoundError as exc:
            raise ConfigurationError(
                f"Configuration file not found: {config_path}"
            ) from exc
        except yaml.YAMLError as exc:
            raise ConfigurationError(
                f"Configuration file is not valid YAML: {config_path}",
                {"error": str(exc)},
            ) from exc
        if not isinstance(raw, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping: {config_path}"
            )
        return cls.from_dict(raw)


def load_config(
    path: str | Path | None = None, env: Mapping[str, str] | None = None
) -> EngineConfig:
    """Load the engine configuration: YAML file first, environment on top."""
    base = EngineConfig.from_file(path) if path else EngineConfig()
    config = EngineConfig.from_env(env, base=base)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Loaded engine configuration: %s", config.model_dump())
    return config
