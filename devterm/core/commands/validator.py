"""
Schema validation of parsed commands against their ``CommandSpec``.
"""

from __future__ import annotations

import logging
from typing import Any

from devterm.core.common.exceptions import (
    ArityError,
    InvalidEnumValueError,
    MissingFlagError,
)
from devterm.core.domain.command_context import ExecutionContext
from devterm.core.domain.command_spec import CommandSpec
from devterm.core.domain.commands import ParsedCommand, ValidatedCommand

logger = logging.getLogger(__name__)


def _positional_count(spec: CommandSpec, parsed: ParsedCommand) -> int:
    count = len(parsed.positional_args)
    if count == 0 and spec.positional_field and parsed.has_flag(spec.positional_field):
        # The positional value was supplied as --<field>=...
        return 1
    return count


class SchemaValidator:
    """Checks required flags, enum values and positional arity."""

    def missing_arguments(self, spec: CommandSpec, parsed: ParsedCommand) -> bool:
        """True if required flags are absent or there are too few positional arguments."""
        if any(not parsed.has_flag(flag) for flag in spec.required_flags):
            return True
        return _positional_count(spec, parsed) < spec.arity[0]

    def validate(
        self, spec: CommandSpec, parsed: ParsedCommand, context: ExecutionContext
    ) -> ValidatedCommand:
        """
        Validate ``parsed`` and build the handler payload.

        Checks run in a fixed order so the reported error is deterministic:
        required flags in declaration order, then enum membership, then arity.

        Raises:
            MissingFlagError: A required flag is absent.
            InvalidEnumValueError: A flag value is not in its allowed set.
            ArityError: Too few or too many positional arguments.
        """
        for flag in spec.required_flags:
            if not parsed.has_flag(flag):
                raise MissingFlagError(flag, suggestions=[f"/help {spec.name}"])

        for flag, allowed in spec.flag_enums.items():
            if not parsed.has_flag(flag):
                continue
            value = parsed.get_flag(flag)
            text = "true" if value is True else str(value)
            if value is True or text not in allowed:
                raise InvalidEnumValueError(flag, text, allowed)

        count = _positional_count(spec, parsed)
        if not spec.accepts_arg_count(count):
            raise ArityError(
                spec.name, len(parsed.positional_args), spec.syntax,
                suggestions=[f"/help {spec.name}"],
            )

        payload: dict[str, Any] = dict(parsed.flags)
        if spec.positional_field and parsed.positional_args:
            payload[spec.positional_field] = parsed.positional_text

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Validated '%s' with payload keys %s", spec.name, sorted(payload))
        return ValidatedCommand(spec=spec, parsed=parsed, payload=payload, context=context)
