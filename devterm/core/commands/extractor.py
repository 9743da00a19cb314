"""
Extracts ``@project`` mentions and ``--key=value`` flags from a token stream.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from devterm.constants import FLAG_PREFIX, MENTION_PREFIX
from devterm.core.common.exceptions import InvalidFlagError
from devterm.core.domain.commands import FlagValue
from devterm.core.domain.tokens import Token

FLAG_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")
_UNESCAPED_EQUALS = re.compile(r"(?<!\\)=")


def parse_flag(token: Token) -> tuple[str, FlagValue]:
    """Split a ``--key[=value]`` token into its key and value.

    The split happens at the first ``=`` that is not preceded by a
    backslash. A flag without ``=`` is boolean ``True``.

    Raises:
        InvalidFlagError: If the key is empty or not alphanumeric.
    """
    body = token.value[len(FLAG_PREFIX) :]
    match = _UNESCAPED_EQUALS.search(body)
    value: FlagValue
    if match is None:
        key, value = body, True
    else:
        key = body[: match.start()]
        value = body[match.end() :].replace("\\=", "=")
    if not FLAG_KEY_PATTERN.match(key):
        raise InvalidFlagError(token.value)
    return key, value


def extract(
    tokens: Sequence[Token],
) -> tuple[list[Token], str | None, dict[str, FlagValue]]:
    """
    Separate mentions and flags from positional tokens.

    A mention starts at an unquoted token beginning with ``@`` and joins the
    following tokens with single spaces until a flag token or the end of
    input, so multi-word project names need no quoting. Flags are removed
    from the positional stream wherever they appear; a repeated key keeps
    the last value.

    Args:
        tokens: Tokens of a single command.

    Returns:
        A tuple of (remaining positional tokens, project mention, flags).
    """
    remaining: list[Token] = []
    flags: dict[str, FlagValue] = {}
    mention_parts: list[str] | None = None
    in_mention = False

    for token in tokens:
        if token.is_flag:
            key, value = parse_flag(token)
            flags[key] = value
            in_mention = False
            continue
        if in_mention and mention_parts is not None:
            mention_parts.append(token.value)
            continue
        if mention_parts is None and token.is_mention:
            mention_parts = [token.value[len(MENTION_PREFIX) :]]
            in_mention = True
            continue
        remaining.append(token)

    mention: str | None = None
    if mention_parts is not None:
        mention = " ".join(part for part in mention_parts if part).strip() or None
    return remaining, mention, flags
