"""
Core data structures produced by the tokenizer.
"""

from __future__ import annotations

from dataclasses import dataclass

from devterm.constants import FLAG_PREFIX, MENTION_PREFIX
from devterm.core.interfaces.model_bases import InternalDTO


@dataclass(frozen=True)
class Token(InternalDTO):
    """
    A single whitespace-delimited unit of command input.

    Attributes:
        value: The token text with quotes removed and escapes applied.
        was_quoted: True if any part of the token was inside quotes.
        starts_quoted: True if the first character of the token was quoted.
            Only tokens with an unquoted start can be mentions or flags.
    """

    value: str
    was_quoted: bool = False
    starts_quoted: bool = False

    @property
    def is_flag(self) -> bool:
        return not self.starts_quoted and self.value.startswith(FLAG_PREFIX)

    @property
    def is_mention(self) -> bool:
        return not self.starts_quoted and self.value.startswith(MENTION_PREFIX)
