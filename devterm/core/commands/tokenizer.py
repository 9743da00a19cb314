"""
Quote-aware tokenizer for command input.

Tokens are separated by unquoted whitespace. Single or double quotes group
text (whitespace and ``&&`` included) into one token and are not part of the
token value. Backslash escapes ``\\n``, ``\\\\``, ``\\"`` and ``\\'`` are
honored inside and outside quotes; any other backslash is kept literally.
"""

from __future__ import annotations

from devterm.constants import BATCH_SEPARATOR
from devterm.core.common.exceptions import UnterminatedQuoteError
from devterm.core.domain.tokens import Token

QUOTE_CHARS = ('"', "'")
ESCAPES = {"n": "\n", "\\": "\\", '"': '"', "'": "'"}


class _TokenBuffer:
    """Accumulates the characters of the token being scanned."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.chars: list[str] = []
        self.started = False
        self.was_quoted = False
        self.starts_quoted = False

    def start(self, quoted: bool) -> None:
        if not self.started:
            self.started = True
            self.starts_quoted = quoted

    def append(self, char: str, quoted: bool) -> None:
        self.start(quoted)
        self.chars.append(char)

    def flush_into(self, tokens: list[Token]) -> None:
        if self.started:
            tokens.append(
                Token(
                    value="".join(self.chars),
                    was_quoted=self.was_quoted,
                    starts_quoted=self.starts_quoted,
                )
            )
        self.reset()


def tokenize(text: str) -> list[Token]:
    """
    Split ``text`` into tokens.

    Args:
        text: Raw command text (a single command, not a batch).

    Returns:
        The tokens in input order.

    Raises:
        UnterminatedQuoteError: If a quote is opened and never closed.
    """
    tokens: list[Token] = []
    buffer = _TokenBuffer()
    quote: str | None = None
    quote_start = -1
    i = 0
    length = len(text)

    while i < length:
        char = text[i]

        if char == "\\":
            following = text[i + 1] if i + 1 < length else None
            if following is not None and following in ESCAPES:
                buffer.append(ESCAPES[following], quote is not None)
                i += 2
            else:
                buffer.append(char, quote is not None)
                i += 1
            continue

        if quote is not None:
            if char == quote:
                quote = None
            else:
                buffer.append(char, True)
            i += 1
            continue

        if char in QUOTE_CHARS:
            buffer.start(quoted=True)
            buffer.was_quoted = True
            quote = char
            quote_start = i
        elif char.isspace():
            buffer.flush_into(tokens)
        else:
            buffer.append(char, False)
        i += 1

    if quote is not None:
        raise UnterminatedQuoteError(quote, quote_start)

    buffer.flush_into(tokens)
    return tokens


def split_batch(text: str) -> list[str]:
    """
    Split input into raw commands on ``&&`` outside quotes.

    Segments are trimmed and empty segments are dropped. An unterminated
    quote swallows the rest of the input into the current segment; the
    tokenizer reports it when that segment is parsed.
    """
    segments: list[str] = []
    current: list[str] = []
    quote: str | None = None
    i = 0
    length = len(text)

    while i < length:
        char = text[i]
        if char == "\\" and i + 1 < length and text[i + 1] in ESCAPES:
            current.append(text[i : i + 2])
            i += 2
            continue
        if quote is not None:
            if char == quote:
                quote = None
        elif char in QUOTE_CHARS:
            quote = char
        elif text.startswith(BATCH_SEPARATOR, i):
            segments.append("".join(current))
            current = []
            i += len(BATCH_SEPARATOR)
            continue
        current.append(char)
        i += 1

    segments.append("".join(current))
    return [segment.strip() for segment in segments if segment.strip()]


