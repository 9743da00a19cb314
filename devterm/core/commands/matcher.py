"""
Maps the leading positional tokens of a command to a ``CommandSpec``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from devterm.core.commands.catalog import CommandCatalog
from devterm.core.common.exceptions import UnknownCommandError
from devterm.core.domain.command_spec import CommandSpec
from devterm.core.domain.tokens import Token

logger = logging.getLogger(__name__)


class CommandMatcher:
    """Matches command words against the catalog.

    Canonical names are tried before aliases and two-word keys before
    one-word keys, so ``/view todos`` never falls through to the ``view``
    alias of something else.
    """

    def __init__(self, catalog: CommandCatalog) -> None:
        self._catalog = catalog

    @property
    def catalog(self) -> CommandCatalog:
        return self._catalog

    def match(self, tokens: Sequence[Token]) -> tuple[CommandSpec, list[Token]]:
        """
        Find the command named by the first one or two tokens.

        Args:
            tokens: Positional tokens of the command (mention and flags removed).

        Returns:
            The matched spec and the tokens following the command words.

        Raises:
            UnknownCommandError: If neither a name nor an alias matches.
        """
        if not tokens:
            raise UnknownCommandError("(empty)")

        words = [token.value for token in tokens]
        two_words = " ".join(words[:2]) if len(words) >= 2 else None
        one_word = words[0]

        candidates = (
            (two_words, self._catalog.get, 2),
            (one_word, self._catalog.get, 1),
            (two_words, self._catalog.get_by_alias, 2),
            (one_word, self._catalog.get_by_alias, 1),
        )
        for key, lookup, consumed in candidates:
            if key is None:
                continue
            spec = lookup(key)
            if spec is not None:
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug("Matched '%s' to command '%s'", key, spec.name)
                return spec, list(tokens[consumed:])

        suggestions: list[str] = []
        for key in (two_words, one_word):
            if key is None:
                continue
            for similar in self._catalog.similar(key):
                if similar not in suggestions:
                    suggestions.append(similar)
        suggestions.append("/help")
        raise UnknownCommandError(f"/{one_word}", suggestions=suggestions)
