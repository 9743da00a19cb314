"""
Resolution of free-text references to existing collection items.

A reference is tried against three tiers in a fixed order and the first
tier that produces a candidate wins:

1. identifier: the reference has the store's id format and names an item;
2. index: a positive integer, the 1-based position in the listing order;
3. fuzzy text: case-insensitive substring match on the item's primary text.

A reference that looks like an identifier but names nothing falls through to
the next tiers. A numeric reference out of range fails immediately rather
than being matched as text.
"""

from __future__ import annotations

import logging

from devterm.core.common.exceptions import AmbiguousMatchError, EntityNotFoundError
from devterm.core.domain.entities import (
    CollectionHandle,
    EntityReference,
    ResolutionStrategy,
    ResolvedEntity,
)

logger = logging.getLogger(__name__)


def _as_ordinal(text: str) -> int | None:
    # ASCII only: str.isdigit() also accepts superscripts that int() rejects.
    if text.isascii() and text.isdigit():
        value = int(text)
        if value > 0:
            return value
    return None


class EntityResolver:
    """Resolves ``EntityReference``s against a scoped collection."""

    def __init__(self, strict_ambiguity: bool = False) -> None:
        self.strict_ambiguity = strict_ambiguity

    async def resolve(
        self, reference: EntityReference | str, handle: CollectionHandle
    ) -> ResolvedEntity:
        """
        Resolve a reference to one item.

        Args:
            reference: The raw reference text or an ``EntityReference``.
            handle: The lookup, scope and excluded ids to resolve against.

        Returns:
            The resolved entity; ``ambiguous`` is set when the fuzzy tier
            matched several items.

        Raises:
            EntityNotFoundError: No tier produced a candidate.
            AmbiguousMatchError: Several fuzzy candidates and strict mode is on.
        """
        if isinstance(reference, str):
            reference = EntityReference(raw=reference)
        text = reference.normalized
        lookup = handle.lookup
        if not text:
            raise EntityNotFoundError(reference.raw, handle.kind)

        if lookup.is_identifier(text):
            item = await lookup.find_by_id(text, handle.scope, handle.excluded_ids)
            if item is not None:
                return ResolvedEntity(
                    reference=reference, strategy=ResolutionStrategy.UUID, item=item
                )

        ordinal = _as_ordinal(text)
        if ordinal is not None:
            item = await lookup.find_by_ordinal(ordinal, handle.scope, handle.excluded_ids)
            if item is None:
                raise EntityNotFoundError(text, handle.kind)
            return ResolvedEntity(
                reference=reference, strategy=ResolutionStrategy.INDEX, item=item
            )

        matches = await lookup.find_by_text_match(text, handle.scope, handle.excluded_ids)
        if not matches:
            raise EntityNotFoundError(text, handle.kind)

        candidates = tuple(item.id for item in matches)
        if len(matches) > 1:
            if self.strict_ambiguity:
                raise AmbiguousMatchError(text, candidates)
            logger.info(
                "Reference '%s' matched %d %s items, using the first",
                text,
                len(matches),
                handle.kind,
            )
        return ResolvedEntity(
            reference=reference,
            strategy=ResolutionStrategy.FUZZY_TEXT,
            item=matches[0],
            candidates=candidates,
        )
