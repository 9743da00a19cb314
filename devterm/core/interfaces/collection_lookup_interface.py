"""Interface for read-only lookups into a collection of project items."""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod

from devterm.core.domain.entities import CollectionItem


class ICollectionLookup(ABC):
    """Read-only access to one kind of item, supplied by the persistence layer.

    Every method takes a ``scope`` (normally a project id) and returns items
    in the collection's natural order, which must be the order the matching
    listing command displays. ``excluded_ids`` removes items from that view
    before ordinals are counted.
    """

    @property
    @abstractmethod
    def kind(self) -> str:
        """Entity kind served by this lookup (e.g. ``"todo"``)."""

    def is_identifier(self, reference: str) -> bool:
        """Return True if ``reference`` has the store's identifier format.

        The default accepts canonical hyphenated UUIDs.
        """
        if len(reference) != 36:
            return False
        try:
            return str(uuid.UUID(reference)) == reference.lower()
        except ValueError:
            return False

    @abstractmethod
    async def find_by_id(
        self,
        identifier: str,
        scope: str | None = None,
        excluded_ids: frozenset[str] = frozenset(),
    ) -> CollectionItem | None:
        """Return the item with ``identifier``, or None."""

    @abstractmethod
    async def find_by_ordinal(
        self,
        index: int,
        scope: str | None = None,
        excluded_ids: frozenset[str] = frozenset(),
    ) -> CollectionItem | None:
        """Return the item at 1-based ``index`` of the ordered view, or None."""

    @abstractmethod
    async def find_by_text_match(
        self,
        text: str,
        scope: str | None = None,
        excluded_ids: frozenset[str] = frozenset(),
    ) -> list[CollectionItem]:
        """Return items whose primary text contains ``text`` (case-insensitive)."""

    @abstractmethod
    async def list_items(
        self,
        scope: str | None = None,
        excluded_ids: frozenset[str] = frozenset(),
    ) -> list[CollectionItem]:
        """Return the ordered view of the collection."""
