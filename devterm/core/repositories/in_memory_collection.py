from __future__ import annotations

import uuid
from collections.abc import Iterable

from devterm.core.domain.entities import CollectionItem
from devterm.core.interfaces.collection_lookup_interface import ICollectionLookup


class InMemoryCollectionLookup(ICollectionLookup):
    """In-memory implementation of a collection lookup.

    Items are kept per scope in insertion order, which is the natural order
    used for ordinals and fuzzy matches. It is suitable for development and
    testing.
    """

    def __init__(self, kind: str, items: Iterable[CollectionItem] | None = None) -> None:
        self._kind = kind
        self._items: dict[str | None, list[CollectionItem]] = {}
        for item in items or ():
            self.add(item)

    @property
    def kind(self) -> str:
        return self._kind

    def add(self, item: CollectionItem, scope: str | None = None) -> CollectionItem:
        """Append an item to the scope's collection."""
        self._items.setdefault(scope, []).append(item)
        return item

    def create(self, text: str, scope: str | None = None, **attributes: object) -> CollectionItem:
        """Create an item with a fresh UUID and append it."""
        item = CollectionItem(
            id=str(uuid.uuid4()), text=text, kind=self._kind, attributes=dict(attributes)
        )
        return self.add(item, scope)

    def remove(self, identifier: str, scope: str | None = None) -> bool:
        items = self._items.get(scope, [])
        for i, item in enumerate(items):
            if item.id == identifier:
                del items[i]
                return True
        return False

    def _view(self, scope: str | None, excluded_ids: frozenset[str]) -> list[CollectionItem]:
        return [item for item in self._items.get(scope, []) if item.id not in excluded_ids]

    async def find_by_id(
        self,
        identifier: str,
        scope: str | None = None,
        excluded_ids: frozenset[str] = frozenset(),
    ) -> CollectionItem | None:
        wanted = identifier.lower()
        for item in self._view(scope, excluded_ids):
            if item.id.lower() == wanted:
                return item
        return None

    async def find_by_ordinal(
        self,
        index: int,
        scope: str | None = None,
        excluded_ids: frozenset[str] = frozenset(),
    ) -> CollectionItem | None:
        view = self._view(scope, excluded_ids)
        if 1 <= index <= len(view):
            return view[index - 1]
        return None

    async def find_by_text_match(
        self,
        text: str,
        scope: str | None = None,
        excluded_ids: frozenset[str] = frozenset(),
    ) -> list[CollectionItem]:
        needle = text.lower()
        return [item for item in self._view(scope, excluded_ids) if needle in item.text.lower()]

    async def list_items(
        self,
        scope: str | None = None,
        excluded_ids: frozenset[str] = frozenset(),
    ) -> list[CollectionItem]:
        return self._view(scope, excluded_ids)
