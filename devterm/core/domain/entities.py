"""
Entity references and resolution outcomes.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import Field

from devterm.core.domain.base import ValueObject
from devterm.core.interfaces.model_bases import InternalDTO

if TYPE_CHECKING:
    from devterm.core.interfaces.collection_lookup_interface import ICollectionLookup


class CollectionItem(ValueObject):
    """An item returned by a collection lookup.

    ``text`` is the primary text field (title, content, name) used for
    fuzzy matching and for display in selector prompts.
    """

    id: str
    text: str
    kind: str = ""
    attributes: dict[str, Any] = Field(default_factory=dict)


class ResolutionStrategy(str, Enum):
    """Tier that produced a resolution."""

    UUID = "uuid"
    INDEX = "index"
    FUZZY_TEXT = "fuzzy_text"


class EntityReference(ValueObject):
    """A free-text or positional reference to an existing item."""

    raw: str

    @property
    def normalized(self) -> str:
        return self.raw.strip()


class ResolvedEntity(ValueObject):
    """Result of resolving an ``EntityReference``."""

    reference: EntityReference
    strategy: ResolutionStrategy
    item: CollectionItem
    candidates: tuple[str, ...] = ()

    @property
    def resolved_id(self) -> str:
        return self.item.id

    @property
    def ambiguous(self) -> bool:
        return len(self.candidates) > 1

    def to_metadata(self) -> dict[str, Any]:
        metadata: dict[str, Any] = {
            "resolvedId": self.resolved_id,
            "resolution": self.strategy.value,
        }
        if self.ambiguous:
            metadata["ambiguous"] = True
            metadata["candidates"] = list(self.candidates)
        return metadata


@dataclass(frozen=True)
class CollectionHandle(InternalDTO):
    """A lookup bound to a scope (usually a project id).

    ``excluded_ids`` hides items from the view; ordinals are counted after
    exclusion so that indices match what a selector prompt displayed.
    """

    lookup: ICollectionLookup
    scope: str | None = None
    excluded_ids: frozenset[str] = field(default_factory=frozenset)

    def excluding(self, ids: Iterable[str]) -> CollectionHandle:
        return CollectionHandle(
            lookup=self.lookup,
            scope=self.scope,
            excluded_ids=self.excluded_ids | frozenset(ids),
        )

    @property
    def kind(self) -> str:
        return self.lookup.kind
