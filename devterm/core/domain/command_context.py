from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from devterm.core.interfaces.collection_lookup_interface import ICollectionLookup


@dataclass(slots=True)
class ExecutionContext:
    """Typed context passed explicitly through the pipeline for one input.

    ``current_project_id`` is the caller's selected project; it is only used
    when the command carries no ``@mention``. ``collections`` maps an entity
    kind (``"todo"``, ``"project"``...) to the lookup used to resolve
    references of that kind.
    """

    conversation_id: str = "default"
    user_id: str | None = None
    current_project_id: str | None = None
    collections: Mapping[str, ICollectionLookup] = field(default_factory=dict)
    in_batch: bool = False

    def lookup_for(self, kind: str) -> ICollectionLookup | None:
        return self.collections.get(kind)

    def for_batch(self) -> ExecutionContext:
        return replace(self, in_batch=True)
