"""
Static command table entries.

A ``CommandSpec`` is immutable and loaded once when the catalog is built.
``StepSpec`` describes one prompt of the wizard that collects the command's
fields when it is invoked without arguments.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field, model_validator

from devterm.constants import CommandCategory, EntityKind
from devterm.core.domain.base import ValueObject


class StepKind(str, Enum):
    """How a wizard step is presented."""

    TEXT = "text"
    SELECT = "select"
    SELECTOR = "selector"


class StepSpec(ValueObject):
    """One field collected by a wizard."""

    key: str
    label: str
    kind: StepKind = StepKind.TEXT
    required: bool = True
    options: tuple[str, ...] = ()
    default: str | None = None
    placeholder: str | None = None

    def describe(self) -> dict[str, object]:
        """Serializable description sent to the client with a prompt."""
        description: dict[str, object] = {
            "id": self.key,
            "label": self.label,
            "type": self.kind.value,
            "required": self.required,
        }
        if self.options:
            description["options"] = list(self.options)
        if self.default is not None:
            description["value"] = self.default
        if self.placeholder:
            description["placeholder"] = self.placeholder
        return description


class CommandSpec(ValueObject):
    """A registered command.

    ``name`` is the canonical ``verb noun`` key (or a single word).
    ``required_flags`` keeps declaration order so the first missing flag is
    reported deterministically. ``arity`` is ``(min, max)`` with ``None``
    meaning unbounded. Positional arguments are joined with spaces and bound
    to ``positional_field``; if ``entity_kind`` is set that text is resolved
    as a reference to an existing item.
    """

    name: str
    description: str
    syntax: str = ""
    aliases: frozenset[str] = frozenset()
    required_flags: tuple[str, ...] = ()
    flag_enums: dict[str, tuple[str, ...]] = Field(default_factory=dict)
    arity: tuple[int, int | None] = (0, None)
    positional_field: str | None = None
    entity_kind: EntityKind | None = None
    requires_project: bool = False
    wizard_steps: tuple[StepSpec, ...] = ()
    selector: bool = False
    category: CommandCategory = CommandCategory.GENERAL
    examples: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _check_consistency(self) -> CommandSpec:
        minimum, maximum = self.arity
        if minimum < 0 or (maximum is not None and maximum < minimum):
            raise ValueError(f"Invalid arity {self.arity} for command '{self.name}'")
        if self.selector and self.entity_kind is None:
            raise ValueError(f"Selector command '{self.name}' needs an entity kind")
        return self

    @property
    def verb(self) -> str:
        return self.name.split(" ", 1)[0]

    @property
    def noun(self) -> str | None:
        parts = self.name.split(" ", 1)
        return parts[1] if len(parts) > 1 else None

    @property
    def has_wizard(self) -> bool:
        return bool(self.wizard_steps)

    def accepts_arg_count(self, count: int) -> bool:
        minimum, maximum = self.arity
        return count >= minimum and (maximum is None or count <= maximum)

    def describe(self) -> dict[str, object]:
        """Autocomplete/help entry for this command."""
        return {
            "value": f"/{self.name}",
            "label": self.syntax or f"/{self.name}",
            "description": self.description,
            "examples": list(self.examples),
            "category": self.category.value,
            "aliases": sorted(self.aliases),
        }
