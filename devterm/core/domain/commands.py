"""
Parsed and validated command structures passed between pipeline stages.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from devterm.core.interfaces.model_bases import InternalDTO

if TYPE_CHECKING:
    from devterm.core.domain.command_context import ExecutionContext
    from devterm.core.domain.command_spec import CommandSpec
    from devterm.core.domain.entities import CollectionItem, ResolvedEntity

FlagValue = str | bool


@dataclass(frozen=True)
class ParsedCommand(InternalDTO):
    """
    A command after tokenizing, extraction and matching.

    Attributes:
        name: Canonical name of the matched command (e.g. ``add todo``).
        verb: First word of the canonical name.
        noun: Second word of the canonical name, if any.
        positional_args: Arguments left after the command words, in order.
        flags: ``--key=value`` flags; a flag without value maps to ``True``.
        project_mention: Text after ``@``, if a mention was present.
        raw: The raw command text this was parsed from.
    """

    name: str
    verb: str
    noun: str | None = None
    positional_args: tuple[str, ...] = ()
    flags: Mapping[str, FlagValue] = field(default_factory=dict)
    project_mention: str | None = None
    raw: str = ""

    def has_flag(self, key: str) -> bool:
        return key in self.flags

    def get_flag(self, key: str, default: FlagValue | None = None) -> FlagValue | None:
        return self.flags.get(key, default)

    @property
    def positional_text(self) -> str:
        return " ".join(self.positional_args)


@dataclass(frozen=True)
class ValidatedCommand(InternalDTO):
    """
    A command that passed schema validation and reference resolution.

    ``payload`` holds the flags plus the positional text bound to the
    command's positional field; this is what handlers read.
    """

    spec: CommandSpec
    parsed: ParsedCommand
    payload: Mapping[str, Any]
    context: ExecutionContext
    project: CollectionItem | None = None
    entity: ResolvedEntity | None = None

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def project_id(self) -> str | None:
        if self.project is not None:
            return self.project.id
        return self.context.current_project_id

    def with_resolution(
        self,
        *,
        project: CollectionItem | None = None,
        entity: ResolvedEntity | None = None,
    ) -> ValidatedCommand:
        return ValidatedCommand(
            spec=self.spec,
            parsed=self.parsed,
            payload=self.payload,
            context=self.context,
            project=project if project is not None else self.project,
            entity=entity if entity is not None else self.entity,
        )
