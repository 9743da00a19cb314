"""
Single-command pipeline stages shared by direct execution, batches and wizards.
"""

from __future__ import annotations

import logging

from devterm.core.commands.catalog import CommandCatalog
from devterm.core.commands.parser import CommandParser
from devterm.core.commands.validator import SchemaValidator
from devterm.core.common.exceptions import ConfigurationError, EntityNotFoundError
from devterm.core.domain.command_context import ExecutionContext
from devterm.core.domain.command_spec import CommandSpec
from devterm.core.domain.commands import ParsedCommand, ValidatedCommand
from devterm.core.domain.entities import CollectionHandle
from devterm.core.services.entity_resolver import EntityResolver
from devterm.core.services.project_resolver import ProjectResolver

logger = logging.getLogger(__name__)


class CommandPipeline:
    """Turns raw text into a ``ValidatedCommand`` ready for dispatch."""

    def __init__(
        self,
        catalog: CommandCatalog,
        parser: CommandParser,
        validator: SchemaValidator,
        projects: ProjectResolver,
        resolver: EntityResolver,
    ) -> None:
        self.catalog = catalog
        self.parser = parser
        self.validator = validator
        self.projects = projects
        self.resolver = resolver

    def parse(self, raw: str) -> tuple[CommandSpec, ParsedCommand]:
        parsed = self.parser.parse(raw)
        spec = self.catalog.get(parsed.name)
        if spec is None:
            raise ConfigurationError(f"Parsed command '{parsed.name}' is not in the catalog")
        return spec, parsed

    def needs_wizard(
        self, spec: CommandSpec, parsed: ParsedCommand, context: ExecutionContext
    ) -> bool:
        """True if the command should collect its fields interactively."""
        return (
            not context.in_batch
            and spec.has_wizard
            and not parsed.flags
            and self.validator.missing_arguments(spec, parsed)
        )

    def handle_for(
        self,
        spec: CommandSpec,
        context: ExecutionContext,
        scope: str | None,
        excluded_ids: frozenset[str] = frozenset(),
    ) -> CollectionHandle:
        """Bind the lookup for the command's entity kind to a scope."""
        if spec.entity_kind is None:
            raise ConfigurationError(f"Command '{spec.name}' does not reference items")
        lookup = context.lookup_for(spec.entity_kind.value)
        if lookup is None:
            raise ConfigurationError(
                f"No collection is configured for '{spec.entity_kind.value}' items"
            )
        return CollectionHandle(lookup=lookup, scope=scope, excluded_ids=excluded_ids)

    async def prepare(
        self,
        spec: CommandSpec,
        parsed: ParsedCommand,
        context: ExecutionContext,
        excluded_ids: frozenset[str] = frozenset(),
    ) -> ValidatedCommand:
        """
        Validate the command and resolve its project and item reference.

        Raises:
            CommandEngineError: Validation, project or reference errors.
        """
        validated = self.validator.validate(spec, parsed, context)
        project = await self.projects.resolve(spec, parsed.project_mention, context)
        validated = validated.with_resolution(project=project)

        if spec.entity_kind is not None and spec.positional_field:
            reference = validated.payload.get(spec.positional_field)
            if not isinstance(reference, str) or not reference.strip():
                raise EntityNotFoundError(str(reference), spec.entity_kind.value)
            handle = self.handle_for(spec, context, validated.project_id, excluded_ids)
            entity = await self.resolver.resolve(reference, handle)
            validated = validated.with_resolution(entity=entity)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "Resolved '%s' to %s via %s",
                    reference,
                    entity.resolved_id,
                    entity.strategy.value,
                )
        return validated
