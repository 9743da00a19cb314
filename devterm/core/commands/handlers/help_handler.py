from __future__ import annotations

import logging

from devterm.core.commands.catalog import CommandCatalog
from devterm.core.domain.commands import ValidatedCommand
from devterm.core.domain.responses import CommandResponse

logger = logging.getLogger(__name__)


class HelpHandler:
    """Built-in ``/help`` handler listing the catalog or describing one command."""

    def __init__(self, catalog: CommandCatalog) -> None:
        self._catalog = catalog

    async def __call__(self, command: ValidatedCommand) -> CommandResponse:
        topic = str(command.payload.get("topic") or "").strip().lstrip("/")
        if topic:
            return self._describe(topic)
        return self._overview()

    def _overview(self) -> CommandResponse:
        grouped: dict[str, list[dict[str, object]]] = {}
        for spec in self._catalog.all():
            grouped.setdefault(spec.category.value, []).append(spec.describe())

        lines = ["Available commands:"]
        for category, entries in grouped.items():
            lines.append(f"{category}:")
            lines.extend(f"  {entry['label']} - {entry['description']}" for entry in entries)
        return CommandResponse.info("\n".join(lines), data={"grouped": grouped})

    def _describe(self, topic: str) -> CommandResponse:
        spec = self._catalog.find(topic)
        if spec is None:
            return CommandResponse.error(
                f"Unknown command: /{topic}",
                suggestions=[*self._catalog.similar(topic), "/help"],
            )

        parts = [f"/{spec.name} - {spec.description}", f"Usage: {spec.syntax or '/' + spec.name}"]
        if spec.aliases:
            parts.append("Aliases: " + ", ".join(f"/{alias}" for alias in sorted(spec.aliases)))
        if spec.examples:
            parts.append("Examples: " + ", ".join(spec.examples))
        return CommandResponse.info("\n".join(parts), data=spec.describe())
