"""
Resolves the project a command operates on.
"""

from __future__ import annotations

import logging

from devterm.constants import EntityKind
from devterm.core.common.exceptions import ProjectNotFoundError, ProjectRequiredError
from devterm.core.domain.command_context import ExecutionContext
from devterm.core.domain.command_spec import CommandSpec
from devterm.core.domain.entities import CollectionItem

logger = logging.getLogger(__name__)


class ProjectResolver:
    """Maps an ``@mention`` to a project, else falls back to the context's current project.

    Mentions are matched by exact, case-insensitive name (or by id) among the
    projects visible to ``context.user_id``. There is no implicit global
    current project; the caller passes it in the ``ExecutionContext``.
    """

    async def resolve(
        self,
        spec: CommandSpec,
        mention: str | None,
        context: ExecutionContext,
    ) -> CollectionItem | None:
        """
        Resolve the project for one command.

        Returns:
            The mentioned or current project, or None when the command does not
            need one and none is known.

        Raises:
            ProjectNotFoundError: The mention names no visible project.
            ProjectRequiredError: The command needs a project and none is known.
        """
        lookup = context.lookup_for(EntityKind.PROJECT.value)

        if mention:
            if lookup is None:
                raise ProjectNotFoundError(mention)
            scope = context.user_id
            if lookup.is_identifier(mention):
                item = await lookup.find_by_id(mention, scope)
                if item is not None:
                    return item
            wanted = mention.strip().lower()
            for item in await lookup.list_items(scope):
                if item.text.strip().lower() == wanted:
                    return item
            similar = await lookup.find_by_text_match(mention, scope)
            raise ProjectNotFoundError(
                mention, suggestions=[f"Did you mean @{item.text}?" for item in similar[:3]]
            )

        if context.current_project_id:
            if lookup is not None:
                item = await lookup.find_by_id(context.current_project_id, context.user_id)
                if item is not None:
                    return item
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "Current project %s not visible through a lookup; passing the id through",
                    context.current_project_id,
                )
            return None

        if spec.requires_project:
            raise ProjectRequiredError(
                suggestions=["/swap @projectname", f"/help {spec.name}"]
            )
        return None
