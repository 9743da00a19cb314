"""
Interactive multi-step collection of a command's fields.

A wizard session belongs to one conversation. While it is active every input
line of that conversation is the literal answer to the current step, except
the configured cancel keywords. When the last step is answered the collected
fields become the flags of a synthesized command that goes through
validation, resolution and dispatch like typed input.

Selector wizards (complete, edit or delete an existing item) start another
round after each successful dispatch, hiding the items already handled, until
nothing is left to choose from.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from devterm.core.common.exceptions import CommandEngineError, WizardError
from devterm.core.config.app_config import EngineConfig
from devterm.core.domain.command_context import ExecutionContext
from devterm.core.domain.command_spec import CommandSpec, StepKind, StepSpec
from devterm.core.domain.commands import ParsedCommand
from devterm.core.domain.entities import CollectionHandle, CollectionItem
from devterm.core.domain.responses import CommandResponse
from devterm.core.domain.wizard import WizardSession
from devterm.core.services.command_pipeline import CommandPipeline
from devterm.core.services.dispatcher import CommandDispatcher

logger = logging.getLogger(__name__)


class WizardService:
    """Owns the wizard sessions of all conversations."""

    def __init__(
        self,
        pipeline: CommandPipeline,
        dispatcher: CommandDispatcher,
        config: EngineConfig | None = None,
    ) -> None:
        self._pipeline = pipeline
        self._dispatcher = dispatcher
        self._config = config or EngineConfig()
        self._sessions: dict[str, WizardSession] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock_for(self, conversation_id: str) -> asyncio.Lock:
        lock = self._locks.get(conversation_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[conversation_id] = lock
        return lock

    def get(self, conversation_id: str) -> WizardSession | None:
        return self._sessions.get(conversation_id)

    def has_active(self, conversation_id: str) -> bool:
        session = self._sessions.get(conversation_id)
        return session is not None and session.is_active

    def discard(self, conversation_id: str) -> None:
        """Drop the conversation's session, e.g. after an idle timeout."""
        self._end_session(conversation_id)

    def _end_session(self, conversation_id: str) -> None:
        self._sessions.pop(conversation_id, None)
        self._locks.pop(conversation_id, None)

    async def start(
        self, spec: CommandSpec, parsed: ParsedCommand, context: ExecutionContext
    ) -> CommandResponse:
        """
        Start a wizard for ``spec`` and return the first prompt.

        Raises:
            WizardError: The command has no wizard steps.
            CommandEngineError: The project cannot be resolved.
        """
        if not spec.has_wizard:
            raise WizardError(f"/{spec.name} has no interactive mode")

        cid = context.conversation_id
        try:
            async with self._lock_for(cid):
                await self._pipeline.projects.resolve(spec, parsed.project_mention, context)
                session = WizardSession(
                    conversation_id=cid,
                    command_name=spec.name,
                    steps=spec.wizard_steps,
                    project_mention=parsed.project_mention,
                    selector=spec.selector,
                )
                session.begin()
                if spec.selector and not await self._candidates(spec, session, context):
                    kind = spec.entity_kind.value if spec.entity_kind else "item"
                    return CommandResponse.info(f"There is no {kind} to choose from.")
                prompt = await self._prompt(spec, session, context)
                self._sessions[cid] = session
                logger.info("Started wizard for /%s in conversation %s", spec.name, cid)
                return prompt
        finally:
            # Locks only live as long as a stored session.
            if cid not in self._sessions:
                self._locks.pop(cid, None)

    async def advance(self, text: str, context: ExecutionContext) -> CommandResponse:
        """
        Feed one input line to the conversation's active wizard.

        Raises:
            WizardError: The conversation has no active wizard.
        """
        cid = context.conversation_id
        async with self._lock_for(cid):
            session = self._sessions.get(cid)
            if session is None or not session.is_active:
                raise WizardError("No wizard is active for this conversation")
            spec = self._pipeline.catalog.get(session.command_name)
            if spec is None:
                self._end_session(cid)
                raise WizardError(f"Unknown wizard command '{session.command_name}'")

            if self._config.is_cancel_keyword(text):
                session.cancel()
                self._end_session(cid)
                logger.info("Cancelled wizard for /%s in conversation %s", spec.name, cid)
                return CommandResponse.info(f"Cancelled /{spec.name}")

            step = session.current_step
            if step is None:
                self._end_session(cid)
                raise WizardError("Wizard has no step to answer")

            value, problem = await self._accept(spec, step, text, session, context)
            if problem is not None:
                return await self._prompt(spec, session, context, problem=problem)
            session.record(value)

            if session.is_active:
                return await self._prompt(spec, session, context)
            return await self._complete(spec, session, context)

    async def _accept(
        self,
        spec: CommandSpec,
        step: StepSpec,
        text: str,
        session: WizardSession,
        context: ExecutionContext,
    ) -> tuple[str | None, str | None]:
        """Return ``(value, problem)`` for one answer; a problem re-prompts the step."""
        value = text.strip()
        if not value:
            if step.required:
                return None, f"{step.label} is required"
            return step.default, None

        if step.kind is StepKind.SELECT and step.options:
            if value.isdigit() and 1 <= int(value) <= len(step.options):
                value = step.options[int(value) - 1]
            if value not in step.options:
                return None, f"Choose one of: {', '.join(step.options)}"

        if step.kind is StepKind.SELECTOR:
            try:
                handle = await self._handle(spec, session, context)
                await self._pipeline.resolver.resolve(value, handle)
            except CommandEngineError as e:
                return None, e.message
        return value, None

    async def _complete(
        self, spec: CommandSpec, session: WizardSession, context: ExecutionContext
    ) -> CommandResponse:
        cid = session.conversation_id
        parsed = ParsedCommand(
            name=spec.name,
            verb=spec.verb,
            noun=spec.noun,
            flags=dict(session.collected_fields),
            project_mention=session.project_mention,
            raw=f"/{spec.name}",
        )
        try:
            validated = await self._pipeline.prepare(
                spec, parsed, context, excluded_ids=frozenset(session.handled_ids)
            )
        except CommandEngineError as e:
            self._end_session(cid)
            return CommandResponse.from_error(e)

        response = await self._dispatcher.dispatch(validated)

        if session.selector and not response.is_error and validated.entity is not None:
            session.handled_ids.add(validated.entity.resolved_id)
            if await self._candidates(spec, session, context):
                session.restart()
                next_prompt = await self._prompt(spec, session, context)
                return response.with_metadata(wizard={"nextPrompt": next_prompt.to_envelope()})

        self._end_session(cid)
        return response

    async def _handle(
        self, spec: CommandSpec, session: WizardSession, context: ExecutionContext
    ) -> CollectionHandle:
        project = await self._pipeline.projects.resolve(spec, session.project_mention, context)
        scope = project.id if project is not None else context.current_project_id
        return self._pipeline.handle_for(spec, context, scope, frozenset(session.handled_ids))

    async def _candidates(
        self, spec: CommandSpec, session: WizardSession, context: ExecutionContext
    ) -> list[CollectionItem]:
        handle = await self._handle(spec, session, context)
        return await handle.lookup.list_items(handle.scope, handle.excluded_ids)

    async def _prompt(
        self,
        spec: CommandSpec,
        session: WizardSession,
        context: ExecutionContext,
        problem: str | None = None,
    ) -> CommandResponse:
        step = session.current_step
        if step is None:
            raise WizardError("Wizard has no step to prompt for")

        description: dict[str, Any] = step.describe()
        position = f"{session.current_step_index + 1}/{len(session.steps)}"
        lines = [f"/{spec.name} ({position}): {step.label}"]
        if problem:
            lines.insert(0, problem)
        if step.kind is StepKind.SELECTOR:
            items = await self._candidates(spec, session, context)
            description["options"] = [
                {"index": i, "id": item.id, "text": item.text}
                for i, item in enumerate(items, start=1)
            ]
            lines.extend(f"  {i}. {item.text}" for i, item in enumerate(items, start=1))
        elif step.options:
            lines.extend(f"  {i}. {option}" for i, option in enumerate(step.options, start=1))
        if not step.required:
            lines.append("(leave blank to skip)")
        lines.append(f"Type {self._config.wizard_cancel_keywords[0]} to stop.")

        return CommandResponse.prompt(
            "\n".join(lines),
            data={"step": description},
            wizard=session.progress(),
        )
