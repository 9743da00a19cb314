from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import pytest

from devterm.core.app.application_factory import build_command_service
from devterm.core.commands.catalog import CommandCatalog
from devterm.core.commands.definitions import DEFAULT_COMMANDS
from devterm.core.commands.matcher import CommandMatcher
from devterm.core.commands.parser import CommandParser
from devterm.core.commands.registry import HandlerRegistry
from devterm.core.domain.command_context import ExecutionContext
from devterm.core.domain.commands import ValidatedCommand
from devterm.core.domain.entities import CollectionItem
from devterm.core.domain.responses import CommandResponse
from devterm.core.repositories.in_memory_collection import InMemoryCollectionLookup
from devterm.core.services.command_service import CommandService

PROJECT_ALPHA_ID = "0b7c6a54-1f7e-4c1a-9a55-2f0d3c2b1a01"
PROJECT_SIDE_ID = "0b7c6a54-1f7e-4c1a-9a55-2f0d3c2b1a02"
TODO_ALPHA_ID = "5d0e7c1b-8a3f-4b2e-9c6d-7e8f9a0b1c01"
TODO_BETA_ID = "5d0e7c1b-8a3f-4b2e-9c6d-7e8f9a0b1c02"
TODO_GAMMA_ID = "5d0e7c1b-8a3f-4b2e-9c6d-7e8f9a0b1c03"

HANDLED_COMMANDS = (
    "add todo",
    "view todos",
    "complete todo",
    "edit todo",
    "delete todo",
    "add note",
    "add component",
    "add tech",
    "swap project",
)


async def _echo(command: ValidatedCommand) -> CommandResponse:
    return CommandResponse.success(f"/{command.name} done", data=dict(command.payload))


def make_echo_handler() -> AsyncMock:
    """An ``AsyncMock`` handler that answers with its payload."""
    return AsyncMock(side_effect=_echo)


@pytest.fixture
def projects() -> InMemoryCollectionLookup:
    return InMemoryCollectionLookup(
        "project",
        [
            CollectionItem(id=PROJECT_ALPHA_ID, text="Alpha", kind="project"),
            CollectionItem(id=PROJECT_SIDE_ID, text="My Side Project", kind="project"),
        ],
    )


@pytest.fixture
def todos() -> InMemoryCollectionLookup:
    lookup = InMemoryCollectionLookup("todo")
    for identifier, title in (
        (TODO_ALPHA_ID, "Alpha"),
        (TODO_BETA_ID, "Beta"),
        (TODO_GAMMA_ID, "Gamma"),
    ):
        lookup.add(CollectionItem(id=identifier, text=title, kind="todo"), PROJECT_ALPHA_ID)
    return lookup


@pytest.fixture
def collections(
    projects: InMemoryCollectionLookup, todos: InMemoryCollectionLookup
) -> dict[str, Any]:
    return {"project": projects, "todo": todos}


@pytest.fixture
def context(collections: dict[str, Any]) -> ExecutionContext:
    return ExecutionContext(
        conversation_id="test-conversation",
        current_project_id=PROJECT_ALPHA_ID,
        collections=collections,
    )


@pytest.fixture
def catalog() -> CommandCatalog:
    return CommandCatalog(DEFAULT_COMMANDS)


@pytest.fixture
def parser(catalog: CommandCatalog) -> CommandParser:
    return CommandParser(CommandMatcher(catalog))


@pytest.fixture
def handler_registry() -> HandlerRegistry:
    registry = HandlerRegistry()
    for name in HANDLED_COMMANDS:
        registry.register(name, make_echo_handler())
    return registry


@pytest.fixture
def command_service(handler_registry: HandlerRegistry) -> CommandService:
    return build_command_service(registry=handler_registry)
