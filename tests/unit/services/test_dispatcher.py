from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from devterm.core.commands.catalog import CommandCatalog
from devterm.core.commands.registry import HandlerRegistry
from devterm.core.common.exceptions import HandlerError, PermissionDeniedError
from devterm.core.domain.command_context import ExecutionContext
from devterm.core.domain.commands import ParsedCommand, ValidatedCommand
from devterm.core.domain.entities import (
    CollectionItem,
    EntityReference,
    ResolutionStrategy,
    ResolvedEntity,
)
from devterm.core.domain.responses import CommandResponse, ResponseType
from devterm.core.services.dispatcher import GENERIC_FAILURE_MESSAGE, CommandDispatcher


@pytest.fixture
def command(catalog: CommandCatalog) -> ValidatedCommand:
    spec = catalog.get("add todo")
    assert spec is not None
    parsed = ParsedCommand(name=spec.name, verb=spec.verb, noun=spec.noun, positional_args=("x",))
    return ValidatedCommand(
        spec=spec, parsed=parsed, payload={"title": "x"}, context=ExecutionContext()
    )


def dispatcher_with(handler: AsyncMock) -> CommandDispatcher:
    registry = HandlerRegistry()
    registry.register("add todo", handler)
    return CommandDispatcher(registry)


@pytest.mark.asyncio
async def test_dispatch_calls_registered_handler(command: ValidatedCommand) -> None:
    handler = AsyncMock(return_value=CommandResponse.success("Created"))

    response = await dispatcher_with(handler).dispatch(command)

    handler.assert_awaited_once_with(command)
    assert response.type == ResponseType.SUCCESS
    assert response.message == "Created"


@pytest.mark.asyncio
async def test_missing_handler_is_an_error_response(command: ValidatedCommand) -> None:
    response = await CommandDispatcher(HandlerRegistry()).dispatch(command)

    assert response.type == ResponseType.ERROR
    assert "not implemented" in response.message
    assert response.suggestions == ["/help"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [HandlerError("Todo is locked"), PermissionDeniedError("Only owners can do that")],
)
async def test_handler_engine_errors_become_error_responses(
    command: ValidatedCommand, error: HandlerError
) -> None:
    response = await dispatcher_with(AsyncMock(side_effect=error)).dispatch(command)

    assert response.type == ResponseType.ERROR
    assert response.message == error.message


@pytest.mark.asyncio
async def test_unexpected_handler_exception_is_generic_error(
    command: ValidatedCommand,
) -> None:
    handler = AsyncMock(side_effect=RuntimeError("database is down"))

    response = await dispatcher_with(handler).dispatch(command)

    assert response.type == ResponseType.ERROR
    assert response.message == GENERIC_FAILURE_MESSAGE
    assert response.data == {"error": "database is down"}


@pytest.mark.asyncio
async def test_dict_result_is_coerced(command: ValidatedCommand) -> None:
    handler = AsyncMock(return_value={"type": "data", "message": "2 todos", "data": [1, 2]})

    response = await dispatcher_with(handler).dispatch(command)

    assert isinstance(response, CommandResponse)
    assert response.type == ResponseType.DATA
    assert response.data == [1, 2]


@pytest.mark.asyncio
async def test_invalid_dict_result_is_generic_error(command: ValidatedCommand) -> None:
    response = await dispatcher_with(AsyncMock(return_value={"nope": 1})).dispatch(command)

    assert response.type == ResponseType.ERROR
    assert response.message == GENERIC_FAILURE_MESSAGE


@pytest.mark.asyncio
async def test_resolution_metadata_is_attached(command: ValidatedCommand) -> None:
    entity = ResolvedEntity(
        reference=EntityReference(raw="a"),
        strategy=ResolutionStrategy.FUZZY_TEXT,
        item=CollectionItem(id="t1", text="Alpha"),
        candidates=("t1", "t2"),
    )
    handler = AsyncMock(return_value=CommandResponse.success("Done", count=1))

    response = await dispatcher_with(handler).dispatch(command.with_resolution(entity=entity))

    assert response.metadata == {
        "count": 1,
        "resolvedId": "t1",
        "resolution": "fuzzy_text",
        "ambiguous": True,
        "candidates": ["t1", "t2"],
    }


def test_registry_rejects_duplicates_and_supports_decorator() -> None:
    registry = HandlerRegistry()

    @registry.handler("Add Todo")
    async def add_todo(command: ValidatedCommand) -> CommandResponse:
        return CommandResponse.success("ok")

    assert registry.get("add todo") is add_todo
    assert registry.has("ADD TODO")
    with pytest.raises(ValueError):
        registry.register("add todo", add_todo)
    registry.register("add todo", add_todo, replace=True)
    registry.unregister("add todo")
    assert not registry.has("add todo")
