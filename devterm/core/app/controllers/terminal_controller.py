"""
Terminal Controller

HTTP endpoints for executing, validating and autocompleting terminal commands.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from fastapi import APIRouter, Depends, Query, Request
from pydantic import ConfigDict, Field

from devterm.core.common.exceptions import ConfigurationError
from devterm.core.domain.command_context import ExecutionContext
from devterm.core.interfaces.collection_lookup_interface import ICollectionLookup
from devterm.core.interfaces.model_bases import DomainModel
from devterm.core.services.command_service import CommandService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/terminal", tags=["terminal"])


class ExecuteRequest(DomainModel):
    """Body of ``POST /terminal/execute``."""

    model_config = ConfigDict(populate_by_name=True)

    command: str = Field(min_length=1)
    current_project_id: str | None = Field(default=None, alias="currentProjectId")
    conversation_id: str | None = Field(default=None, alias="conversationId")
    user_id: str | None = Field(default=None, alias="userId")


class ValidateRequest(DomainModel):
    """Body of ``POST /terminal/validate``."""

    command: str


class TerminalController:
    """Controller for terminal endpoints."""

    def __init__(
        self,
        command_service: CommandService,
        collections: Mapping[str, ICollectionLookup] | None = None,
    ) -> None:
        """Initialize the terminal controller.

        Args:
            command_service: The command service to use
            collections: Lookups passed to every command's execution context
        """
        self.command_service = command_service
        self.collections = dict(collections or {})

    def build_context(self, request: ExecuteRequest) -> ExecutionContext:
        return ExecutionContext(
            conversation_id=request.conversation_id or request.user_id or "default",
            user_id=request.user_id,
            current_project_id=request.current_project_id,
            collections=self.collections,
        )

    async def execute(self, request: ExecuteRequest) -> dict[str, Any]:
        response = await self.command_service.execute(
            request.command, self.build_context(request)
        )
        return response.to_envelope()

    def validate(self, request: ValidateRequest) -> dict[str, Any]:
        result = self.command_service.validate(request.command)
        return {"isValid": result["is_valid"], "errors": result["errors"]}


def get_terminal_controller(request: Request) -> TerminalController:
    """Get the terminal controller stored on the application state.

    Raises:
        ConfigurationError: If the application was built without one
    """
    controller = getattr(request.app.state, "terminal_controller", None)
    if controller is None:
        raise ConfigurationError("Terminal controller is not configured")
    return controller  # type: ignore[no-any-return]


@router.post("/execute")
async def execute_command(
    body: ExecuteRequest,
    controller: TerminalController = Depends(get_terminal_controller),
) -> dict[str, Any]:
    """Execute a command or a batch of chained commands."""
    return await controller.execute(body)


@router.get("/commands")
async def list_commands(
    controller: TerminalController = Depends(get_terminal_controller),
) -> dict[str, Any]:
    """List commands and aliases for autocomplete."""
    return controller.command_service.commands()


@router.post("/validate")
async def validate_command(
    body: ValidateRequest,
    controller: TerminalController = Depends(get_terminal_controller),
) -> dict[str, Any]:
    """Check command syntax without executing anything."""
    return controller.validate(body)


@router.get("/suggestions")
async def get_suggestions(
    partial: str = Query("", description="Partial command input"),
    controller: TerminalController = Depends(get_terminal_controller),
) -> dict[str, Any]:
    """Suggest commands matching partial input."""
    return {"suggestions": controller.command_service.suggestions(partial)}
