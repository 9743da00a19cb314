"""
Application factory for creating the command engine and its FastAPI application.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from fastapi import FastAPI

from devterm import __version__
from devterm.core.app.controllers.terminal_controller import TerminalController, router
from devterm.core.app.error_handlers import configure_exception_handlers
from devterm.core.commands.catalog import CommandCatalog
from devterm.core.commands.definitions import DEFAULT_COMMANDS
from devterm.core.commands.handlers.help_handler import HelpHandler
from devterm.core.commands.matcher import CommandMatcher
from devterm.core.commands.parser import CommandParser
from devterm.core.commands.registry import HandlerRegistry
from devterm.core.commands.validator import SchemaValidator
from devterm.core.common.logging_utils import configure_logging
from devterm.core.config.app_config import EngineConfig, load_config
from devterm.core.domain.command_spec import CommandSpec
from devterm.core.interfaces.collection_lookup_interface import ICollectionLookup
from devterm.core.services.command_pipeline import CommandPipeline
from devterm.core.services.command_service import CommandService
from devterm.core.services.dispatcher import CommandDispatcher
from devterm.core.services.entity_resolver import EntityResolver
from devterm.core.services.project_resolver import ProjectResolver

logger = logging.getLogger(__name__)


def build_command_service(
    config: EngineConfig | None = None,
    registry: HandlerRegistry | None = None,
    specs: Iterable[CommandSpec] = DEFAULT_COMMANDS,
) -> CommandService:
    """Wire the catalog, pipeline stages and services together.

    Args:
        config: Engine configuration, defaults when omitted
        registry: Handlers for the domain commands; ``/help`` is added if absent
        specs: Command table to build the catalog from

    Returns:
        A ready-to-use command service
    """
    config = config or EngineConfig()
    registry = registry or HandlerRegistry()

    catalog = CommandCatalog(specs)
    parser = CommandParser(
        CommandMatcher(catalog),
        command_prefix=config.command_prefix,
        max_command_length=config.max_command_length,
    )
    pipeline = CommandPipeline(
        catalog=catalog,
        parser=parser,
        validator=SchemaValidator(),
        projects=ProjectResolver(),
        resolver=EntityResolver(strict_ambiguity=config.strict_ambiguity),
    )
    if "help" in catalog and not registry.has("help"):
        registry.register("help", HelpHandler(catalog))

    missing = [spec.name for spec in catalog.all() if not registry.has(spec.name)]
    if missing:
        logger.info("Commands without a registered handler: %s", ", ".join(missing))

    return CommandService(catalog, pipeline, CommandDispatcher(registry), config)


def build_app(
    config: EngineConfig | dict[str, Any] | None = None,
    registry: HandlerRegistry | None = None,
    collections: Mapping[str, ICollectionLookup] | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: The engine configuration (``EngineConfig`` or dict); loaded
            from the environment when omitted
        registry: Handlers for the domain commands
        collections: Lookups per entity kind used to resolve references

    Returns:
        The FastAPI ASGI application instance.
    """
    if config is None:
        config = load_config()
    elif isinstance(config, dict):
        config = EngineConfig.from_dict(config)

    configure_logging(config.logging)

    service = build_command_service(config, registry)
    app = FastAPI(title="devterm", version=__version__)
    app.state.config = config
    app.state.command_service = service
    app.state.terminal_controller = TerminalController(service, collections)
    app.include_router(router)
    configure_exception_handlers(app)
    return app
