from __future__ import annotations

import pytest

from devterm.core.commands.catalog import CommandCatalog
from devterm.core.common.exceptions import ProjectNotFoundError, ProjectRequiredError
from devterm.core.domain.command_context import ExecutionContext
from devterm.core.services.project_resolver import ProjectResolver
from tests.conftest import PROJECT_ALPHA_ID, PROJECT_SIDE_ID


@pytest.mark.asyncio
async def test_mention_matches_name_case_insensitively(
    catalog: CommandCatalog, context: ExecutionContext
) -> None:
    project = await ProjectResolver().resolve(
        catalog.get("add todo"), "my side project", context
    )

    assert project is not None
    assert project.id == PROJECT_SIDE_ID


@pytest.mark.asyncio
async def test_mention_may_be_a_project_id(
    catalog: CommandCatalog, context: ExecutionContext
) -> None:
    project = await ProjectResolver().resolve(catalog.get("add todo"), PROJECT_SIDE_ID, context)

    assert project is not None
    assert project.text == "My Side Project"


@pytest.mark.asyncio
async def test_unknown_mention_suggests_similar_projects(
    catalog: CommandCatalog, context: ExecutionContext
) -> None:
    with pytest.raises(ProjectNotFoundError) as exc_info:
        await ProjectResolver().resolve(catalog.get("add todo"), "Side", context)

    assert exc_info.value.mention == "Side"
    assert exc_info.value.suggestions == ["Did you mean @My Side Project?"]


@pytest.mark.asyncio
async def test_current_project_is_used_without_mention(
    catalog: CommandCatalog, context: ExecutionContext
) -> None:
    project = await ProjectResolver().resolve(catalog.get("view todos"), None, context)

    assert project is not None
    assert project.id == PROJECT_ALPHA_ID


@pytest.mark.asyncio
async def test_project_required_without_mention_or_current_project(
    catalog: CommandCatalog,
) -> None:
    with pytest.raises(ProjectRequiredError):
        await ProjectResolver().resolve(catalog.get("view todos"), None, ExecutionContext())


@pytest.mark.asyncio
async def test_project_optional_commands_resolve_to_none(catalog: CommandCatalog) -> None:
    assert await ProjectResolver().resolve(catalog.get("search"), None, ExecutionContext()) is None


@pytest.mark.asyncio
async def test_mention_without_project_lookup_is_not_found(catalog: CommandCatalog) -> None:
    with pytest.raises(ProjectNotFoundError):
        await ProjectResolver().resolve(catalog.get("add todo"), "Alpha", ExecutionContext())
