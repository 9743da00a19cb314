"""
Built-in command table.

Each entry declares how a command is matched (canonical name and aliases),
what it requires (flags, enum values, positional arity, a project) and how
its fields are collected interactively when it is typed without arguments.
Handlers are registered separately against the canonical names.
"""

from __future__ import annotations

from devterm.constants import CommandCategory, EntityKind
from devterm.core.domain.command_spec import CommandSpec, StepKind, StepSpec

PRIORITIES: tuple[str, ...] = ("low", "medium", "high")
TODO_STATUSES: tuple[str, ...] = ("not_started", "in_progress", "completed", "blocked")
COMPONENT_CATEGORIES: tuple[str, ...] = (
    "frontend",
    "backend",
    "database",
    "infrastructure",
    "security",
    "api",
    "documentation",
    "asset",
)
RELATIONSHIP_TYPES: tuple[str, ...] = (
    "uses",
    "implements",
    "extends",
    "depends_on",
    "calls",
    "contains",
    "mentions",
    "similar",
)
STACK_CATEGORIES: tuple[str, ...] = (
    "framework",
    "runtime",
    "database",
    "styling",
    "deployment",
    "testing",
    "tooling",
    "ui",
    "state",
    "routing",
    "forms",
    "animation",
    "api",
    "auth",
    "data",
    "utility",
)
EXPORT_FORMATS: tuple[str, ...] = ("json", "markdown", "prompt")


def _todo_selector(label: str = "Which todo?") -> StepSpec:
    return StepSpec(key="todo", label=label, kind=StepKind.SELECTOR)


DEFAULT_COMMANDS: tuple[CommandSpec, ...] = (
    # Todos
    CommandSpec(
        name="add todo",
        description="Create a new todo item",
        syntax='/add todo "title" [@project] [--priority=low|medium|high] [--due=date]',
        aliases=frozenset({"todo", "add-todo"}),
        flag_enums={"priority": PRIORITIES, "status": TODO_STATUSES},
        arity=(1, None),
        positional_field="title",
        requires_project=True,
        wizard_steps=(
            StepSpec(key="title", label="Todo title", placeholder="Fix authentication bug"),
            StepSpec(key="content", label="Description", required=False),
            StepSpec(
                key="priority",
                label="Priority",
                kind=StepKind.SELECT,
                required=False,
                options=PRIORITIES,
                default="medium",
            ),
            StepSpec(key="due", label="Due date", required=False, placeholder="2025-01-31"),
        ),
        category=CommandCategory.FEATURES,
        examples=(
            "/add todo fix authentication bug @myproject",
            '/todo "implement user dashboard" --priority=high',
            "/add-todo review pull request @frontend",
        ),
    ),
    CommandSpec(
        name="view todos",
        description="List the project's todos",
        syntax="/view todos [@project] [--status=...] [--priority=...]",
        aliases=frozenset({"todos", "view-todos", "list todos", "view todo"}),
        flag_enums={"priority": PRIORITIES, "status": TODO_STATUSES},
        arity=(0, 0),
        requires_project=True,
        category=CommandCategory.FEATURES,
        examples=("/view todos @myproject", "/todos --status=in_progress"),
    ),
    CommandSpec(
        name="complete todo",
        description="Mark a todo as completed",
        syntax='/complete todo <"text"|#|id> [@project]',
        aliases=frozenset({"done", "complete-todo", "finish todo"}),
        arity=(1, None),
        positional_field="todo",
        entity_kind=EntityKind.TODO,
        requires_project=True,
        wizard_steps=(_todo_selector("Which todo did you finish?"),),
        selector=True,
        category=CommandCategory.FEATURES,
        examples=("/complete todo 1", '/done "auth bug" @backend'),
    ),
    CommandSpec(
        name="edit todo",
        description="Edit a todo's title, description, priority or status",
        syntax='/edit todo <"text"|#|id> [--title=...] [--priority=...] [--status=...]',
        aliases=frozenset({"edit-todo", "update todo"}),
        flag_enums={"priority": PRIORITIES, "status": TODO_STATUSES},
        arity=(1, None),
        positional_field="todo",
        entity_kind=EntityKind.TODO,
        requires_project=True,
        wizard_steps=(
            _todo_selector("Which todo do you want to edit?"),
            StepSpec(key="title", label="New title", required=False),
            StepSpec(
                key="priority",
                label="Priority",
                kind=StepKind.SELECT,
                required=False,
                options=PRIORITIES,
            ),
            StepSpec(
                key="status",
                label="Status",
                kind=StepKind.SELECT,
                required=False,
                options=TODO_STATUSES,
            ),
        ),
        selector=True,
        category=CommandCategory.FEATURES,
        examples=("/edit todo 2 --priority=high", '/edit todo "login" --status=blocked'),
    ),
    CommandSpec(
        name="delete todo",
        description="Delete a todo",
        syntax='/delete todo <"text"|#|id> [@project]',
        aliases=frozenset({"delete-todo", "remove todo", "rm todo"}),
        arity=(1, None),
        positional_field="todo",
        entity_kind=EntityKind.TODO,
        requires_project=True,
        wizard_steps=(_todo_selector("Which todo do you want to delete?"),),
        selector=True,
        category=CommandCategory.FEATURES,
        examples=("/delete todo 3", "/rm todo old spike"),
    ),
    # Notes
    CommandSpec(
        name="add note",
        description="Create a new note",
        syntax='/add note "content" [@project] [--title=...]',
        aliases=frozenset({"note", "add-note"}),
        arity=(1, None),
        positional_field="content",
        requires_project=True,
        wizard_steps=(
            StepSpec(key="title", label="Note title", required=False),
            StepSpec(key="content", label="Note content"),
        ),
        category=CommandCategory.NOTES,
        examples=(
            "/add note API architecture decisions @backend",
            "/note meeting notes from standup",
            '/add-note --title="Schema" "database schema design"',
        ),
    ),
    CommandSpec(
        name="view notes",
        description="List the project's notes",
        syntax="/view notes [@project]",
        aliases=frozenset({"notes", "view-notes", "list notes", "view note"}),
        arity=(0, 0),
        requires_project=True,
        category=CommandCategory.NOTES,
        examples=("/view notes @myproject", "/notes"),
    ),
    CommandSpec(
        name="delete note",
        description="Delete a note",
        syntax='/delete note <"text"|#|id> [@project]',
        aliases=frozenset({"delete-note", "remove note", "rm note"}),
        arity=(1, None),
        positional_field="note",
        entity_kind=EntityKind.NOTE,
        requires_project=True,
        wizard_steps=(StepSpec(key="note", label="Which note?", kind=StepKind.SELECTOR),),
        selector=True,
        category=CommandCategory.NOTES,
        examples=("/delete note 1", '/delete note "standup"'),
    ),
    # Dev log
    CommandSpec(
        name="add devlog",
        description="Create a new dev log entry",
        syntax='/add devlog "entry" [@project]',
        aliases=frozenset({"devlog", "add-devlog"}),
        arity=(1, None),
        positional_field="content",
        requires_project=True,
        wizard_steps=(StepSpec(key="content", label="What did you work on?"),),
        category=CommandCategory.DEV_LOG,
        examples=("/add devlog fixed the websocket reconnect loop", "/devlog shipped v2"),
    ),
    CommandSpec(
        name="view devlog",
        description="List the project's dev log entries",
        syntax="/view devlog [@project]",
        aliases=frozenset({"devlogs", "view-devlog", "list devlog"}),
        arity=(0, 0),
        requires_project=True,
        category=CommandCategory.DEV_LOG,
        examples=("/view devlog @myproject",),
    ),
    # Components
    CommandSpec(
        name="add component",
        description="Add a component to a feature",
        syntax=(
            "/add component --feature=name --category=type --title=name "
            "[--type=subtype] [--content=text]"
        ),
        aliases=frozenset({"component", "add-component"}),
        required_flags=("feature", "category", "title"),
        flag_enums={"category": COMPONENT_CATEGORIES},
        arity=(0, 0),
        requires_project=True,
        wizard_steps=(
            StepSpec(key="feature", label="Feature name", placeholder="Authentication"),
            StepSpec(
                key="category",
                label="Category",
                kind=StepKind.SELECT,
                options=COMPONENT_CATEGORIES,
            ),
            StepSpec(key="title", label="Component title"),
            StepSpec(key="type", label="Type", required=False, placeholder="service"),
            StepSpec(key="content", label="Description", required=False),
        ),
        category=CommandCategory.FEATURES,
        examples=(
            '/add component --feature=Auth --category=backend --title="Token service"',
        ),
    ),
    CommandSpec(
        name="view components",
        description="List the project's components grouped by feature",
        syntax="/view components [@project] [--feature=name]",
        aliases=frozenset({"components", "view-components", "list components", "features"}),
        arity=(0, 0),
        requires_project=True,
        category=CommandCategory.FEATURES,
        examples=("/view components --feature=Auth",),
    ),
    CommandSpec(
        name="link component",
        description="Create a relationship between two components",
        syntax='/link component "source" --target=name --type=relationship',
        aliases=frozenset({"link-component", "link"}),
        required_flags=("target", "type"),
        flag_enums={"type": RELATIONSHIP_TYPES},
        arity=(1, None),
        positional_field="component",
        entity_kind=EntityKind.COMPONENT,
        requires_project=True,
        category=CommandCategory.FEATURES,
        examples=('/link component "Login form" --target="Token service" --type=calls',),
    ),
    CommandSpec(
        name="delete component",
        description="Delete a component",
        syntax='/delete component <"text"|#|id> [@project]',
        aliases=frozenset({"delete-component", "remove component", "rm component"}),
        arity=(1, None),
        positional_field="component",
        entity_kind=EntityKind.COMPONENT,
        requires_project=True,
        wizard_steps=(
            StepSpec(key="component", label="Which component?", kind=StepKind.SELECTOR),
        ),
        selector=True,
        category=CommandCategory.FEATURES,
        examples=("/delete component 2",),
    ),
    # Stack
    CommandSpec(
        name="add tech",
        description="Add a technology to the project's stack",
        syntax="/add tech --name=name --category=type [--version=x.y]",
        aliases=frozenset({"tech", "add-tech", "add stack"}),
        required_flags=("name", "category"),
        flag_enums={"category": STACK_CATEGORIES},
        arity=(0, 0),
        requires_project=True,
        wizard_steps=(
            StepSpec(key="name", label="Technology name", placeholder="React"),
            StepSpec(
                key="category", label="Category", kind=StepKind.SELECT, options=STACK_CATEGORIES
            ),
            StepSpec(key="version", label="Version", required=False),
        ),
        category=CommandCategory.STACK,
        examples=("/add tech --name=React --category=framework --version=18.2.0",),
    ),
    CommandSpec(
        name="view stack",
        description="Show the project's technology stack",
        syntax="/view stack [@project]",
        aliases=frozenset({"stack", "view-stack", "list stack"}),
        arity=(0, 0),
        requires_project=True,
        category=CommandCategory.STACK,
        examples=("/view stack @myproject",),
    ),
    CommandSpec(
        name="remove tech",
        description="Remove a technology from the project's stack",
        syntax='/remove tech <"name"|#|id> [@project]',
        aliases=frozenset({"remove-tech", "rm tech", "delete tech"}),
        arity=(1, None),
        positional_field="name",
        entity_kind=EntityKind.STACK,
        requires_project=True,
        wizard_steps=(StepSpec(key="name", label="Which technology?", kind=StepKind.SELECTOR),),
        selector=True,
        category=CommandCategory.STACK,
        examples=("/remove tech React",),
    ),
    # Project
    CommandSpec(
        name="swap project",
        description="Switch to a different project",
        syntax="/swap @project",
        aliases=frozenset(
            {"swap", "switch", "switch project", "swap-project", "switch-project", "project"}
        ),
        arity=(0, 0),
        requires_project=True,
        category=CommandCategory.PROJECT,
        examples=("/swap @frontend", "/switch-project @My Side Project"),
    ),
    CommandSpec(
        name="export",
        description="Export the project's data",
        syntax="/export [@project] [--format=json|markdown|prompt]",
        aliases=frozenset({"download"}),
        flag_enums={"format": EXPORT_FORMATS},
        arity=(0, 0),
        requires_project=True,
        category=CommandCategory.EXPORT,
        examples=("/export @myproject", "/download --format=markdown"),
    ),
    CommandSpec(
        name="search",
        description="Search todos, notes and dev log entries",
        syntax='/search "query" [@project]',
        aliases=frozenset({"find"}),
        arity=(1, None),
        positional_field="query",
        category=CommandCategory.GENERAL,
        examples=("/search authentication", '/find "rate limit" @backend'),
    ),
    CommandSpec(
        name="help",
        description="Show available commands or help for one command",
        syntax="/help [command]",
        aliases=frozenset({"?", "commands"}),
        arity=(0, None),
        positional_field="topic",
        category=CommandCategory.HELP,
        examples=("/help", "/help add todo"),
    ),
)
