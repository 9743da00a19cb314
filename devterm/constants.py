from enum import Enum

DEFAULT_COMMAND_PREFIX: str = "/"
DEFAULT_MAX_BATCH_SIZE: int = 10
DEFAULT_MAX_COMMAND_LENGTH: int = 500
DEFAULT_SUGGESTION_LIMIT: int = 10
DEFAULT_WIZARD_CANCEL_KEYWORDS: tuple[str, ...] = ("cancel", "/cancel")

BATCH_SEPARATOR: str = "&&"
MENTION_PREFIX: str = "@"
FLAG_PREFIX: str = "--"


class EntityKind(str, Enum):
    """Kinds of project items a command can reference."""

    PROJECT = "project"
    TODO = "todo"
    NOTE = "note"
    DEVLOG = "devlog"
    COMPONENT = "component"
    STACK = "stack"


class CommandCategory(str, Enum):
    """Help categories used to group commands."""

    NOTES = "Notes"
    DEV_LOG = "Dev Log"
    FEATURES = "Features"
    STACK = "Stack"
    PROJECT = "Project"
    EXPORT = "Export"
    HELP = "Help"
    GENERAL = "General"
