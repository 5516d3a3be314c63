"""
Tools - Classification registry and typed argument records

Every tool the agent can call is listed here with its category.
Classification is explicit, never inferred from the name.
Unknown tools are treated as mutating.

Raw argument bags are validated into per-tool records at the
pipeline boundary. A bad shape raises MalformedArgs with a message
the agent can act on.
"""

from dataclasses import MISSING, dataclass, fields
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Type

from .errors import MalformedArgs


SELECT_INTENT_TOOL = "select_active_intent"
WRITE_FILE_TOOL = "write_to_file"

MUTATION_CLASSES = ("AST_REFACTOR", "INTENT_EVOLUTION")
LESSON_CATEGORIES = ("failure", "design", "style", "concurrency", "other")


class ToolCategory(Enum):
    BENIGN = "benign"        # Reads, context, bookkeeping
    MUTATING = "mutating"    # Changes the workspace or runs commands


@dataclass(frozen=True)
class ToolSpec:
    """Classification of one agent tool."""
    name: str
    category: ToolCategory
    reason: str
    tracked: bool = False    # Post-hook writes a trace entry

    @property
    def is_mutating(self) -> bool:
        return self.category == ToolCategory.MUTATING


TOOL_REGISTRY: Dict[str, ToolSpec] = {
    SELECT_INTENT_TOOL: ToolSpec(
        name=SELECT_INTENT_TOOL,
        category=ToolCategory.BENIGN,
        reason="Declares the active intent; the only action allowed before one is active",
    ),
    "read_file": ToolSpec(
        name="read_file",
        category=ToolCategory.BENIGN,
        reason="Read-only file access",
    ),
    "list_files": ToolSpec(
        name="list_files",
        category=ToolCategory.BENIGN,
        reason="Read-only directory listing",
    ),
    "search_files": ToolSpec(
        name="search_files",
        category=ToolCategory.BENIGN,
        reason="Read-only content search",
    ),
    "record_lesson": ToolSpec(
        name="record_lesson",
        category=ToolCategory.BENIGN,
        reason="Appends to the shared lesson log, not to workspace sources",
    ),
    WRITE_FILE_TOOL: ToolSpec(
        name=WRITE_FILE_TOOL,
        category=ToolCategory.MUTATING,
        reason="Creates or replaces file content",
        tracked=True,
    ),
    "delete_file": ToolSpec(
        name="delete_file",
        category=ToolCategory.MUTATING,
        reason="Removes a file",
    ),
    "execute_command": ToolSpec(
        name="execute_command",
        category=ToolCategory.MUTATING,
        reason="Runs an arbitrary shell command",
    ),
}


def classify(tool_name: str) -> ToolSpec:
    """Look up a tool. Unknown tools are conservatively mutating."""
    spec = TOOL_REGISTRY.get(tool_name)
    if spec is None:
        return ToolSpec(
            name=tool_name,
            category=ToolCategory.MUTATING,
            reason=f"Unknown tool '{tool_name}' - treated as mutating",
        )
    return spec


# =============================================================================
# Argument records
# =============================================================================

@dataclass(frozen=True)
class ToolArgs:
    """Base for per-tool argument records."""

    @property
    def target_path(self) -> Optional[str]:
        return None


@dataclass(frozen=True)
class SelectIntentArgs(ToolArgs):
    intent_id: str


@dataclass(frozen=True)
class PathArgs(ToolArgs):
    path: str

    @property
    def target_path(self) -> Optional[str]:
        return self.path


@dataclass(frozen=True)
class WriteFileArgs(PathArgs):
    content: str
    intent_id: Optional[str] = None
    mutation_class: Optional[str] = None
    initial_hash: Optional[str] = None
    line_count: Optional[int] = None
    start_line: Optional[int] = None
    end_line: Optional[int] = None


@dataclass(frozen=True)
class DeleteFileArgs(PathArgs):
    intent_id: Optional[str] = None


@dataclass(frozen=True)
class ExecuteCommandArgs(ToolArgs):
    command: str
    cwd: Optional[str] = None
    path: Optional[str] = None

    @property
    def target_path(self) -> Optional[str]:
        return self.path or self.cwd


@dataclass(frozen=True)
class RecordLessonArgs(ToolArgs):
    lesson: str
    category: Optional[str] = None


@dataclass(frozen=True)
class GenericArgs(ToolArgs):
    """Fallback for tools without a dedicated record."""
    raw: Mapping[str, Any]

    @property
    def target_path(self) -> Optional[str]:
        for key in ("path", "file", "filename"):
            value = self.raw.get(key)
            if isinstance(value, str) and value:
                return value
        return None


ARG_RECORDS: Dict[str, Type[ToolArgs]] = {
    SELECT_INTENT_TOOL: SelectIntentArgs,
    "read_file": PathArgs,
    WRITE_FILE_TOOL: WriteFileArgs,
    "delete_file": DeleteFileArgs,
    "execute_command": ExecuteCommandArgs,
    "record_lesson": RecordLessonArgs,
}

_INT_FIELDS = {"line_count", "start_line", "end_line"}


def parse_args(tool_name: str, raw: Optional[Mapping[str, Any]]) -> ToolArgs:
    """Validate a raw argument mapping into the tool's record."""
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise MalformedArgs(f"{tool_name}: arguments must be an object, got {type(raw).__name__}")

    record = ARG_RECORDS.get(tool_name)
    if record is None:
        return GenericArgs(raw=dict(raw))

    values = {}
    for f in fields(record):
        required = f.default is MISSING and f.default_factory is MISSING
        value = raw.get(f.name)

        if value is None:
            if required:
                raise MalformedArgs(f"{tool_name}: '{f.name}' is required")
            continue

        if f.name in _INT_FIELDS:
            if isinstance(value, bool) or not isinstance(value, int):
                raise MalformedArgs(f"{tool_name}: '{f.name}' must be an integer")
        elif not isinstance(value, str):
            raise MalformedArgs(f"{tool_name}: '{f.name}' must be a string")
        elif required and f.name != "content" and not value.strip():
            raise MalformedArgs(f"{tool_name}: '{f.name}' must not be empty")

        values[f.name] = value

    if values.get("mutation_class") and values["mutation_class"] not in MUTATION_CLASSES:
        raise MalformedArgs(
            f"{tool_name}: 'mutation_class' must be one of {', '.join(MUTATION_CLASSES)}"
        )
    if values.get("category") and values["category"] not in LESSON_CATEGORIES:
        raise MalformedArgs(
            f"{tool_name}: 'category' must be one of {', '.join(LESSON_CATEGORIES)}"
        )

    return record(**values)
