"""ToolRegistry — the catalog of tools the server exposes.

The registry is the single source of truth for which tool names exist.
It is populated once and is read-only afterwards.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from p4mcp.p4.commands import DEFAULT_CHANGES_MAX, DEFAULT_SYNC_PATH
from p4mcp.protocol.errors import UnknownToolError
from p4mcp.protocol.models import ToolDescriptor

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


class ToolRegistry:
    """Immutable name-to-descriptor lookup preserving insertion order."""

    def __init__(self, tools: Iterable[ToolDescriptor]) -> None:
        self._tools: dict[str, ToolDescriptor] = {}
        for tool in tools:
            if tool.name in self._tools:
                msg = f"Duplicate tool name: {tool.name}"
                raise ValueError(msg)
            self._tools[tool.name] = tool

    def all_tools(self) -> list[ToolDescriptor]:
        """Return every descriptor in registration order."""
        return list(self._tools.values())

    def names(self) -> list[str]:
        return list(self._tools)

    def contains(self, name: str) -> bool:
        return name in self._tools

    def get(self, name: str) -> ToolDescriptor:
        """Look up a descriptor, raising :class:`UnknownToolError` if absent."""
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolDescriptor]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)


def _string(description: str) -> dict[str, Any]:
    return {"type": "string", "description": description}


def _file_list(description: str) -> dict[str, Any]:
    return {"type": "array", "items": {"type": "string"}, "description": description}


def _schema(properties: dict[str, Any], required: list[str] | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


P4_TOOLS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name="p4_info",
        description="Show Perforce client and server information",
        input_schema=_schema({}),
    ),
    ToolDescriptor(
        name="p4_status",
        description="Get Perforce workspace status",
        input_schema=_schema({"path": _string("Optional path to check status for")}),
    ),
    ToolDescriptor(
        name="p4_sync",
        description="Sync files from Perforce depot",
        input_schema=_schema({
            "path": {
                **_string("Path to sync (e.g., //depot/main/...)"),
                "default": DEFAULT_SYNC_PATH,
            },
            "force": {
                "type": "boolean",
                "description": "Force sync (overwrite local changes)",
                "default": False,
            },
        }),
    ),
    ToolDescriptor(
        name="p4_edit",
        description="Open file(s) for edit in Perforce",
        input_schema=_schema({"files": _file_list("Files to open for edit")}, ["files"]),
    ),
    ToolDescriptor(
        name="p4_add",
        description="Add new file(s) to Perforce",
        input_schema=_schema({"files": _file_list("Files to add")}, ["files"]),
    ),
    ToolDescriptor(
        name="p4_submit",
        description="Submit changes to Perforce",
        input_schema=_schema(
            {
                "description": _string("Change description"),
                "files": _file_list("Optional specific files to submit"),
            },
            ["description"],
        ),
    ),
    ToolDescriptor(
        name="p4_revert",
        description="Revert files in Perforce",
        input_schema=_schema({"files": _file_list("Files to revert")}, ["files"]),
    ),
    ToolDescriptor(
        name="p4_opened",
        description="List files opened for edit",
        input_schema=_schema({"changelist": _string("Optional changelist number")}),
    ),
    ToolDescriptor(
        name="p4_changes",
        description="List recent changes",
        input_schema=_schema({
            "max": {
                "type": "integer",
                "description": "Maximum number of changes to return",
                "default": DEFAULT_CHANGES_MAX,
                "minimum": 0,
            },
            "path": _string("Optional path to filter changes"),
        }),
    ),
)


def default_registry() -> ToolRegistry:
    """Build the registry of Perforce tools."""
    return ToolRegistry(P4_TOOLS)
