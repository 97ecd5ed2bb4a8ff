"""Perforce layer — command model and execution backends."""

from p4mcp.p4.backend import P4Backend, create_backend
from p4mcp.p4.commands import (
    AddCommand,
    ChangesCommand,
    EditCommand,
    InfoCommand,
    Invocation,
    OpenedCommand,
    P4Command,
    RevertCommand,
    StatusCommand,
    SubmitCommand,
    SyncCommand,
)
from p4mcp.p4.errors import (
    ExecutionError,
    ExecutionTimeoutError,
    SpawnFailedError,
    ToolFailedError,
)
from p4mcp.p4.mock_backend import MockBackend
from p4mcp.p4.subprocess_backend import SubprocessBackend

__all__ = [
    "AddCommand",
    "ChangesCommand",
    "EditCommand",
    "ExecutionError",
    "ExecutionTimeoutError",
    "InfoCommand",
    "Invocation",
    "MockBackend",
    "OpenedCommand",
    "P4Backend",
    "P4Command",
    "RevertCommand",
    "SpawnFailedError",
    "StatusCommand",
    "SubmitCommand",
    "SubprocessBackend",
    "SyncCommand",
    "ToolFailedError",
    "create_backend",
]
