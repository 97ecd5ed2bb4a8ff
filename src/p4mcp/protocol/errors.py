"""Shared error types for the protocol layer."""

from __future__ import annotations

# JSON-RPC error codes used on the wire.
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
TOOL_EXECUTION_FAILED = -32000


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""

    code: int = INTERNAL_ERROR


class MessageDecodeError(ProtocolError):
    """An input frame is not a valid request."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Malformed message" + (f": {detail}" if detail else ""))


class UnknownToolError(ProtocolError):
    """Requested tool does not exist in the registry."""

    code = INVALID_PARAMS

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class ArgumentValidationError(ProtocolError):
    """Tool arguments cannot be turned into a command."""

    code = INVALID_PARAMS

    def __init__(self, tool: str, detail: str) -> None:
        self.tool = tool
        self.detail = detail
        super().__init__(f"Invalid arguments for {tool}: {detail}")
