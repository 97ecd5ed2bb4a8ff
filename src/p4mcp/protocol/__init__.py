"""Protocol layer — MCP wire models, tool registry and message dispatch."""

from p4mcp.protocol.arguments import decode_arguments
from p4mcp.protocol.dispatcher import MessageDispatcher
from p4mcp.protocol.errors import (
    ArgumentValidationError,
    MessageDecodeError,
    ProtocolError,
    UnknownToolError,
)
from p4mcp.protocol.models import (
    CallToolRequest,
    ErrorResponse,
    InitializeRequest,
    ListToolsRequest,
    PingRequest,
    Request,
    Response,
    ToolDescriptor,
    decode_request,
    encode_request,
)
from p4mcp.protocol.registry import ToolRegistry, default_registry

__all__ = [
    "ArgumentValidationError",
    "CallToolRequest",
    "ErrorResponse",
    "InitializeRequest",
    "ListToolsRequest",
    "MessageDecodeError",
    "MessageDispatcher",
    "PingRequest",
    "ProtocolError",
    "Request",
    "Response",
    "ToolDescriptor",
    "ToolRegistry",
    "UnknownToolError",
    "decode_arguments",
    "decode_request",
    "default_registry",
    "encode_request",
]
