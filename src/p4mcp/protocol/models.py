"""Wire models — MCP requests, responses and tool descriptors.

Frames are newline-delimited JSON objects.  Requests are tagged by their
``method`` field; responses are distinguished by which of ``result`` and
``error`` they carry.  The correlation ``id`` may be a string or an integer
and is echoed back with its JSON type unchanged.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, StrictInt, StrictStr, TypeAdapter, ValidationError

from p4mcp.protocol.errors import MessageDecodeError

RequestId = StrictInt | StrictStr

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class RootsCapability(BaseModel):
    model_config = {"populate_by_name": True}

    list_changed: bool = Field(default=False, alias="listChanged")


class ClientCapabilities(BaseModel):
    roots: RootsCapability | None = None
    sampling: dict[str, Any] | None = None


class ClientInfo(BaseModel):
    name: str
    version: str


class InitializeParams(BaseModel):
    model_config = {"populate_by_name": True}

    protocol_version: str = Field(alias="protocolVersion")
    capabilities: ClientCapabilities = Field(default_factory=ClientCapabilities)
    client_info: ClientInfo = Field(alias="clientInfo")


class CallToolParams(BaseModel):
    name: str
    # Left untyped here; per-tool decoders in p4mcp.protocol.arguments do the coercion.
    arguments: Any = Field(default_factory=dict)


class _Request(BaseModel):
    model_config = {"frozen": True}

    id: RequestId


class InitializeRequest(_Request):
    method: Literal["initialize"] = "initialize"
    params: InitializeParams


class ListToolsRequest(_Request):
    method: Literal["tools/list"] = "tools/list"


class CallToolRequest(_Request):
    method: Literal["tools/call"] = "tools/call"
    params: CallToolParams


class PingRequest(_Request):
    method: Literal["ping"] = "ping"


Request = Annotated[
    InitializeRequest | ListToolsRequest | CallToolRequest | PingRequest,
    Field(discriminator="method"),
]

_REQUEST_ADAPTER: TypeAdapter[Request] = TypeAdapter(Request)


def decode_request(frame: str | bytes) -> Request:
    """Parse one frame into a request.

    Raises:
        MessageDecodeError: If the frame is not JSON or not a known request.
    """
    try:
        return _REQUEST_ADAPTER.validate_json(frame)
    except ValidationError as exc:
        raise MessageDecodeError(_summarize(exc)) from exc


def encode_request(request: Request) -> str:
    """Serialize *request* as a single-line JSON frame (without newline)."""
    return request.model_dump_json(by_alias=True, exclude_none=True)


def _summarize(exc: ValidationError) -> str:
    errors = exc.errors(include_url=False)
    if not errors:
        return str(exc)
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    return f"{loc}: {first.get('msg', '')}" if loc else str(first.get("msg", ""))


# ---------------------------------------------------------------------------
# Tool descriptors and content
# ---------------------------------------------------------------------------


class ToolDescriptor(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = {"populate_by_name": True, "frozen": True}

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ImageContent(BaseModel):
    model_config = {"populate_by_name": True}

    type: Literal["image"] = "image"
    data: str
    mime_type: str = Field(alias="mimeType")


ToolContent = Annotated[TextContent | ImageContent, Field(discriminator="type")]

# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class ToolsCapability(BaseModel):
    model_config = {"populate_by_name": True}

    list_changed: bool = Field(default=False, alias="listChanged")


class PromptsCapability(BaseModel):
    model_config = {"populate_by_name": True}

    list_changed: bool = Field(default=False, alias="listChanged")


class ResourcesCapability(BaseModel):
    model_config = {"populate_by_name": True}

    subscribe: bool = False
    list_changed: bool = Field(default=False, alias="listChanged")


class ServerCapabilities(BaseModel):
    """Capabilities advertised on initialize; unset slots are omitted."""

    logging: dict[str, Any] | None = None
    prompts: PromptsCapability | None = None
    resources: ResourcesCapability | None = None
    tools: ToolsCapability | None = None


class ServerInfo(BaseModel):
    name: str
    version: str


class InitializeResult(BaseModel):
    model_config = {"populate_by_name": True}

    protocol_version: str = Field(alias="protocolVersion")
    capabilities: ServerCapabilities
    server_info: ServerInfo = Field(alias="serverInfo")


class ListToolsResult(BaseModel):
    tools: list[ToolDescriptor]


class CallToolResult(BaseModel):
    content: list[ToolContent]

    @classmethod
    def from_text(cls, text: str) -> CallToolResult:
        return cls(content=[TextContent(text=text)])


class ErrorObject(BaseModel):
    """A JSON-RPC error object."""

    code: int
    message: str
    data: Any = None


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class _Response(BaseModel):
    jsonrpc: str = "2.0"
    id: RequestId

    def to_json(self) -> str:
        """Serialize as a single-line JSON frame (without newline)."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


class InitializeResponse(_Response):
    result: InitializeResult


class ListToolsResponse(_Response):
    result: ListToolsResult


class CallToolResponse(_Response):
    result: CallToolResult


class PongResponse(_Response):
    pass


class ErrorResponse(_Response):
    error: ErrorObject

    @classmethod
    def build(cls, request_id: int | str, code: int, message: str, data: Any = None) -> ErrorResponse:
        return cls(id=request_id, error=ErrorObject(code=code, message=message, data=data))


Response = InitializeResponse | ListToolsResponse | CallToolResponse | PongResponse | ErrorResponse
