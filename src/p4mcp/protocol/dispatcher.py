"""MessageDispatcher — routes decoded requests and builds their responses.

The dispatcher holds no per-session state: only the tool registry, the
execution backend and the server identity, all fixed at construction.
Requests are handled independently and in any order (a ``tools/call``
before ``initialize`` is served like any other).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from p4mcp.p4.errors import ExecutionError, ToolFailedError
from p4mcp.protocol.arguments import decode_arguments
from p4mcp.protocol.errors import INTERNAL_ERROR, TOOL_EXECUTION_FAILED, ProtocolError, UnknownToolError
from p4mcp.protocol.models import (
    CallToolRequest,
    CallToolResponse,
    CallToolResult,
    ErrorResponse,
    InitializeRequest,
    InitializeResponse,
    InitializeResult,
    ListToolsRequest,
    ListToolsResponse,
    ListToolsResult,
    PingRequest,
    PongResponse,
    ServerCapabilities,
    ServerInfo,
    ToolsCapability,
)
from p4mcp.utils.telemetry import (
    ATTR_BACKEND,
    ATTR_ERROR_CODE,
    ATTR_METHOD,
    ATTR_REQUEST_ID,
    ATTR_TOOL_NAME,
    get_tracer,
)

if TYPE_CHECKING:
    from p4mcp.config import ServerConfig
    from p4mcp.p4.backend import P4Backend
    from p4mcp.protocol.models import Request, Response
    from p4mcp.protocol.registry import ToolRegistry

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class MessageDispatcher:
    """Turns each :data:`Request` into exactly one :data:`Response`.

    Usage::

        dispatcher = MessageDispatcher(default_registry(), MockBackend(), ServerConfig())
        response = await dispatcher.handle(request)   # never raises

    Failures map onto JSON-RPC errors:

    * unknown tool or unusable arguments: ``-32602``;
    * ``p4`` failed to start, exited non-zero or timed out: ``-32000``
      with the captured diagnostic in ``error.data.detail``;
    * anything unexpected: ``-32603``.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        backend: P4Backend,
        config: ServerConfig,
    ) -> None:
        self._registry = registry
        self._backend = backend
        self._config = config

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    @property
    def backend(self) -> P4Backend:
        return self._backend

    async def handle(self, request: Request) -> Response:
        """Dispatch *request*; failures become an :class:`ErrorResponse`."""
        with _tracer.start_as_current_span("p4mcp.request") as span:
            span.set_attribute(ATTR_METHOD, request.method)
            span.set_attribute(ATTR_REQUEST_ID, str(request.id))
            span.set_attribute(ATTR_BACKEND, type(self._backend).__name__)
            logger.debug("Handling %s (id=%r)", request.method, request.id)

            response = await self._handle(request)

            if isinstance(response, ErrorResponse):
                span.set_attribute(ATTR_ERROR_CODE, response.error.code)
            return response

    async def _handle(self, request: Request) -> Response:
        try:
            return await self._route(request)
        except ProtocolError as exc:
            logger.info("Rejected %s (id=%r): %s", request.method, request.id, exc)
            return ErrorResponse.build(request.id, exc.code, str(exc))
        except ExecutionError as exc:
            name = request.params.name if isinstance(request, CallToolRequest) else request.method
            logger.error("Tool %s failed: %s", name, exc.detail)
            return ErrorResponse.build(
                request.id,
                TOOL_EXECUTION_FAILED,
                _execution_message(name, exc),
                _error_data(exc),
            )
        except Exception as exc:
            logger.exception("Unexpected error handling %s (id=%r)", request.method, request.id)
            return ErrorResponse.build(request.id, INTERNAL_ERROR, f"Internal error: {exc}")

    async def _route(self, request: Request) -> Response:
        if isinstance(request, InitializeRequest):
            return self.initialize(request)
        if isinstance(request, ListToolsRequest):
            return ListToolsResponse(id=request.id, result=self.list_tools())
        if isinstance(request, CallToolRequest):
            result = await self.call_tool(request.params.name, request.params.arguments)
            return CallToolResponse(id=request.id, result=result)
        if isinstance(request, PingRequest):
            return PongResponse(id=request.id)
        msg = f"Unsupported request type: {type(request).__name__}"
        raise TypeError(msg)

    def initialize(self, request: InitializeRequest) -> InitializeResponse:
        """Answer the handshake with the server identity and tool capability."""
        client = request.params.client_info
        logger.info(
            "Client %s %s connected (protocol %s)",
            client.name,
            client.version,
            request.params.protocol_version,
        )
        return InitializeResponse(
            id=request.id,
            result=InitializeResult(
                protocol_version=self._config.protocol_version,
                capabilities=ServerCapabilities(tools=ToolsCapability(list_changed=False)),
                server_info=ServerInfo(
                    name=self._config.server_name,
                    version=self._config.server_version,
                ),
            ),
        )

    def list_tools(self) -> ListToolsResult:
        return ListToolsResult(tools=self._registry.all_tools())

    async def call_tool(self, name: str, arguments: Any) -> CallToolResult:
        """Decode *arguments*, run the command and wrap its text output.

        Raises:
            UnknownToolError: If *name* is not in the registry.
            ArgumentValidationError: If *arguments* cannot describe a command.
            ExecutionError: If the backend fails.
        """
        if not self._registry.contains(name):
            raise UnknownToolError(name)

        command = decode_arguments(name, arguments)

        with _tracer.start_as_current_span("p4mcp.tool.call") as span:
            span.set_attribute(ATTR_TOOL_NAME, name)
            text = await self._backend.execute(command)

        return CallToolResult.from_text(text)


def _error_data(exc: ExecutionError) -> dict[str, Any]:
    data: dict[str, Any] = {"detail": exc.detail}
    if isinstance(exc, ToolFailedError):
        data["exitCode"] = exc.exit_code
    return data


def _execution_message(name: str, exc: ExecutionError) -> str:
    message = f"Tool execution failed: {name}"
    return f"{message}: {exc.detail}" if exc.detail else message
