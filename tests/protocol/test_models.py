"""Tests for request decoding and response encoding."""

import json

import pytest

from p4mcp.protocol.errors import MessageDecodeError
from p4mcp.protocol.models import (
    CallToolRequest,
    CallToolResponse,
    CallToolResult,
    ErrorResponse,
    ImageContent,
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
    TextContent,
    ToolDescriptor,
    ToolsCapability,
    decode_request,
    encode_request,
)

INITIALIZE = (
    '{"method":"initialize","id":"1","params":{"protocolVersion":"2024-11-05",'
    '"capabilities":{},"clientInfo":{"name":"x","version":"1"}}}'
)


class TestDecodeRequest:
    def test_initialize(self) -> None:
        req = decode_request(INITIALIZE)
        assert isinstance(req, InitializeRequest)
        assert req.id == "1"
        assert req.params.protocol_version == "2024-11-05"
        assert req.params.client_info.name == "x"
        assert req.params.client_info.version == "1"

    def test_initialize_with_client_capabilities(self) -> None:
        req = decode_request(
            '{"jsonrpc":"2.0","method":"initialize","id":1,"params":{"protocolVersion":"2024-11-05",'
            '"capabilities":{"roots":{"listChanged":true},"sampling":{}},'
            '"clientInfo":{"name":"test","version":"1.0"}}}'
        )
        assert isinstance(req, InitializeRequest)
        assert req.params.capabilities.roots is not None
        assert req.params.capabilities.roots.list_changed is True
        assert req.params.capabilities.sampling == {}

    def test_list_tools(self) -> None:
        req = decode_request('{"method":"tools/list","id":2}')
        assert isinstance(req, ListToolsRequest)
        assert req.id == 2

    def test_call_tool(self) -> None:
        req = decode_request(
            '{"method":"tools/call","id":"3","params":{"name":"p4_status",'
            '"arguments":{"path":"//depot/main/..."}}}'
        )
        assert isinstance(req, CallToolRequest)
        assert req.params.name == "p4_status"
        assert req.params.arguments["path"] == "//depot/main/..."

    def test_call_tool_without_arguments(self) -> None:
        req = decode_request('{"method":"tools/call","id":"3","params":{"name":"p4_info"}}')
        assert isinstance(req, CallToolRequest)
        assert req.params.arguments == {}

    def test_ping(self) -> None:
        req = decode_request(b'{"method":"ping","id":"ping-test"}\n')
        assert isinstance(req, PingRequest)
        assert req.id == "ping-test"

    def test_id_type_is_preserved(self) -> None:
        assert decode_request('{"method":"ping","id":7}').id == 7
        assert decode_request('{"method":"ping","id":"7"}').id == "7"

    @pytest.mark.parametrize(
        "frame",
        [
            "not json at all",
            "{invalid json}",
            "[]",
            '{"method":"unknown","id":"1"}',
            '{"method":"ping"}',
            '{"method":"ping","id":true}',
            '{"method":"ping","id":1.5}',
            '{"method":"initialize","id":"1"}',
            '{"method":"tools/call","id":"1","params":{}}',
            '{"id":"1"}',
        ],
    )
    def test_malformed_frames(self, frame: str) -> None:
        with pytest.raises(MessageDecodeError):
            decode_request(frame)


class TestRequestRoundTrip:
    @pytest.mark.parametrize(
        "frame",
        [
            INITIALIZE,
            '{"method":"tools/list","id":2}',
            '{"method":"tools/call","id":"abc","params":{"name":"p4_sync",'
            '"arguments":{"path":"//depot/...","force":true,"files":["a","b"],"max":3}}}',
            '{"method":"ping","id":0}',
        ],
    )
    def test_encode_then_decode(self, frame: str) -> None:
        original = decode_request(frame)
        again = decode_request(encode_request(original))
        assert again == original
        assert json.loads(encode_request(again))["method"] == original.method


class TestResponseEncoding:
    def test_initialize_result(self) -> None:
        resp = InitializeResponse(
            id="1",
            result=InitializeResult(
                protocol_version="2024-11-05",
                capabilities=ServerCapabilities(tools=ToolsCapability()),
                server_info=ServerInfo(name="p4-mcp", version="0.1.0"),
            ),
        )
        data = json.loads(resp.to_json())
        assert data["id"] == "1"
        assert data["result"]["protocolVersion"] == "2024-11-05"
        assert data["result"]["capabilities"] == {"tools": {"listChanged": False}}
        assert data["result"]["serverInfo"] == {"name": "p4-mcp", "version": "0.1.0"}

    def test_list_tools_result(self) -> None:
        resp = ListToolsResponse(
            id=2,
            result=ListToolsResult(
                tools=[
                    ToolDescriptor(name="p4_status", description="s", input_schema={"type": "object"}),
                    ToolDescriptor(name="p4_sync", description="y"),
                ]
            ),
        )
        data = json.loads(resp.to_json())
        assert data["id"] == 2
        assert [t["name"] for t in data["result"]["tools"]] == ["p4_status", "p4_sync"]
        assert data["result"]["tools"][0]["inputSchema"] == {"type": "object"}

    def test_call_tool_result(self) -> None:
        resp = CallToolResponse(id=3, result=CallToolResult.from_text("Mock P4 Status"))
        data = json.loads(resp.to_json())
        assert data["result"]["content"] == [{"type": "text", "text": "Mock P4 Status"}]

    def test_image_content(self) -> None:
        resp = CallToolResponse(
            id=3,
            result=CallToolResult(content=[ImageContent(data="base64-data", mime_type="image/png")]),
        )
        block = json.loads(resp.to_json())["result"]["content"][0]
        assert block == {"type": "image", "data": "base64-data", "mimeType": "image/png"}

    def test_mixed_content_validates(self) -> None:
        result = CallToolResult.model_validate(
            {"content": [{"type": "text", "text": "t"}, {"type": "image", "data": "d", "mimeType": "m"}]}
        )
        assert isinstance(result.content[0], TextContent)
        assert isinstance(result.content[1], ImageContent)

    def test_error(self) -> None:
        resp = ErrorResponse.build(123, -32602, "Invalid params", {"field": "path"})
        data = json.loads(resp.to_json())
        assert data["id"] == 123
        assert data["error"] == {"code": -32602, "message": "Invalid params", "data": {"field": "path"}}

    def test_error_without_data(self) -> None:
        data = json.loads(ErrorResponse.build("x", -32602, "nope").to_json())
        assert "data" not in data["error"]

    def test_pong(self) -> None:
        data = json.loads(PongResponse(id=456).to_json())
        assert data == {"jsonrpc": "2.0", "id": 456}
        assert "result" not in data
        assert "error" not in data

    def test_frame_is_single_line(self) -> None:
        resp = CallToolResponse(id=1, result=CallToolResult.from_text("line1\nline2"))
        assert "\n" not in resp.to_json()

    def test_server_capabilities_default_is_empty(self) -> None:
        caps = ServerCapabilities()
        assert caps.logging is None
        assert caps.prompts is None
        assert caps.resources is None
        assert caps.tools is None
