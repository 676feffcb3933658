"""
tests/test_server.py

Tests for the MCP server wiring and process bootstrap.

Verifies:
✔ tools/list returns the two registered tools
✔ tools/call success returns the Replicate JSON as text content
✔ Remote failures surface as JSON-RPC internal errors with remote detail
✔ Missing arguments surface as invalid-params without network calls
✔ Unknown tools surface as method-not-found
✔ Missing credential exits 1 before the stdio transport is opened
✔ Readiness and fatal lines reach stderr at any log level; stdout stays clean
"""

import json
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import mcp.types as types
import pytest
import requests
from mcp.shared.exceptions import McpError

from flux_mcp.api import server as server_module
from flux_mcp.api.server import READY_MESSAGE, build_server, main


# ─────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────


def make_call(name, arguments=None):
    return types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name=name, arguments=arguments),
    )


def make_response(body, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status_code} Client Error", response=response
        )
    return response


async def call_tool(server, name, arguments=None):
    handler = server.request_handlers[types.CallToolRequest]
    return await handler(make_call(name, arguments))


# ─────────────────────────────────────────────────────
# tools/list
# ─────────────────────────────────────────────────────


class TestListTools:
    @pytest.mark.asyncio
    async def test_lists_registered_tools(self, client):
        server = build_server(client)
        handler = server.request_handlers[types.ListToolsRequest]

        result = await handler(types.ListToolsRequest(method="tools/list"))

        names = [tool.name for tool in result.root.tools]
        assert names == [
            "generate_image_via_flux_schnell",
            "get_generated_image_via_flux_schnell",
        ]


# ─────────────────────────────────────────────────────
# tools/call
# ─────────────────────────────────────────────────────


class TestCallTool:
    @pytest.mark.asyncio
    async def test_generate_returns_remote_json(self, client):
        server = build_server(client)
        body = {"id": "abc123", "status": "starting"}

        with patch("flux_mcp.image.client.requests.post", return_value=make_response(body)) as post:
            result = await call_tool(
                server, "generate_image_via_flux_schnell", {"prompt": "a red fox in snow"}
            )

        post.assert_called_once()
        call_result = result.root
        assert call_result.isError is False
        assert len(call_result.content) == 1
        assert json.loads(call_result.content[0].text) == body

    @pytest.mark.asyncio
    async def test_status_returns_remote_json(self, client):
        server = build_server(client)
        body = {"id": "abc123", "status": "succeeded", "output": ["https://x/out.webp"]}

        with patch("flux_mcp.image.client.requests.get", return_value=make_response(body)) as get:
            result = await call_tool(
                server, "get_generated_image_via_flux_schnell", {"prediction_id": "abc123"}
            )

        assert get.call_args.args[0].endswith("/predictions/abc123")
        assert json.loads(result.root.content[0].text) == body

    @pytest.mark.asyncio
    async def test_remote_failure_is_internal_error(self, client):
        server = build_server(client)
        response = make_response({"detail": "insufficient credit"}, status_code=402)

        with patch("flux_mcp.image.client.requests.post", return_value=response):
            with pytest.raises(McpError) as exc_info:
                await call_tool(server, "generate_image_via_flux_schnell", {"prompt": "fox"})

        assert exc_info.value.error.code == types.INTERNAL_ERROR
        assert exc_info.value.error.message == "Replicate API error: insufficient credit"

    @pytest.mark.asyncio
    async def test_missing_argument_is_invalid_params(self, client):
        server = build_server(client)

        with patch("flux_mcp.image.client.requests.post") as post:
            with pytest.raises(McpError) as exc_info:
                await call_tool(server, "generate_image_via_flux_schnell", {})

        post.assert_not_called()
        assert exc_info.value.error.code == types.INVALID_PARAMS
        assert exc_info.value.error.message == "Prompt is required"

    @pytest.mark.asyncio
    async def test_unknown_tool_is_method_not_found(self, client):
        server = build_server(client)

        with patch("flux_mcp.image.client.requests.post") as post, patch(
            "flux_mcp.image.client.requests.get"
        ) as get:
            with pytest.raises(McpError) as exc_info:
                await call_tool(server, "upscale_image", {"prompt": "fox"})

        post.assert_not_called()
        get.assert_not_called()
        assert exc_info.value.error.code == types.METHOD_NOT_FOUND
        assert exc_info.value.error.message == "Unknown tool: upscale_image"


# ─────────────────────────────────────────────────────
# Bootstrap
# ─────────────────────────────────────────────────────


class TestMain:
    def test_missing_token_exits_before_transport(self, monkeypatch):
        monkeypatch.delenv("REPLICATE_API_TOKEN", raising=False)

        with patch.object(server_module, "stdio_server") as stdio:
            assert main([]) == 1

        stdio.assert_not_called()

    def test_fatal_runtime_error_exits_nonzero(self, monkeypatch):
        monkeypatch.setenv("REPLICATE_API_TOKEN", "test-token")

        with patch.object(server_module, "serve", side_effect=RuntimeError("stdio closed")):
            assert main([]) == 1

    def test_missing_token_error_line_survives_critical_level(self, monkeypatch, capsys):
        monkeypatch.delenv("REPLICATE_API_TOKEN", raising=False)

        with patch.object(server_module, "stdio_server"):
            assert main(["--log-level", "CRITICAL"]) == 1

        captured = capsys.readouterr()
        assert "Server error: REPLICATE_API_TOKEN environment variable is required" in captured.err
        assert captured.out == ""

    @pytest.mark.parametrize("level", ["INFO", "WARNING", "CRITICAL"])
    def test_readiness_line_on_stderr_only(self, monkeypatch, capsys, level):
        monkeypatch.setenv("REPLICATE_API_TOKEN", "test-token")

        @asynccontextmanager
        async def fake_stdio_server():
            yield MagicMock(), MagicMock()

        with patch.object(server_module, "stdio_server", fake_stdio_server), patch.object(
            server_module.Server, "run", new=AsyncMock(return_value=None)
        ):
            assert main(["--log-level", level]) == 0

        captured = capsys.readouterr()
        assert READY_MESSAGE in captured.err
        assert captured.out == ""
