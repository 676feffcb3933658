"""MCP stdio adapter and process bootstrap for the Flux Schnell server.

Architectural role:
- Advertise the static tool registry over `tools/list`.
- Route `tools/call` requests through `flux_mcp.core.dispatch`.
- Convert normalized tool errors into structured JSON-RPC errors.
- Own process startup: configuration, logging, transport lifetime.

Request lifecycle (`tools/call`):
1. Transport delivers a `CallToolRequest` (tool name + argument mapping).
2. Dispatch validates the name and required argument.
3. One Replicate HTTP call is made through `ReplicateClient`.
4. The JSON response is returned as a text content block, or the
   `ToolError` is raised as `McpError` with its categorical code.

Startup behavior:
- Missing `REPLICATE_API_TOKEN` is fatal: the error is logged and the process
  exits with status 1 before the stdio transport is opened.
- Readiness and fatal error lines go to stderr; stdout carries only the
  protocol stream.

Concurrency:
- The Replicate call blocks inside the handler, so calls are processed one at
  a time on the event loop.
"""

import argparse
import asyncio
import logging
import os
import sys

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from flux_mcp.config.provider_config import ConfigError, ReplicateConfig, load_config
from flux_mcp.core.dispatch import dispatch_tool_call
from flux_mcp.core.errors import ToolError
from flux_mcp.image.client import ReplicateClient
from flux_mcp.tools import registry


logger = logging.getLogger(__name__)
# Readiness and fatal lines; never filtered by --log-level.
status_logger = logging.getLogger("flux_mcp.status")

SERVER_NAME = "flux-schnell-server"
SERVER_VERSION = "0.1.1"
READY_MESSAGE = "Flux Schnell MCP server running on stdio"


def build_server(client: ReplicateClient) -> Server:
    """Create the MCP server with tool listing and tool-call handlers bound.

    Args:
        client: Replicate client shared by every tool call.

    Returns:
        Configured low-level `Server`, ready for `run`.
    """
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return registry.list_tools()

    async def handle_call_tool(req: types.CallToolRequest) -> types.ServerResult:
        # Registered directly so tool failures surface as JSON-RPC errors
        # rather than `isError` results.
        try:
            content = dispatch_tool_call(client, req.params.name, req.params.arguments)
        except ToolError as err:
            raise McpError(types.ErrorData(code=err.error_code, message=err.message)) from err

        return types.ServerResult(types.CallToolResult(content=content, isError=False))

    server.request_handlers[types.CallToolRequest] = handle_call_tool
    return server


async def serve(config: ReplicateConfig) -> None:
    """Run the MCP server on stdio until the channel closes."""
    server = build_server(ReplicateClient(config))

    async with stdio_server() as (read_stream, write_stream):
        status_logger.info(READY_MESSAGE)
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    status_logger.handlers[:] = [handler]
    status_logger.setLevel(logging.INFO)
    status_logger.propagate = False


def main(argv=None) -> int:
    """CLI entrypoint.

    Returns:
        Process exit status: 0 after a clean shutdown, 1 on a fatal error.
    """
    parser = argparse.ArgumentParser(
        prog="flux-schnell-mcp",
        description="MCP server for Flux Schnell image generation on Replicate",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "INFO"),
        help="DEBUG | INFO | WARNING | ERROR (default: $LOG_LEVEL or INFO)",
    )
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    try:
        config = load_config()
    except ConfigError as err:
        status_logger.error("Server error: %s", err)
        return 1

    try:
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        return 0
    except Exception as err:
        status_logger.error("Server error: %s", err)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
