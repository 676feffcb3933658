"""Tool-call dispatcher between the MCP server and the Replicate client.

Role in pipeline:
    - Receives a tool name and raw argument mapping from the transport.
    - Validates the tool name and its single required argument.
    - Calls the matching `ReplicateClient` operation exactly once.
    - Wraps the decoded response as one pretty-printed JSON text block.

Error handling strategy:
    - Unknown tool -> `UnknownToolError` (surfaced as method-not-found).
    - Missing/empty required argument -> `InvalidInputError`, no network call.
    - `ToolError` from the client propagates unchanged.
    - Any other exception is wrapped once as `InternalToolError`.

Determinism:
    Routing and validation are deterministic; the payload content is whatever
    Replicate returned.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

from mcp.types import TextContent

from flux_mcp.core.errors import (
    InternalToolError,
    InvalidInputError,
    ToolError,
    UnknownToolError,
)
from flux_mcp.image.client import ReplicateClient
from flux_mcp.tools.registry import GENERATE_IMAGE_TOOL, GET_GENERATED_IMAGE_TOOL


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolRoute:
    """Binding of a tool name to its required argument and client operation."""

    argument: str
    missing_message: str
    operation: str


ROUTES = {
    GENERATE_IMAGE_TOOL: ToolRoute(
        argument="prompt",
        missing_message="Prompt is required",
        operation="submit",
    ),
    GET_GENERATED_IMAGE_TOOL: ToolRoute(
        argument="prediction_id",
        missing_message="Prediction ID is required",
        operation="fetch_status",
    ),
}


def _required_argument(arguments: dict[str, Any] | None, route: ToolRoute) -> str:
    value = (arguments or {}).get(route.argument)
    if value is None:
        raise InvalidInputError(route.missing_message)

    text = str(value)
    if not text:
        raise InvalidInputError(route.missing_message)
    return text


def format_result(result: Any) -> list[TextContent]:
    """Wrap a decoded API response as a single JSON text content block."""
    return [TextContent(type="text", text=json.dumps(result, indent=2))]


def dispatch_tool_call(
    client: ReplicateClient,
    name: str,
    arguments: dict[str, Any] | None,
) -> list[TextContent]:
    """Validate and execute one tool call.

    Args:
        client: Configured Replicate client.
        name: Tool name from the call request.
        arguments: Raw argument mapping, possibly `None`.

    Returns:
        Text content list carrying the JSON-serialized Replicate response.

    Raises:
        ToolError: normalized failure for the caller.
    """
    route = ROUTES.get(name)
    if route is None:
        raise UnknownToolError(f"Unknown tool: {name}")

    value = _required_argument(arguments, route)

    try:
        result = getattr(client, route.operation)(value)
    except ToolError:
        raise
    except Exception as exc:
        logger.exception("Tool %s failed unexpectedly", name)
        raise InternalToolError(str(exc)) from exc

    return format_result(result)
