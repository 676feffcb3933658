"""Static registry of the tools advertised over MCP.

The descriptors are built once at import time and returned unchanged on every
`tools/list` request. Descriptions spell out the full prediction status
vocabulary so callers can interpret results without external documentation.
"""

from mcp.types import Tool


GENERATE_IMAGE_TOOL = "generate_image_via_flux_schnell"
GET_GENERATED_IMAGE_TOOL = "get_generated_image_via_flux_schnell"


TOOLS = (
    Tool(
        name=GENERATE_IMAGE_TOOL,
        description=(
            "Generate an image using the Flux Schnell model. The generation process may "
            "take time and follow these status states: 'starting' (initialization), "
            "'processing' (generating), 'succeeded' (complete), 'failed' (error), or "
            "'canceled'. The response includes a prediction ID that can be used to check "
            "status later, along with status information and image URLs when successful. "
            "For longer generations, you may receive a 'starting' status and need to use "
            f"{GET_GENERATED_IMAGE_TOOL} to retrieve the final result."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "prompt": {
                    "type": "string",
                    "description": (
                        "Text prompt for image generation. Be descriptive about the scene, "
                        "style, colors, and any specific elements you want in the image."
                    ),
                },
            },
            "required": ["prompt"],
        },
    ),
    Tool(
        name=GET_GENERATED_IMAGE_TOOL,
        description=(
            "Retrieve the status and results of a previously submitted Flux Schnell image "
            "generation job using its prediction ID. Status may be 'starting', "
            "'processing', 'succeeded', 'failed', or 'canceled'. For completed jobs, the "
            "response will include the image URL."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "prediction_id": {
                    "type": "string",
                    "description": (
                        f"The prediction ID returned from a previous {GENERATE_IMAGE_TOOL} call"
                    ),
                },
            },
            "required": ["prediction_id"],
        },
    ),
)

_TOOLS_BY_NAME = {tool.name: tool for tool in TOOLS}


def list_tools() -> list[Tool]:
    """Return the advertised tool descriptors in registration order."""
    return list(TOOLS)


def get_tool(name: str) -> Tool | None:
    return _TOOLS_BY_NAME.get(name)
