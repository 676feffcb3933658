"""Normalized tool error types.

Every failure a tool call can produce is one of these exceptions. The MCP
server layer maps `error_code` onto the JSON-RPC error returned to the caller.

Kinds:
    - `invalid-input`: missing arguments or unknown tool name (caller fault).
    - `remote-failure`: Replicate rejected or failed the request.
    - `internal`: anything else, stringified.
"""

from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND


INVALID_INPUT = "invalid-input"
REMOTE_FAILURE = "remote-failure"
INTERNAL = "internal"


class ToolError(Exception):
    """Base class for normalized tool failures."""

    kind = INTERNAL
    error_code = INTERNAL_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(ToolError):
    """A required argument is missing or empty."""

    kind = INVALID_INPUT
    error_code = INVALID_PARAMS


class UnknownToolError(InvalidInputError):
    """The requested tool name is not registered."""

    error_code = METHOD_NOT_FOUND


class RemoteFailureError(ToolError):
    """The Replicate API call failed at the transport or HTTP level."""

    kind = REMOTE_FAILURE
    error_code = INTERNAL_ERROR


class InternalToolError(ToolError):
    """Unexpected failure while handling a tool call."""
