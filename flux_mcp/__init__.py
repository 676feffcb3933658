"""Flux Schnell MCP server.

Exposes Replicate's Flux Schnell text-to-image model as two MCP tools over
stdio: one to start a prediction and one to poll it.
"""

__version__ = "0.1.1"
