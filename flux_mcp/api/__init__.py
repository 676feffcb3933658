"""MCP transport adapter package.

Architectural role:
- Defines the external interaction boundary (MCP over stdio).
- Converts normalized tool errors into protocol errors.
- Delegates validation and routing to `flux_mcp.core.dispatch`.
"""
