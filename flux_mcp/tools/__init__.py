"""Tool descriptor package advertised to MCP clients."""
