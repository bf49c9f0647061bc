"""MCP server for actionlint-mcp."""
