"""Validation services for actionlint-mcp."""
