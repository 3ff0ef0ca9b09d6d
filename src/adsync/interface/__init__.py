"""Outer surfaces: CLI and MCP server."""
