"""MCP server factory.

Builds the read-only engine surface: sync preview, ad type catalogue
lookups and template inspection.
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from ...config.runtime import get_settings
from .tools import register_engine_tools


def create_server(name: str | None = None) -> FastMCP:
    """Build and return a configured FastMCP server.

    Args:
        name: Advertised server name; defaults to ``MCP_SERVER_NAME``.

    Returns:
        A FastMCP instance with the engine tools registered.
    """
    server = FastMCP(name or get_settings().mcp_server_name)
    register_engine_tools(server)
    return server


if __name__ == "__main__":
    server = create_server()
    server.run(transport="stdio")
