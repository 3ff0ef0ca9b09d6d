"""Engine entrypoint.

Starts the MCP engine server over stdio. Imports nothing from the CLI so it
can serve as a minimal container entrypoint.

Usage:
    python -m adsync.interface.mcp_engine
    # or via the script entrypoint:
    adsync-engine
"""

from __future__ import annotations

from ..config.runtime import get_settings
from .mcp.auth import require_engine_scope
from .mcp.server import create_server
from .observability import configure_logging


def main() -> None:
    configure_logging(get_settings().log_level)
    require_engine_scope()
    server = create_server()
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
