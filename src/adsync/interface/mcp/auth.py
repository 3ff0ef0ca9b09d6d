"""MCP auth: gate the engine tools behind MCP_ENGINE_KEY when configured."""

from __future__ import annotations

import os

from ...config.runtime import get_settings


def require_engine_scope() -> None:
    """Raise PermissionError when a key is required but not present."""
    settings = get_settings()
    if not settings.require_engine_key:
        return
    if not (os.environ.get("MCP_ENGINE_KEY") or os.environ.get("MCP_DATA_KEY")):
        raise PermissionError("Engine requires MCP_ENGINE_KEY to be set")
