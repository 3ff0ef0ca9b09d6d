"""Observability: structured tool/command logs and an in-process call counter.

Every MCP tool call and CLI command goes through ``log_tool_invocation`` or
``log_command`` so one log query covers both surfaces.
"""

from __future__ import annotations

import logging
from typing import Any

_LOGGER = logging.getLogger("adsync.interface")

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# tool_calls[name] = count, errors[name] = count, commands[name] = count
METRICS: dict[str, dict[str, int]] = {"tool_calls": {}, "errors": {}, "commands": {}}


def configure_logging(level: str = "INFO") -> None:
    """Root logging setup for the CLI and the MCP server process."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=_LOG_FORMAT)


def _bump(counter: str, name: str) -> None:
    METRICS[counter][name] = METRICS[counter].get(name, 0) + 1


def log_tool_invocation(
    tool: str,
    trace_id: str | None,
    latency_ms: float,
    error: str | None = None,
    extra: dict[str, Any] | None = None,
) -> None:
    """Log one MCP tool call; ``trace_id`` is the request cache key prefix when known."""
    payload: dict[str, Any] = {"tool": tool, "trace_id": trace_id, "latency_ms": round(latency_ms, 2)}
    if extra:
        payload.update(extra)
    _bump("tool_calls", tool)
    if error:
        payload["error"] = error
        _bump("errors", tool)
        _LOGGER.warning("tool_invocation_failed", extra=payload)
        return
    _LOGGER.info("tool_invocation", extra=payload)


def log_command(command: str, exit_code: int, latency_ms: float, **fields: Any) -> None:
    """Log one CLI command with its exit code."""
    _bump("commands", command)
    if exit_code == 1:
        _bump("errors", command)
    _LOGGER.info(
        "cli_command",
        extra={"command": command, "exit_code": exit_code, "latency_ms": round(latency_ms, 2), **fields},
    )


def metrics_snapshot() -> dict[str, dict[str, int]]:
    """Copy of the current counters."""
    return {k: dict(v) for k, v in METRICS.items()}


def reset_metrics() -> None:
    for counter in METRICS.values():
        counter.clear()
