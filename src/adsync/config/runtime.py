"""Pydantic-based runtime settings for the sync-preview engine.

Loads from environment variables (with optional .env file).
Invalid values fail fast on first access.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings


class RuntimeSettings(BaseSettings):
    """All configuration for the classification engine and its surfaces."""

    model_config = {"env_prefix": "", "env_file": ".env", "env_file_encoding": "utf-8"}

    # --- Classification policy ---
    skip_rate_warning_threshold: float = Field(
        default=20.0,
        ge=0.0,
        le=100.0,
        validation_alias=AliasChoices("SKIP_RATE_WARNING_THRESHOLD", "SKIP_RATE_THRESHOLD"),
        description="Skip rate (percent) above which the preview emits a warning",
    )
    default_platforms: list[str] = Field(
        default_factory=lambda: ["google"],
        description="Platforms assumed when a request selects none",
    )

    # --- Templates ---
    max_template_length: int = Field(
        default=50_000,
        ge=1,
        description="Templates longer than this are refused and block their ad",
    )
    max_template_variables: int = Field(
        default=100,
        ge=1,
        description="Templates with more distinct placeholders than this are refused",
    )

    # --- URL validation ---
    strict_url_schemes: list[str] = Field(
        default_factory=lambda: ["http", "https"],
        description="Schemes accepted by url fields",
    )

    # --- Logging ---
    log_level: str = Field(default="INFO", description="Root log level for CLI and MCP server")

    # --- MCP ---
    mcp_server_name: str = Field(default="adsync-engine", description="Name advertised by the MCP server")
    require_engine_key: bool = Field(
        default=False,
        validation_alias=AliasChoices("REQUIRE_ENGINE_KEY", "REQUIRE_DATA_KEY"),
        description="If True, MCP tools require MCP_ENGINE_KEY env",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"log_level must be a standard logging level, got {v!r}")
        return level

    @field_validator("strict_url_schemes", "default_platforms")
    @classmethod
    def _lowercase(cls, v: list[str]) -> list[str]:
        return [item.strip().lower() for item in v if item.strip()]


@lru_cache(maxsize=1)
def get_settings() -> RuntimeSettings:
    """Return the singleton RuntimeSettings (cached after first call)."""
    return RuntimeSettings()
