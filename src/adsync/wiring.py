"""Composition root: the single place where the engine is assembled.

Call ``build_registry()`` once per process and pass it on, or let
``build_sync_preview_service()`` build one. No ad-hoc construction elsewhere.
"""

from __future__ import annotations

import logging

from .config.runtime import RuntimeSettings, get_settings
from .domain.classifier import AdClassifier
from .domain.platform_limits import PlatformConstraintResolver
from .domain.registry import AdTypeRegistry
from .domain.variable_engine import VariableEngine
from .services.sync_preview_service import SyncPreviewService


def build_registry(reset: bool = False) -> AdTypeRegistry:
    """Construct a registry holding the built-in ad type catalogue."""
    return AdTypeRegistry().initialize(reset=reset)


def build_sync_preview_service(
    settings: RuntimeSettings | None = None,
    registry: AdTypeRegistry | None = None,
) -> SyncPreviewService:
    """Construct a SyncPreviewService configured from settings."""
    settings = settings or get_settings()
    registry = registry or build_registry()
    resolver = PlatformConstraintResolver()
    engine = VariableEngine(
        max_template_length=settings.max_template_length,
        max_variables=settings.max_template_variables,
    )
    classifier = AdClassifier(
        registry,
        resolver=resolver,
        engine=engine,
        url_schemes=settings.strict_url_schemes,
    )
    return SyncPreviewService(
        registry,
        classifier=classifier,
        resolver=resolver,
        skip_rate_threshold=settings.skip_rate_warning_threshold,
        default_platforms=settings.default_platforms,
        logger=logging.getLogger("adsync.preview"),
    )
