"""Tool registry for the MCP engine server.

Strict input parsing via Pydantic; response allowlists (field-level).
All tools are read-only.
"""

from __future__ import annotations

import json
import time
from functools import lru_cache
from typing import Any

from pydantic import ValidationError

from ...domain.field_validator import validate_ad_type
from ...domain.registry import AdTypeRegistry
from ...domain.variable_engine import VariableEngine, is_templated
from ...models.hierarchy import SyncPreviewRequest
from ..observability import log_tool_invocation
from .auth import require_engine_scope

# ---------------------------------------------------------------------------
# Response allowlists (field-level)
# ---------------------------------------------------------------------------
ALLOWED_PREVIEW_KEYS = frozenset({
    "campaignSetId",
    "totalAds",
    "breakdown",
    "validAds",
    "fallbackAds",
    "skippedAds",
    "canProceed",
    "warnings",
    "validationTimeMs",
})
ALLOWED_AD_TYPE_SUMMARY_KEYS = frozenset({
    "id", "platform", "name", "description", "category", "icon",
})
ALLOWED_AD_TYPE_KEYS = frozenset({
    "id",
    "platform",
    "name",
    "description",
    "category",
    "icon",
    "fields",
    "creatives",
    "constraints",
    "features",
})
ALLOWED_VALIDATION_KEYS = frozenset({"valid", "errors", "warnings"})
ALLOWED_TEMPLATE_KEYS = frozenset({
    "template", "variables", "data_variables", "unknown_variables", "templated",
})

ENGINE_ALLOWED_TOOLS = frozenset({
    "sync_preview",
    "ad_types_list",
    "ad_types_get",
    "ad_types_validate",
    "template_variables",
})


def _shape(d: dict, allowed: frozenset[str]) -> dict:
    return {k: v for k, v in d.items() if k in allowed}


@lru_cache(maxsize=1)
def _get_registry() -> AdTypeRegistry:
    from ...wiring import build_registry
    return build_registry()


def _get_preview_service():
    from ...wiring import build_sync_preview_service
    return build_sync_preview_service(registry=_get_registry())


def _error(tool: str, t0: float, message: str, **fields: Any) -> str:
    log_tool_invocation(tool, None, (time.monotonic() - t0) * 1000, error=message)
    return json.dumps({"error": message, **fields}, default=str)


def register_engine_tools(mcp):
    """Register the read-only engine tools with request parsing and response allowlists."""

    @mcp.tool()
    def sync_preview(
        request_json: str,
        selected_platforms: list[str] | None = None,
        skip_rate_threshold: float | None = None,
    ) -> str:
        """Classify every ad of a campaign set as valid, fallback or skipped.

        Args:
            request_json: JSON object with campaignSetId, campaigns (or adGroups),
                availableColumns, sampleData, selectedPlatforms and optional fallbackAd
            selected_platforms: Optional override of the request's platforms
            skip_rate_threshold: Optional skip-rate warning threshold (percent)

        Returns:
            JSON with campaignSetId, totalAds, breakdown, validAds, fallbackAds,
            skippedAds, canProceed, warnings, validationTimeMs
        """
        t0 = time.monotonic()
        require_engine_scope()
        try:
            payload = json.loads(request_json)
            if not isinstance(payload, dict):
                return _error("sync_preview", t0, "request_json must be a JSON object")
            if selected_platforms is not None:
                payload["selectedPlatforms"] = selected_platforms
            if skip_rate_threshold is not None:
                payload["skipRateThreshold"] = skip_rate_threshold
            request = SyncPreviewRequest.from_payload(payload)
        except json.JSONDecodeError as exc:
            return _error("sync_preview", t0, f"invalid JSON: {exc.msg}")
        except ValidationError as exc:
            return _error("sync_preview", t0, "invalid request", details=exc.errors(include_url=False))

        preview = _get_preview_service().preview(request)
        latency_ms = (time.monotonic() - t0) * 1000
        log_tool_invocation(
            "sync_preview",
            request.cache_key()[:16],
            latency_ms,
            extra={
                "total_ads": preview.total_ads,
                "skipped": preview.breakdown.skipped,
            },
        )
        return json.dumps(_shape(preview.to_dict(), ALLOWED_PREVIEW_KEYS), indent=2, default=str)

    @mcp.tool()
    def ad_types_list(platform: str | None = None, category: str | None = None) -> str:
        """List registered ad types, optionally filtered.

        Args:
            platform: Only this platform (e.g. 'google', 'facebook', 'reddit')
            category: Only this category ('paid', 'organic', 'promoted')

        Returns:
            JSON with ad_types (id, platform, name, description, category, icon)
        """
        t0 = time.monotonic()
        require_engine_scope()
        registry = _get_registry()
        definitions = registry.get_by_platform(platform) if platform else registry.all()
        if category:
            definitions = [d for d in definitions if d.category == category]
        ad_types = [_shape(d.model_dump(mode="json"), ALLOWED_AD_TYPE_SUMMARY_KEYS) for d in definitions]
        log_tool_invocation("ad_types_list", None, (time.monotonic() - t0) * 1000, extra={"count": len(ad_types)})
        return json.dumps({"ad_types": ad_types}, indent=2)

    @mcp.tool()
    def ad_types_get(platform: str, ad_type_id: str) -> str:
        """Return the full definition of one ad type (fields, creatives, limits).

        Args:
            platform: Platform name
            ad_type_id: Ad type identifier (e.g. 'responsive-search')
        """
        t0 = time.monotonic()
        require_engine_scope()
        definition = _get_registry().get(platform, ad_type_id)
        if definition is None:
            return _error(
                "ad_types_get",
                t0,
                f'Ad type "{ad_type_id}" not found for platform "{platform}"',
            )
        log_tool_invocation("ad_types_get", None, (time.monotonic() - t0) * 1000)
        return json.dumps(_shape(definition.model_dump(mode="json"), ALLOWED_AD_TYPE_KEYS), indent=2)

    @mcp.tool()
    def ad_types_validate(platform: str, ad_type_id: str, data_json: str) -> str:
        """Validate ad data against a registered ad type.

        Args:
            platform: Platform name
            ad_type_id: Ad type identifier
            data_json: JSON object of field values keyed by field id

        Returns:
            JSON with valid, errors, warnings
        """
        t0 = time.monotonic()
        require_engine_scope()
        try:
            data = json.loads(data_json)
        except json.JSONDecodeError as exc:
            return _error("ad_types_validate", t0, f"invalid JSON: {exc.msg}")
        if not isinstance(data, dict):
            return _error("ad_types_validate", t0, "data_json must be a JSON object")
        result = validate_ad_type(_get_registry(), platform, ad_type_id, data)
        log_tool_invocation(
            "ad_types_validate",
            None,
            (time.monotonic() - t0) * 1000,
            extra={"valid": result.valid, "errors_count": len(result.errors)},
        )
        return json.dumps(_shape(result.to_dict(), ALLOWED_VALIDATION_KEYS), indent=2)

    @mcp.tool()
    def template_variables(template: str, columns: list[str] | None = None) -> str:
        """Extract the variables a template references and check them against known columns.

        Args:
            template: Template text, e.g. 'Buy {product|name} for {price|currency:USD}'
            columns: Known data-source column names; unknown_variables is empty when omitted

        Returns:
            JSON with template, variables, data_variables, unknown_variables, templated
        """
        t0 = time.monotonic()
        require_engine_scope()
        engine = VariableEngine()
        result = {
            "template": template,
            "variables": engine.extract_variables(template),
            "data_variables": engine.data_variables(template),
            "unknown_variables": engine.unknown_variables(template, columns) if columns else [],
            "templated": is_templated(template),
        }
        log_tool_invocation("template_variables", None, (time.monotonic() - t0) * 1000)
        return json.dumps(_shape(result, ALLOWED_TEMPLATE_KEYS), indent=2)
