"""SyncPreviewService: classify every ad of a campaign set and aggregate the report."""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Any, Iterable

from ..domain.classifier import AdClassification, AdClassifier, AdStatus, ClassificationContext
from ..domain.error_codes import ValidationErrorCode
from ..domain.platform_limits import PlatformConstraintResolver
from ..domain.registry import AdTypeRegistry
from ..domain.validation_result import FieldViolation
from ..domain.variable_engine import VariableEngine
from ..models.hierarchy import AdDefinition, SyncPreviewRequest
from ..models.preview import (
    FallbackAdEntry,
    PreviewBreakdown,
    SkippedAdEntry,
    SyncPreview,
    ValidAdEntry,
)

_LOGGER = logging.getLogger("adsync.preview")

DEFAULT_SKIP_RATE_THRESHOLD = 20.0


def skip_rate_warning(skipped: int, total: int, threshold: float) -> str | None:
    """Warning text when the skip rate (percent) exceeds ``threshold``."""
    if total <= 0:
        return None
    rate = skipped / total * 100
    if rate <= threshold:
        return None
    return (
        f"High skip rate ({rate:.1f}%): {skipped} of {total} ads will be skipped. "
        "Consider reviewing your campaign set configuration."
    )


def fallback_warning(fallback: int) -> str | None:
    if fallback <= 0:
        return None
    return f"{fallback} ads will use fallback content. Original content exceeded platform limits."


class SyncPreviewService:
    """Orchestrates classification over campaign -> ad group -> ad, in structural order."""

    def __init__(
        self,
        registry: AdTypeRegistry,
        classifier: AdClassifier | None = None,
        resolver: PlatformConstraintResolver | None = None,
        engine: VariableEngine | None = None,
        skip_rate_threshold: float = DEFAULT_SKIP_RATE_THRESHOLD,
        default_platforms: Iterable[str] = ("google",),
        logger: Any = None,
    ) -> None:
        self._registry = registry
        self._resolver = resolver or PlatformConstraintResolver()
        self._classifier = classifier or AdClassifier(registry, resolver=self._resolver, engine=engine)
        self._skip_rate_threshold = skip_rate_threshold
        self._default_platforms = tuple(default_platforms)
        self._logger = logger

    @property
    def known_platforms(self) -> list[str]:
        platforms = list(self._resolver.platforms)
        for platform in self._registry.platforms:
            if platform not in platforms:
                platforms.append(platform)
        return platforms

    def select_platforms(self, requested: Iterable[str]) -> tuple[tuple[str, ...], list[str]]:
        """Known platforms in request order, plus a warning per unknown name."""
        known = set(self.known_platforms)
        selected: list[str] = []
        warnings: list[str] = []
        for platform in requested:
            if platform in known:
                if platform not in selected:
                    selected.append(platform)
            else:
                warnings.append(f"Unknown platform ignored: {platform}")
        if not selected:
            selected = [p for p in self._default_platforms if p in known]
        return tuple(selected), warnings

    def preview(self, request: SyncPreviewRequest) -> SyncPreview:
        t0 = time.perf_counter()
        platforms, warnings = self.select_platforms(request.selected_platforms)
        if self._logger:
            self._logger.info(
                "sync_preview_start",
                extra={
                    "campaign_set_id": request.campaign_set_id,
                    "total_ads": request.total_ads,
                    "platforms": list(platforms),
                },
            )

        context = ClassificationContext(
            platforms=platforms,
            columns=tuple(request.column_names),
            sample_data=request.sample_data,
            fallback_ad=request.fallback_ad,
        )

        valid_ads: list[ValidAdEntry] = []
        fallback_ads: list[FallbackAdEntry] = []
        skipped_ads: list[SkippedAdEntry] = []

        for campaign in request.campaigns:
            campaign_violation = self._classifier.check_campaign(campaign)
            campaign_context = context
            if campaign.fallback_ad is not None:
                campaign_context = replace(context, fallback_ad=campaign.fallback_ad)
            for ad_group in campaign.ad_groups:
                inherited = campaign_violation or self._classifier.check_ad_group(ad_group, campaign_context)
                for ad in ad_group.ads:
                    outcome = self._classify_isolated(ad, campaign_context, campaign.row_index, inherited)
                    ids = {"ad_id": ad.id, "ad_group_id": ad_group.id, "campaign_id": campaign.id}
                    if outcome.status == AdStatus.VALID:
                        valid_ads.append(ValidAdEntry(name=outcome.display_name, **ids))
                    elif outcome.status == AdStatus.FALLBACK:
                        fallback_ads.append(FallbackAdEntry(
                            name=outcome.display_name,
                            reason=outcome.reason,
                            fallback_ad_id=outcome.fallback_ad_id,
                            **ids,
                        ))
                    else:
                        skipped_ads.append(self._skipped_entry(ad, outcome, ids))

        total = len(valid_ads) + len(fallback_ads) + len(skipped_ads)
        threshold = (
            request.skip_rate_threshold
            if request.skip_rate_threshold is not None
            else self._skip_rate_threshold
        )
        for warning in (
            skip_rate_warning(len(skipped_ads), total, threshold),
            fallback_warning(len(fallback_ads)),
        ):
            if warning:
                warnings.append(warning)

        latency_ms = (time.perf_counter() - t0) * 1000
        preview = SyncPreview(
            campaign_set_id=request.campaign_set_id,
            total_ads=total,
            breakdown=PreviewBreakdown(
                valid=len(valid_ads),
                fallback=len(fallback_ads),
                skipped=len(skipped_ads),
            ),
            valid_ads=valid_ads,
            fallback_ads=fallback_ads,
            skipped_ads=skipped_ads,
            can_proceed=not skipped_ads,
            warnings=warnings,
            validation_time_ms=round(latency_ms),
        )
        if self._logger:
            self._logger.info(
                "sync_preview_complete",
                extra={
                    "campaign_set_id": request.campaign_set_id,
                    "valid": preview.breakdown.valid,
                    "fallback": preview.breakdown.fallback,
                    "skipped": preview.breakdown.skipped,
                    "latency_ms": round(latency_ms, 2),
                },
            )
        return preview

    def _classify_isolated(
        self,
        ad: AdDefinition,
        context: ClassificationContext,
        campaign_row_index: int | None,
        inherited: FieldViolation | None,
    ) -> AdClassification:
        """Classify one ad; a failure here becomes a skip instead of aborting the run."""
        try:
            return self._classifier.classify(ad, context, campaign_row_index, inherited)
        except Exception as exc:
            _LOGGER.exception("ad_classification_failed", extra={"ad_id": ad.id})
            return AdClassification(
                ad_id=ad.id,
                status=AdStatus.SKIPPED,
                display_name=self._safe_display_name(ad, context, campaign_row_index),
                violations=(FieldViolation(
                    field="ad",
                    code=ValidationErrorCode.CONSTRAINT_VIOLATION,
                    message=f"Classification failed: {exc}",
                ),),
            )

    def _safe_display_name(
        self,
        ad: AdDefinition,
        context: ClassificationContext,
        campaign_row_index: int | None,
    ) -> str:
        try:
            row = self._classifier.resolve_row(ad, context.sample_data, campaign_row_index)
            return self._classifier.display_name(ad, row)
        except Exception:
            _LOGGER.debug("display_name_failed", extra={"ad_id": ad.id}, exc_info=True)
            return f"Ad {ad.id[:8]}"

    @staticmethod
    def _skipped_entry(ad: AdDefinition, outcome: AdClassification, ids: dict[str, str]) -> SkippedAdEntry:
        violation = outcome.violation
        if violation is None:
            violation = FieldViolation(
                field="unknown",
                code=ValidationErrorCode.CONSTRAINT_VIOLATION,
                message="Validation failed",
            )
        return SkippedAdEntry(
            name=outcome.display_name,
            product_name=ad.product_name,
            reason=violation.message,
            error_code=violation.code,
            field=violation.field,
            value=violation.value,
            expected=violation.expected,
            **ids,
        )
