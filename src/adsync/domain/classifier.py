"""AdClassifier: decide valid / fallback / skipped for one ad.

Per field: unknown-variable check against the known columns, effective
cross-platform limit, interpolation against the ad's sample row, field
validation on the interpolated value, then the field's fallback policy for
length overruns. Any blocking failure skips the ad (skip beats fallback),
except that an ad whose only failures are length overruns may be replaced
by the configured fallback ad when that ad's own content passes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Sequence

from ..models.hierarchy import AdDefinition, AdGroupDefinition, CampaignDefinition, FallbackAdDefinition
from .ad_types import AdFieldDefinition, FieldType
from .error_codes import ValidationErrorCode
from .fallback import FallbackOutcome, apply_fallback
from .field_validator import DEFAULT_URL_SCHEMES, check_field
from .platform_limits import PlatformConstraintResolver
from .registry import AdTypeRegistry
from .validation_result import FieldViolation
from .variable_engine import VariableEngine, is_templated, parse_iso_datetime

_LOGGER = logging.getLogger("adsync.classifier")

VALID_BUDGET_TYPES = ("daily", "lifetime", "shared")

STANDARD_AD_FIELDS: tuple[AdFieldDefinition, ...] = (
    AdFieldDefinition(id="headline", name="Headline", type=FieldType.TEXT, required=True, supports_variables=True),
    AdFieldDefinition(id="description", name="Description", type=FieldType.TEXT, supports_variables=True),
    AdFieldDefinition(id="displayUrl", name="Display URL", type=FieldType.TEXT, supports_variables=True),
    AdFieldDefinition(id="finalUrl", name="Final URL", type=FieldType.URL, required=True, supports_variables=True),
    AdFieldDefinition(id="callToAction", name="Call to Action", type=FieldType.TEXT),
)


class AdStatus(str, Enum):
    """Terminal classification states."""

    VALID = "valid"
    FALLBACK = "fallback"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class AdClassification:
    """Exactly one outcome for one ad, with what explains it."""

    ad_id: str
    status: AdStatus
    display_name: str
    violations: tuple[FieldViolation, ...] = ()
    fallbacks: tuple[FallbackOutcome, ...] = ()
    fallback_ad_id: str | None = None
    replaced: tuple[FieldViolation, ...] = ()

    @property
    def violation(self) -> FieldViolation | None:
        """First blocking failure in field order."""
        return self.violations[0] if self.violations else None

    @property
    def reason(self) -> str:
        if self.status == AdStatus.SKIPPED and self.violation is not None:
            return self.violation.message
        if self.status == AdStatus.FALLBACK and self.fallback_ad_id is not None:
            fields = ", ".join(dict.fromkeys(v.field for v in self.replaced))
            return f"Using fallback ad {self.fallback_ad_id}: {fields} exceeded platform limits"
        if self.status == AdStatus.FALLBACK:
            return "; ".join(outcome.reason for outcome in self.fallbacks)
        return ""

    @property
    def substitutions(self) -> dict[str, str]:
        return {outcome.field: outcome.substituted for outcome in self.fallbacks}


@dataclass(frozen=True)
class ClassificationContext:
    """Inputs shared by every ad of one run."""

    platforms: tuple[str, ...]
    columns: tuple[str, ...] = ()
    sample_data: Sequence[dict[str, Any]] = field(default_factory=tuple)
    fallback_ad: FallbackAdDefinition | None = None

    @property
    def checks_columns(self) -> bool:
        """Unknown-variable checks need a known column set."""
        return bool(self.columns)


def _parse_iso(value: str | None) -> datetime | None:
    if not value:
        return None
    return parse_iso_datetime(value)


class AdClassifier:
    """Classify ads against the registry, platform limits and sample data."""

    def __init__(
        self,
        registry: AdTypeRegistry,
        resolver: PlatformConstraintResolver | None = None,
        engine: VariableEngine | None = None,
        url_schemes: Iterable[str] = DEFAULT_URL_SCHEMES,
        logger: logging.Logger | None = None,
    ) -> None:
        self._registry = registry
        self._resolver = resolver or PlatformConstraintResolver()
        self._engine = engine or VariableEngine()
        self._url_schemes = tuple(url_schemes)
        self._logger = logger or _LOGGER

    # --- upstream entities ------------------------------------------------

    def check_campaign(self, campaign: CampaignDefinition) -> FieldViolation | None:
        """First blocking problem of the campaign itself; it skips every ad beneath."""
        budget = campaign.budget
        if budget is not None:
            if budget.amount is not None and budget.amount <= 0:
                return FieldViolation(
                    field="budget.amount",
                    code=ValidationErrorCode.INVALID_BUDGET,
                    message="budget amount must be a positive number",
                    value=budget.amount,
                    expected="A positive number",
                )
            if budget.type and budget.type not in VALID_BUDGET_TYPES:
                return FieldViolation(
                    field="budget.type",
                    code=ValidationErrorCode.INVALID_ENUM_VALUE,
                    message=f"budget type must be one of: {', '.join(VALID_BUDGET_TYPES)}",
                    value=budget.type,
                    expected=" | ".join(VALID_BUDGET_TYPES),
                )

        parsed: dict[str, datetime | None] = {}
        for name in ("start_date", "end_date"):
            raw = getattr(campaign, name)
            try:
                parsed[name] = _parse_iso(raw)
            except ValueError:
                return FieldViolation(
                    field=name,
                    code=ValidationErrorCode.INVALID_DATETIME,
                    message=f"{name} is not a valid ISO 8601 datetime",
                    value=raw,
                    expected="ISO 8601 datetime",
                )
        start, end = parsed["start_date"], parsed["end_date"]
        if start and end and end < start:
            return FieldViolation(
                field="end_date",
                code=ValidationErrorCode.INVALID_DATETIME,
                message="end_date must not be before start_date",
                value=campaign.end_date,
                expected=f"on or after {campaign.start_date}",
            )
        return None

    def check_ad_group(self, ad_group: AdGroupDefinition, context: ClassificationContext) -> FieldViolation | None:
        """An ad group name template must only reference known columns."""
        if not context.checks_columns:
            return None
        unknown = self._engine.unknown_variables(ad_group.name_pattern, context.columns)
        if not unknown:
            return None
        return FieldViolation(
            field="namePattern",
            code=ValidationErrorCode.MISSING_DEPENDENCY,
            message=f"unknown variable: {unknown[0]}",
            value=ad_group.name_pattern,
            expected="a data source column",
        )

    # --- per ad -----------------------------------------------------------

    def resolve_row(
        self,
        ad: AdDefinition,
        sample_data: Sequence[dict[str, Any]],
        campaign_row_index: int | None = None,
    ) -> dict[str, Any] | None:
        """Ad row, else the campaign's shared row, else row 0, else none."""
        for index in (ad.row_index, campaign_row_index, 0):
            if index is not None and 0 <= index < len(sample_data):
                return sample_data[index]
        return None

    def display_name(self, ad: AdDefinition, row: dict[str, Any] | None) -> str:
        headline = ad.headline or ad.fields.get("headline") or ad.fields.get("title")
        if isinstance(headline, str) and headline:
            name = self._engine.interpolate(headline, row) if row is not None else headline
            if name:
                return name
        return f"Ad {ad.id[:8]}"

    def field_definitions(self, ad: AdDefinition, platforms: Sequence[str]) -> list[AdFieldDefinition] | None:
        """Fields to check for ``ad``; ``None`` when its ad type exists on no selected platform."""
        if not ad.ad_type:
            return list(STANDARD_AD_FIELDS)
        definitions = [d for d in (self._registry.get(p, ad.ad_type) for p in platforms) if d is not None]
        if not definitions:
            return None
        return self._resolver.merge_definitions(definitions)

    def classify(
        self,
        ad: AdDefinition,
        context: ClassificationContext,
        campaign_row_index: int | None = None,
        inherited: FieldViolation | None = None,
    ) -> AdClassification:
        row = self.resolve_row(ad, context.sample_data, campaign_row_index)
        name = self.display_name(ad, row)
        if inherited is not None:
            return AdClassification(ad_id=ad.id, status=AdStatus.SKIPPED, display_name=name, violations=(inherited,))

        fields = self.field_definitions(ad, context.platforms)
        if fields is None:
            missing = FieldViolation(
                field="adType",
                code=ValidationErrorCode.MISSING_DEPENDENCY,
                message=f'Ad type "{ad.ad_type}" not found for platforms: {", ".join(context.platforms)}',
                value=ad.ad_type,
                expected="a registered ad type",
            )
            return AdClassification(ad_id=ad.id, status=AdStatus.SKIPPED, display_name=name, violations=(missing,))

        values = ad.field_values()
        resolved_values: dict[str, Any] = dict(values)
        blocking: list[FieldViolation] = []
        fallbacks: list[FallbackOutcome] = []

        for field_def in fields:
            effective, value, violations = self._check_value(field_def, values.get(field_def.id), row, context)
            if effective is None:
                blocking.extend(violations)
                continue
            resolved_values[field_def.id] = value

            for violation in violations:
                outcome = self._try_fallback(ad, effective, value, violation)
                if outcome is not None:
                    fallbacks.append(outcome)
                    resolved_values[field_def.id] = outcome.substituted
                else:
                    blocking.append(violation)

        if ad.ad_type:
            blocking.extend(self._rule_violations(ad, resolved_values, context.platforms))

        if blocking and context.fallback_ad is not None and self._accepts_fallback_ad(ad, blocking):
            if not self._fallback_ad_violations(context.fallback_ad, row, context):
                self._logger.debug(
                    "ad_fallback",
                    extra={"ad_id": ad.id, "fallback_ad_id": context.fallback_ad.id},
                )
                return AdClassification(
                    ad_id=ad.id,
                    status=AdStatus.FALLBACK,
                    display_name=name,
                    fallback_ad_id=context.fallback_ad.id,
                    replaced=tuple(blocking),
                )

        if blocking:
            self._logger.debug(
                "ad_skipped",
                extra={"ad_id": ad.id, "error_code": blocking[0].code.value, "field": blocking[0].field},
            )
            return AdClassification(
                ad_id=ad.id,
                status=AdStatus.SKIPPED,
                display_name=name,
                violations=tuple(blocking),
                fallbacks=tuple(fallbacks),
            )
        if fallbacks:
            self._logger.debug("ad_fallback", extra={"ad_id": ad.id, "fields": [f.field for f in fallbacks]})
            return AdClassification(
                ad_id=ad.id,
                status=AdStatus.FALLBACK,
                display_name=name,
                fallbacks=tuple(fallbacks),
            )
        return AdClassification(ad_id=ad.id, status=AdStatus.VALID, display_name=name)

    # --- helpers ----------------------------------------------------------

    def _check_value(
        self,
        field_def: AdFieldDefinition,
        raw: Any,
        row: dict[str, Any] | None,
        context: ClassificationContext,
    ) -> tuple[AdFieldDefinition | None, Any, list[FieldViolation]]:
        """Effective definition, interpolated value and violations of one field.

        The definition is ``None`` when the template itself was refused, in
        which case no value was interpolated and nothing is repairable.
        """
        refused = self._unknown_variable(field_def, raw, context) or self._template_violation(field_def, raw)
        if refused is not None:
            return None, raw, [refused]
        effective = self._resolver.resolve_field(field_def, context.platforms)
        value = self._interpolate(raw, row)
        return effective, value, check_field(effective, value, self._url_schemes)

    def _accepts_fallback_ad(self, ad: AdDefinition, blocking: Sequence[FieldViolation]) -> bool:
        # Fallback ads carry standard fields only.
        return not ad.ad_type and all(v.is_length_overrun for v in blocking)

    def _fallback_ad_violations(
        self,
        fallback_ad: FallbackAdDefinition,
        row: dict[str, Any] | None,
        context: ClassificationContext,
    ) -> list[FieldViolation]:
        values = {k: v for k, v in fallback_ad.standard_values().items() if v is not None}
        violations: list[FieldViolation] = []
        for field_def in STANDARD_AD_FIELDS:
            _, _, found = self._check_value(field_def, values.get(field_def.id), row, context)
            violations.extend(found)
        return violations

    def _template_violation(self, field_def: AdFieldDefinition, raw: Any) -> FieldViolation | None:
        templates = raw if isinstance(raw, (list, tuple)) else [raw]
        for template in templates:
            error = self._engine.template_error(template)
            if error is not None:
                return FieldViolation(
                    field=field_def.id,
                    code=ValidationErrorCode.CONSTRAINT_VIOLATION,
                    message=f"{field_def.name}: {error}",
                    value=len(template),
                    expected="a shorter template",
                )
        return None

    def _unknown_variable(
        self,
        field_def: AdFieldDefinition,
        raw: Any,
        context: ClassificationContext,
    ) -> FieldViolation | None:
        if not context.checks_columns:
            return None
        templates = raw if isinstance(raw, (list, tuple)) else [raw]
        for template in templates:
            if not is_templated(template):
                continue
            unknown = self._engine.unknown_variables(template, context.columns)
            if unknown:
                return FieldViolation(
                    field=field_def.id,
                    code=ValidationErrorCode.MISSING_DEPENDENCY,
                    message=f"unknown variable: {unknown[0]}",
                    value=template,
                    expected="a data source column",
                )
        return None

    def _interpolate(self, raw: Any, row: dict[str, Any] | None) -> Any:
        # Without a row the raw template is validated; templated values skip raw checks.
        if row is None:
            return raw
        if isinstance(raw, str):
            return self._engine.interpolate(raw, row)
        if isinstance(raw, (list, tuple)):
            return [self._engine.interpolate(item, row) if isinstance(item, str) else item for item in raw]
        return raw

    def _try_fallback(
        self,
        ad: AdDefinition,
        field_def: AdFieldDefinition,
        value: Any,
        violation: FieldViolation,
    ) -> FallbackOutcome | None:
        if not violation.is_length_overrun or field_def.max_length is None:
            return None
        if field_def.type not in (FieldType.TEXT, FieldType.TEXTAREA) or not isinstance(value, str):
            return None
        return apply_fallback(field_def.id, value, field_def.max_length, ad.fallback_for(field_def.id))

    def _rule_violations(
        self,
        ad: AdDefinition,
        data: dict[str, Any],
        platforms: Sequence[str],
    ) -> list[FieldViolation]:
        violations: list[FieldViolation] = []
        for platform in platforms:
            definition = self._registry.get(platform, ad.ad_type or "")
            if definition is None:
                continue
            result = definition.validate_rules(data)
            for error in result.errors:
                violations.append(FieldViolation(
                    field="adType",
                    code=ValidationErrorCode.CONSTRAINT_VIOLATION,
                    message=error,
                    value=ad.ad_type,
                    expected=f"{definition.platform} {definition.name} rules",
                ))
        return violations
