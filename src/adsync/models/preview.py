"""Output DTOs: the sync preview report and its per-ad entries."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from ..domain.error_codes import ValidationErrorCode

_OUTPUT_CONFIG = {"alias_generator": to_camel, "populate_by_name": True}


class ValidAdEntry(BaseModel):
    model_config = _OUTPUT_CONFIG

    ad_id: str = Field(..., description="Ad identifier")
    ad_group_id: str = Field(..., description="Owning ad group")
    campaign_id: str = Field(..., description="Owning campaign")
    name: str = Field(..., description="Display name")


class FallbackAdEntry(BaseModel):
    """An ad that syncs with degraded content."""

    model_config = _OUTPUT_CONFIG

    ad_id: str = Field(..., description="Ad identifier")
    ad_group_id: str = Field(..., description="Owning ad group")
    campaign_id: str = Field(..., description="Owning campaign")
    name: str = Field(..., description="Display name")
    reason: str = Field(..., description="Why the fallback applies")
    fallback_ad_id: str | None = Field(default=None, description="Fallback ad that replaced this ad's content")


class SkippedAdEntry(BaseModel):
    """An ad excluded from sync, explained by its first blocking failure."""

    model_config = _OUTPUT_CONFIG

    ad_id: str = Field(..., description="Ad identifier")
    ad_group_id: str = Field(..., description="Owning ad group")
    campaign_id: str = Field(..., description="Owning campaign")
    name: str = Field(..., description="Display name")
    product_name: str | None = Field(default=None, description="Product the ad promotes")
    reason: str = Field(..., description="Human-readable failure message")
    error_code: ValidationErrorCode = Field(..., description="Machine-readable reason code")
    field: str = Field(..., description="Offending field")
    value: Any = Field(default=None, description="Offending value")
    expected: str | None = Field(default=None, description="Expected constraint")


class PreviewBreakdown(BaseModel):
    valid: int = Field(default=0, ge=0)
    fallback: int = Field(default=0, ge=0)
    skipped: int = Field(default=0, ge=0)

    @property
    def total(self) -> int:
        return self.valid + self.fallback + self.skipped


class SyncPreview(BaseModel):
    """Aggregate classification report for one campaign set."""

    model_config = _OUTPUT_CONFIG

    campaign_set_id: str = Field(..., description="Campaign set identifier")
    total_ads: int = Field(..., ge=0, description="Number of ads classified")
    breakdown: PreviewBreakdown = Field(default_factory=PreviewBreakdown)
    valid_ads: list[ValidAdEntry] = Field(default_factory=list)
    fallback_ads: list[FallbackAdEntry] = Field(default_factory=list)
    skipped_ads: list[SkippedAdEntry] = Field(default_factory=list)
    can_proceed: bool = Field(..., description="True when no ad is skipped")
    warnings: list[str] = Field(default_factory=list, description="Advisory messages")
    validation_time_ms: int = Field(default=0, ge=0, description="Elapsed classification time")

    def to_dict(self) -> dict[str, Any]:
        """camelCase JSON-compatible dict; unset optional entry fields are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
