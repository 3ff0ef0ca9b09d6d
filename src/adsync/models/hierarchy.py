"""Input DTOs: campaign hierarchy, data-source columns and sample rows."""

from __future__ import annotations

import hashlib
import json
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from ..domain.fallback import FallbackPolicy

# Accept camelCase (wire) and snake_case (Python) keys alike.
_INPUT_CONFIG = {"alias_generator": to_camel, "populate_by_name": True}


class DataColumn(BaseModel):
    """A column of the campaign's data source."""

    model_config = _INPUT_CONFIG

    name: str = Field(..., min_length=1, description="Column name referenced by {placeholders}")
    type: str = Field(default="string", description="Inferred column type")
    sample_values: list[Any] = Field(default_factory=list, description="Optional sample values")


class AdDefinition(BaseModel):
    """One ad: per-field templates and optional fallback policies."""

    model_config = _INPUT_CONFIG

    id: str = Field(..., min_length=1, description="Ad identifier")
    ad_type: str | None = Field(default=None, description="Ad type id; standard fields are used when unset")
    headline: str | None = Field(default=None, description="Headline template")
    headline_fallback: FallbackPolicy | None = Field(default=None, description="Policy for an overlong headline")
    description: str | None = Field(default=None, description="Description template")
    description_fallback: FallbackPolicy | None = Field(default=None, description="Policy for an overlong description")
    display_url: str | None = Field(default=None, description="Display URL template")
    display_url_fallback: FallbackPolicy | None = Field(default=None, description="Policy for an overlong display URL")
    final_url: str | None = Field(default=None, description="Landing page URL template")
    call_to_action: str | None = Field(default=None, description="Call-to-action text")
    product_name: str | None = Field(default=None, description="Product the ad promotes, echoed on skipped entries")
    row_index: int | None = Field(default=None, ge=0, description="Sample row backing this ad")
    fields: dict[str, Any] = Field(default_factory=dict, description="Ad type field values keyed by field id")
    fallbacks: dict[str, FallbackPolicy] = Field(default_factory=dict, description="Policies for ad type fields")

    def standard_values(self) -> dict[str, Any]:
        return {
            "headline": self.headline,
            "description": self.description,
            "displayUrl": self.display_url,
            "finalUrl": self.final_url,
            "callToAction": self.call_to_action,
        }

    def field_values(self) -> dict[str, Any]:
        """Values keyed by field id; explicit ``fields`` entries win."""
        values = {k: v for k, v in self.standard_values().items() if v is not None}
        values.update(self.fields)
        return values

    def fallback_for(self, field_id: str) -> FallbackPolicy | None:
        if field_id in self.fallbacks:
            return self.fallbacks[field_id]
        return {
            "headline": self.headline_fallback,
            "description": self.description_fallback,
            "displayUrl": self.display_url_fallback,
        }.get(field_id)


class FallbackAdDefinition(BaseModel):
    """Substitute content used when an ad's own copy overruns platform limits."""

    model_config = _INPUT_CONFIG

    id: str = Field(..., min_length=1, description="Fallback ad identifier")
    headline: str | None = Field(default=None, description="Headline template")
    description: str | None = Field(default=None, description="Description template")
    display_url: str | None = Field(default=None, description="Display URL template")
    final_url: str | None = Field(default=None, description="Landing page URL template")
    call_to_action: str | None = Field(default=None, description="Call-to-action text")

    def standard_values(self) -> dict[str, Any]:
        return {
            "headline": self.headline,
            "description": self.description,
            "displayUrl": self.display_url,
            "finalUrl": self.final_url,
            "callToAction": self.call_to_action,
        }


class AdGroupDefinition(BaseModel):
    model_config = _INPUT_CONFIG

    id: str = Field(..., min_length=1, description="Ad group identifier")
    name_pattern: str = Field(default="", description="Ad group name template")
    ads: list[AdDefinition] = Field(default_factory=list, description="Ads in structural order")


class CampaignBudget(BaseModel):
    """Budget as entered; the engine reports non-positive amounts."""

    model_config = _INPUT_CONFIG

    amount: float | None = Field(default=None, description="Budget amount")
    type: str | None = Field(default=None, description="daily, lifetime or shared")
    currency: str = Field(default="USD", description="Budget currency")


class CampaignDefinition(BaseModel):
    model_config = _INPUT_CONFIG

    id: str = Field(..., min_length=1, description="Campaign identifier")
    name: str = Field(default="", description="Campaign name")
    row_index: int | None = Field(default=None, ge=0, description="Sample row shared by the campaign's ads")
    budget: CampaignBudget | None = Field(default=None, description="Budget configuration")
    start_date: str | None = Field(default=None, description="ISO 8601 start")
    end_date: str | None = Field(default=None, description="ISO 8601 end")
    fallback_ad: FallbackAdDefinition | None = Field(
        default=None,
        description="Overrides the campaign set's fallback ad for this campaign",
    )
    ad_groups: list[AdGroupDefinition] = Field(default_factory=list, description="Ad groups in structural order")


class SyncPreviewRequest(BaseModel):
    """Everything one classification run needs; identical requests give identical previews."""

    model_config = _INPUT_CONFIG

    campaign_set_id: str = Field(..., min_length=1, description="Campaign set identifier")
    campaigns: list[CampaignDefinition] = Field(default_factory=list, description="Campaign hierarchy")
    available_columns: list[DataColumn] = Field(default_factory=list, description="Known data-source columns")
    sample_data: list[dict[str, Any]] = Field(default_factory=list, description="Representative data rows")
    selected_platforms: list[str] = Field(default_factory=list, description="Targeted platforms")
    fallback_ad: FallbackAdDefinition | None = Field(
        default=None,
        description="Substitute ad for ads whose copy is too long for the selected platforms",
    )
    skip_rate_threshold: float | None = Field(
        default=None,
        ge=0.0,
        le=100.0,
        description="Override of the high skip-rate warning threshold (percent)",
    )

    @field_validator("available_columns", mode="before")
    @classmethod
    def _columns_from_names(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [{"name": item} if isinstance(item, str) else item for item in value]
        return value

    @field_validator("selected_platforms")
    @classmethod
    def _normalize_platforms(cls, value: list[str]) -> list[str]:
        platforms: list[str] = []
        for item in value:
            name = item.strip().lower()
            if name and name not in platforms:
                platforms.append(name)
        return platforms

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self.available_columns]

    @property
    def total_ads(self) -> int:
        return sum(len(group.ads) for campaign in self.campaigns for group in campaign.ad_groups)

    def cache_key(self) -> str:
        """SHA-256 of the canonical JSON of all inputs, for caller-side memoization."""
        canonical = json.dumps(self.model_dump(mode="json"), sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(canonical.encode("utf-8")).hexdigest()

    @classmethod
    def from_hierarchy(
        cls,
        campaign_set_id: str,
        ad_groups: list[AdGroupDefinition | dict[str, Any]],
        available_columns: list[DataColumn | dict[str, Any] | str] | None = None,
        sample_data: list[dict[str, Any]] | None = None,
        selected_platforms: list[str] | None = None,
        **kwargs: Any,
    ) -> SyncPreviewRequest:
        """Wrap a bare ad-group hierarchy in a single campaign."""
        return cls.model_validate({
            "campaign_set_id": campaign_set_id,
            "campaigns": [{"id": campaign_set_id, "name": campaign_set_id, "ad_groups": ad_groups}],
            "available_columns": available_columns or [],
            "sample_data": sample_data or [],
            "selected_platforms": selected_platforms or [],
            **kwargs,
        })

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> SyncPreviewRequest:
        """Validate a wire payload holding either ``campaigns`` or a bare ``adGroups`` list."""
        if "campaigns" in payload or not ("adGroups" in payload or "ad_groups" in payload):
            return cls.model_validate(payload)
        data = dict(payload)
        ad_groups = data.pop("adGroups", None) or data.pop("ad_groups", None) or []
        campaign_set_id = data.get("campaignSetId") or data.get("campaign_set_id") or "preview"
        data.setdefault("campaignSetId", campaign_set_id)
        data["campaigns"] = [{"id": campaign_set_id, "name": campaign_set_id, "adGroups": ad_groups}]
        return cls.model_validate(data)
