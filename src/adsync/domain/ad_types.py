"""Ad type schema: field definitions, creative requirements and the ad type itself."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field

from .ad_type_rules import run_rule_set
from .validation_result import ValidationResult

AdCategory = Literal["paid", "organic", "promoted"]
CreativeType = Literal["image", "video", "carousel"]


class FieldType(str, Enum):
    """Input type of an ad field; drives which checks the validator runs."""

    TEXT = "text"
    TEXTAREA = "textarea"
    URL = "url"
    NUMBER = "number"
    ARRAY = "array"                # list of strings, count + per-item length
    SELECT = "select"              # single option value
    MULTISELECT = "multiselect"    # list of option values


class FieldOption(BaseModel):
    """One allowed value of a select/multiselect field."""

    model_config = {"frozen": True}

    value: str = Field(..., description="Value stored on the ad")
    label: str = Field(..., description="Human-readable label")


class AdFieldDefinition(BaseModel):
    """Static definition of one ad field and its constraints."""

    model_config = {"frozen": True}

    id: str = Field(..., description="Key of the value in the ad data")
    name: str = Field(..., description="Human-readable name used in messages")
    type: FieldType = Field(..., description="Field input type")
    required: bool = Field(default=False, description="Empty values are rejected when True")
    supports_variables: bool = Field(default=False, description="Whether {variable} templates are allowed")
    min_length: int | None = Field(default=None, ge=0, description="Minimum text length")
    max_length: int | None = Field(default=None, ge=0, description="Maximum text length (per item for arrays)")
    min_value: float | None = Field(default=None, description="Minimum numeric value")
    max_value: float | None = Field(default=None, description="Maximum numeric value")
    min_count: int | None = Field(default=None, ge=0, description="Minimum array item count")
    max_count: int | None = Field(default=None, ge=0, description="Maximum array item count")
    options: list[FieldOption] | None = Field(default=None, description="Allowed values for select/multiselect")
    pattern: str | None = Field(default=None, description="Regex the text value must match")
    placeholder: str | None = Field(default=None, description="Input placeholder")
    help_text: str | None = Field(default=None, description="Guidance shown next to the field")
    group: str | None = Field(default=None, description="Form group the field belongs to")

    @property
    def option_values(self) -> list[str] | None:
        if self.options is None:
            return None
        return [option.value for option in self.options]


class CreativeSpecs(BaseModel):
    """Asset shape constraints for a creative slot."""

    aspect_ratios: list[str] = Field(default_factory=list, description="Accepted ratios, e.g. '1.91:1'")
    recommended_width: int | None = None
    recommended_height: int | None = None
    min_width: int | None = None
    min_height: int | None = None
    max_file_size: int | None = Field(default=None, description="Maximum size in bytes")
    min_duration: int | None = Field(default=None, description="Minimum video length in seconds")
    max_duration: int | None = Field(default=None, description="Maximum video length in seconds")
    allowed_formats: list[str] = Field(default_factory=list, description="File extensions, e.g. 'jpg'")


class CreativeRequirement(BaseModel):
    """A creative asset slot (image, video, carousel) of an ad type."""

    id: str
    name: str
    type: CreativeType
    required: bool = False
    min_count: int | None = None
    max_count: int | None = None
    specs: CreativeSpecs = Field(default_factory=CreativeSpecs)
    help_text: str | None = None


class AdTypeConstraints(BaseModel):
    """Character limits and platform guidance for an ad type."""

    character_limits: dict[str, int] = Field(default_factory=dict, description="Field id -> max characters")
    minimum_fields: list[str] = Field(default_factory=list, description="Fields the platform needs at minimum")
    platform_rules: list[str] = Field(default_factory=list, description="Editorial guidance (advisory)")


class AdTypeFeatures(BaseModel):
    supports_variables: bool = True
    supports_multiple_ads: bool = True
    supports_keywords: bool = False
    supports_scheduling: bool = True


class AdTypeDefinition(BaseModel):
    """Schema and cross-field rules for one ad shape on one platform."""

    id: str = Field(..., description="Ad type identifier, unique per platform")
    platform: str = Field(..., description="Platform the ad type belongs to")
    name: str = Field(..., description="Display name")
    description: str = Field(default="", description="Short description")
    category: AdCategory = Field(default="paid", description="Content category")
    icon: str | None = Field(default=None, description="Icon identifier")
    fields: list[AdFieldDefinition] = Field(default_factory=list, description="Ordered field definitions")
    creatives: list[CreativeRequirement] = Field(default_factory=list, description="Creative asset slots")
    constraints: AdTypeConstraints = Field(default_factory=AdTypeConstraints)
    features: AdTypeFeatures = Field(default_factory=AdTypeFeatures)
    rule_set: str | None = Field(default=None, description="Name of the cross-field rule set (see ad_type_rules)")
    preview_component: str | None = Field(default=None, description="Presentation component name")

    @property
    def key(self) -> tuple[str, str]:
        return (self.platform, self.id)

    def get_field(self, field_id: str) -> AdFieldDefinition | None:
        for field_def in self.fields:
            if field_def.id == field_id:
                return field_def
        return None

    def validate_rules(self, data: dict[str, Any]) -> ValidationResult:
        """Run this type's cross-field rule set; no rule set means no findings."""
        return run_rule_set(self.rule_set, data)
