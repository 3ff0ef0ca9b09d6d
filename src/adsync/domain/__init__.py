"""Domain layer for adsync: templates, ad types, validation and limits."""

from .ad_types import (
    AdFieldDefinition,
    AdTypeConstraints,
    AdTypeDefinition,
    AdTypeFeatures,
    CreativeRequirement,
    CreativeSpecs,
    FieldOption,
    FieldType,
)
from .error_codes import ValidationErrorCode
from .fallback import FallbackPolicy, apply_fallback, truncate_text, truncate_to_word_boundary
from .field_validator import check_field, validate_ad_data, validate_ad_type, validate_field
from .platform_limits import PLATFORM_LIMITS, PlatformConstraintResolver, most_restrictive
from .registry import AdTypeRegistry
from .validation_result import FieldViolation, ValidationResult
from .variable_engine import (
    VariableEngine,
    extract_variables,
    get_character_count,
    interpolate,
    is_templated,
)

__all__ = [
    "AdFieldDefinition",
    "AdTypeConstraints",
    "AdTypeDefinition",
    "AdTypeFeatures",
    "AdTypeRegistry",
    "CreativeRequirement",
    "CreativeSpecs",
    "FallbackPolicy",
    "FieldOption",
    "FieldType",
    "FieldViolation",
    "PLATFORM_LIMITS",
    "PlatformConstraintResolver",
    "ValidationErrorCode",
    "ValidationResult",
    "VariableEngine",
    "apply_fallback",
    "check_field",
    "extract_variables",
    "get_character_count",
    "interpolate",
    "is_templated",
    "most_restrictive",
    "truncate_text",
    "truncate_to_word_boundary",
    "validate_ad_data",
    "validate_ad_type",
    "validate_field",
]
