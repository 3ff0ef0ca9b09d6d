"""Machine-readable reason codes for blocking validation failures."""

from __future__ import annotations

from enum import Enum


class ValidationErrorCode(str, Enum):
    """Codes reported on skipped ads."""

    REQUIRED_FIELD = "REQUIRED_FIELD"               # required value absent or empty
    INVALID_DATETIME = "INVALID_DATETIME"           # unparseable or inverted schedule
    INVALID_URL = "INVALID_URL"                     # url field fails strict parsing
    FIELD_TOO_LONG = "FIELD_TOO_LONG"               # text longer than the effective limit
    INVALID_ENUM_VALUE = "INVALID_ENUM_VALUE"       # select/multiselect value not an option
    INVALID_BUDGET = "INVALID_BUDGET"               # campaign budget not positive
    MISSING_DEPENDENCY = "MISSING_DEPENDENCY"       # unknown variable / ad type reference
    CONSTRAINT_VIOLATION = "CONSTRAINT_VIOLATION"   # any other field or cross-field rule
    VALUE_OUT_OF_RANGE = "VALUE_OUT_OF_RANGE"       # number outside min/max


# Codes a fallback policy is allowed to repair.
TRUNCATABLE_CODES = frozenset({ValidationErrorCode.FIELD_TOO_LONG})
