"""Field validator: type-aware constraint checks for one (possibly templated) value.

``check_field`` returns structured violations with reason codes; ``validate_field``
returns only the messages. Raw templated values skip length/range/URL checks;
the classifier re-checks the interpolated value against sample data.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Iterable

from pydantic import AnyUrl, TypeAdapter, ValidationError

from .ad_types import AdFieldDefinition, AdTypeDefinition, FieldType
from .error_codes import ValidationErrorCode
from .registry import AdTypeRegistry
from .validation_result import FieldViolation, ValidationResult
from .variable_engine import is_templated, value_to_string

DEFAULT_URL_SCHEMES = ("http", "https")

_URL_ADAPTER = TypeAdapter(AnyUrl)
_LOGGER = logging.getLogger("adsync.validation")


def is_empty(value: Any) -> bool:
    """Absent, empty string or empty list."""
    if value is None:
        return True
    if isinstance(value, str) and value == "":
        return True
    if isinstance(value, (list, tuple)) and len(value) == 0:
        return True
    return False


def _fmt(number: float) -> str:
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return str(number)


def is_valid_url(value: str, schemes: Iterable[str] = DEFAULT_URL_SCHEMES) -> bool:
    """Strict parse: accepted scheme and a host."""
    try:
        url = _URL_ADAPTER.validate_python(value.strip())
    except ValidationError:
        return False
    if url.scheme.lower() not in {s.lower() for s in schemes}:
        return False
    return bool(url.host)


def _to_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number):
        return None
    return number


def _pattern_matches(pattern: str, text: str) -> bool:
    try:
        return re.search(pattern, text) is not None
    except re.error as exc:
        _LOGGER.warning("invalid_field_pattern", extra={"pattern": pattern, "error": str(exc)})
        return True


def _check_text(field: AdFieldDefinition, value: Any) -> list[FieldViolation]:
    violations: list[FieldViolation] = []
    text = value_to_string(value)
    if not is_templated(text):
        if field.min_length is not None and len(text) < field.min_length:
            violations.append(FieldViolation(
                field=field.id,
                code=ValidationErrorCode.CONSTRAINT_VIOLATION,
                message=f"{field.name} must be at least {field.min_length} characters",
                value=text,
                expected=f"at least {field.min_length} characters",
            ))
        if field.max_length is not None and len(text) > field.max_length:
            violations.append(FieldViolation(
                field=field.id,
                code=ValidationErrorCode.FIELD_TOO_LONG,
                message=f"{field.name} must not exceed {field.max_length} characters",
                value=text,
                expected=f"max {field.max_length} characters",
            ))
    if field.pattern and not _pattern_matches(field.pattern, text):
        violations.append(FieldViolation(
            field=field.id,
            code=ValidationErrorCode.CONSTRAINT_VIOLATION,
            message=f"{field.name} has invalid format",
            value=text,
            expected=f"match /{field.pattern}/",
        ))
    return violations


def _check_url(field: AdFieldDefinition, value: Any, url_schemes: Iterable[str]) -> list[FieldViolation]:
    text = value_to_string(value)
    if is_templated(text):
        return []
    if is_valid_url(text, url_schemes):
        return []
    return [FieldViolation(
        field=field.id,
        code=ValidationErrorCode.INVALID_URL,
        message=f"{field.name} must be a valid URL",
        value=text,
        expected="valid URL",
    )]


def _check_number(field: AdFieldDefinition, value: Any) -> list[FieldViolation]:
    if is_templated(value):
        return []
    number = _to_number(value)
    if number is None:
        return [FieldViolation(
            field=field.id,
            code=ValidationErrorCode.CONSTRAINT_VIOLATION,
            message=f"{field.name} must be a number",
            value=value,
            expected="number",
        )]
    violations: list[FieldViolation] = []
    if field.min_value is not None and number < field.min_value:
        violations.append(FieldViolation(
            field=field.id,
            code=ValidationErrorCode.VALUE_OUT_OF_RANGE,
            message=f"{field.name} must be at least {_fmt(field.min_value)}",
            value=value,
            expected=f">= {_fmt(field.min_value)}",
        ))
    if field.max_value is not None and number > field.max_value:
        violations.append(FieldViolation(
            field=field.id,
            code=ValidationErrorCode.VALUE_OUT_OF_RANGE,
            message=f"{field.name} must not exceed {_fmt(field.max_value)}",
            value=value,
            expected=f"<= {_fmt(field.max_value)}",
        ))
    return violations


def _not_a_list(field: AdFieldDefinition, value: Any) -> FieldViolation:
    return FieldViolation(
        field=field.id,
        code=ValidationErrorCode.CONSTRAINT_VIOLATION,
        message=f"{field.name} must be a list",
        value=value,
        expected="list",
    )


def _check_array(field: AdFieldDefinition, value: Any) -> list[FieldViolation]:
    if not isinstance(value, (list, tuple)):
        return [_not_a_list(field, value)]
    violations: list[FieldViolation] = []
    # Item counts apply even when items are templated.
    if field.min_count is not None and len(value) < field.min_count:
        violations.append(FieldViolation(
            field=field.id,
            code=ValidationErrorCode.CONSTRAINT_VIOLATION,
            message=f"{field.name} requires at least {field.min_count} items",
            value=list(value),
            expected=f"at least {field.min_count} items",
        ))
    if field.max_count is not None and len(value) > field.max_count:
        violations.append(FieldViolation(
            field=field.id,
            code=ValidationErrorCode.CONSTRAINT_VIOLATION,
            message=f"{field.name} allows at most {field.max_count} items",
            value=list(value),
            expected=f"at most {field.max_count} items",
        ))
    if field.max_length is not None:
        for position, item in enumerate(value, start=1):
            if isinstance(item, str) and not is_templated(item) and len(item) > field.max_length:
                violations.append(FieldViolation(
                    field=field.id,
                    code=ValidationErrorCode.FIELD_TOO_LONG,
                    message=f"{field.name} item {position} exceeds {field.max_length} characters",
                    value=item,
                    expected=f"max {field.max_length} characters",
                ))
    return violations


def _check_select(field: AdFieldDefinition, value: Any) -> list[FieldViolation]:
    allowed = field.option_values
    if allowed is None or value in allowed:
        return []
    return [FieldViolation(
        field=field.id,
        code=ValidationErrorCode.INVALID_ENUM_VALUE,
        message=f"{field.name} has invalid value",
        value=value,
        expected=f"one of: {', '.join(allowed)}",
    )]


def _check_multiselect(field: AdFieldDefinition, value: Any) -> list[FieldViolation]:
    if not isinstance(value, (list, tuple)):
        return [_not_a_list(field, value)]
    allowed = field.option_values
    if allowed is None:
        return []
    return [
        FieldViolation(
            field=field.id,
            code=ValidationErrorCode.INVALID_ENUM_VALUE,
            message=f"{field.name} contains invalid value: {value_to_string(item)}",
            value=item,
            expected=f"one of: {', '.join(allowed)}",
        )
        for item in value
        if item not in allowed
    ]


def check_field(
    field: AdFieldDefinition,
    value: Any,
    url_schemes: Iterable[str] = DEFAULT_URL_SCHEMES,
) -> list[FieldViolation]:
    """Return every constraint violation of ``value`` against ``field``.

    A missing required value yields exactly one REQUIRED_FIELD violation and
    nothing else; an empty optional value yields none.
    """
    if is_empty(value):
        if field.required:
            return [FieldViolation(
                field=field.id,
                code=ValidationErrorCode.REQUIRED_FIELD,
                message=f"{field.name} is required",
                value=value,
                expected="non-empty value",
            )]
        return []

    if field.type in (FieldType.TEXT, FieldType.TEXTAREA):
        return _check_text(field, value)
    if field.type == FieldType.URL:
        return _check_url(field, value, url_schemes)
    if field.type == FieldType.NUMBER:
        return _check_number(field, value)
    if field.type == FieldType.ARRAY:
        return _check_array(field, value)
    if field.type == FieldType.SELECT:
        return _check_select(field, value)
    if field.type == FieldType.MULTISELECT:
        return _check_multiselect(field, value)
    return []


def validate_field(
    field: AdFieldDefinition,
    value: Any,
    url_schemes: Iterable[str] = DEFAULT_URL_SCHEMES,
) -> list[str]:
    """Error messages for ``value`` against ``field`` (empty list when valid)."""
    return [violation.message for violation in check_field(field, value, url_schemes)]


def validate_ad_data(
    definition: AdTypeDefinition,
    data: dict[str, Any],
    url_schemes: Iterable[str] = DEFAULT_URL_SCHEMES,
) -> ValidationResult:
    """Run every field check, then the ad type's cross-field rule set."""
    result = ValidationResult()
    for field in definition.fields:
        for message in validate_field(field, data.get(field.id), url_schemes):
            result.add_error(message)
    result.merge(definition.validate_rules(data))
    return result


def validate_ad_type(
    registry: AdTypeRegistry,
    platform: str,
    ad_type_id: str,
    data: dict[str, Any],
    url_schemes: Iterable[str] = DEFAULT_URL_SCHEMES,
) -> ValidationResult:
    """Look up the ad type and validate ``data`` against it.

    An unknown type is the only outcome that skips field checks entirely.
    """
    definition = registry.get(platform, ad_type_id)
    if definition is None:
        return ValidationResult(
            valid=False,
            errors=[f'Ad type "{ad_type_id}" not found for platform "{platform}"'],
        )
    return validate_ad_data(definition, data, url_schemes)
