"""Uniform validation result contract and structured field violations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .error_codes import TRUNCATABLE_CODES, ValidationErrorCode


class ValidationResult:
    """Result of validating an ad or a field set.

    Errors are blocking, warnings are advisory only.
    """

    def __init__(self, valid: bool = True, errors: list[str] | None = None, warnings: list[str] | None = None):
        self.errors = list(errors or [])
        self.warnings = list(warnings or [])
        self.valid = valid and not self.errors

    def __repr__(self) -> str:
        return f"ValidationResult(valid={self.valid}, errors={self.errors!r}, warnings={self.warnings!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationResult):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON response."""
        return {
            "valid": self.valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }

    def add_error(self, error: str) -> ValidationResult:
        """Add an error and return self for chaining."""
        self.errors.append(error)
        self.valid = False
        return self

    def add_warning(self, warning: str) -> ValidationResult:
        """Add a warning and return self for chaining."""
        self.warnings.append(warning)
        return self

    def merge(self, other: ValidationResult) -> ValidationResult:
        """Fold another result's errors and warnings into this one."""
        for error in other.errors:
            self.add_error(error)
        for warning in other.warnings:
            self.add_warning(warning)
        return self


@dataclass(frozen=True)
class FieldViolation:
    """One constraint violation on one field, with its reason code."""

    field: str
    code: ValidationErrorCode
    message: str
    value: Any = None
    expected: str | None = None

    @property
    def is_length_overrun(self) -> bool:
        return self.code in TRUNCATABLE_CODES
