"""Platform constraint resolver: the most restrictive limit across targeted platforms."""

from __future__ import annotations

from typing import Iterable, Mapping

from .ad_types import AdFieldDefinition, AdTypeDefinition, FieldOption

# Character limits per platform, keyed by the platform's own field name.
PLATFORM_LIMITS: dict[str, dict[str, int]] = {
    "google": {
        "headline": 30,
        "description": 90,
        "displayUrl": 30,
    },
    "facebook": {
        "headline": 40,
        "primaryText": 125,
        "description": 30,
    },
    "reddit": {
        "title": 300,
        "text": 500,
    },
}

# Standard ad field -> platform field name, where they differ.
FIELD_MAPPING: dict[str, dict[str, str]] = {
    "reddit": {
        "headline": "title",
        "description": "text",
    },
}


def most_restrictive(limits: Mapping[str, int | None] | Iterable[int | None]) -> int | None:
    """Minimum of the defined limits; ``None`` entries do not participate.

    Returns ``None`` when no entry constrains the value.
    """
    values = limits.values() if isinstance(limits, Mapping) else limits
    defined = [v for v in values if v is not None]
    return min(defined) if defined else None


def _largest(values: Iterable[int | float | None]) -> int | float | None:
    defined = [v for v in values if v is not None]
    return max(defined) if defined else None


def _intersect_options(fields: list[AdFieldDefinition]) -> list[FieldOption] | None:
    option_sets = [f.options for f in fields if f.options is not None]
    if not option_sets:
        return None
    common = set.intersection(*({o.value for o in options} for options in option_sets))
    return [o for o in option_sets[0] if o.value in common]


class PlatformConstraintResolver:
    """Resolve per-field limits for a set of simultaneously selected platforms."""

    def __init__(
        self,
        limits: Mapping[str, Mapping[str, int]] | None = None,
        field_mapping: Mapping[str, Mapping[str, str]] | None = None,
    ) -> None:
        self._limits = {p: dict(v) for p, v in (limits if limits is not None else PLATFORM_LIMITS).items()}
        self._mapping = {
            p: dict(v) for p, v in (field_mapping if field_mapping is not None else FIELD_MAPPING).items()
        }

    @property
    def platforms(self) -> list[str]:
        return list(self._limits)

    def platform_field_name(self, platform: str, field: str) -> str:
        return self._mapping.get(platform, {}).get(field, field)

    def get_field_limit(self, platform: str, field: str) -> int | None:
        """The platform's own limit for ``field``, or ``None`` when it sets none."""
        platform_limits = self._limits.get(platform)
        if not platform_limits:
            return None
        return platform_limits.get(self.platform_field_name(platform, field))

    def limits_for(self, field: str, platforms: Iterable[str]) -> dict[str, int | None]:
        return {platform: self.get_field_limit(platform, field) for platform in platforms}

    def effective_limit(self, field: str, platforms: Iterable[str]) -> int | None:
        """Most restrictive limit for ``field`` across ``platforms``."""
        return most_restrictive(self.limits_for(field, platforms))

    def resolve_field(self, field: AdFieldDefinition, platforms: Iterable[str]) -> AdFieldDefinition:
        """Copy of ``field`` whose ``max_length`` is the tightest of its own and the platforms'."""
        limits = self.limits_for(field.id, platforms)
        limits["definition"] = field.max_length
        effective = most_restrictive(limits)
        if effective == field.max_length:
            return field
        return field.model_copy(update={"max_length": effective})

    def merge_definitions(self, definitions: Iterable[AdTypeDefinition]) -> list[AdFieldDefinition]:
        """Merge the fields of one ad type across platforms so a value fits all of them.

        Upper bounds take the minimum, lower bounds the maximum, ``required``
        holds if any platform requires the field and select options are
        intersected. Field order follows first appearance.
        """
        grouped: dict[str, list[AdFieldDefinition]] = {}
        for definition in definitions:
            for field in definition.fields:
                grouped.setdefault(field.id, []).append(field)

        merged: list[AdFieldDefinition] = []
        for variants in grouped.values():
            first = variants[0]
            if len(variants) == 1:
                merged.append(first)
                continue
            merged.append(first.model_copy(update={
                "required": any(f.required for f in variants),
                "supports_variables": all(f.supports_variables for f in variants),
                "min_length": _largest(f.min_length for f in variants),
                "max_length": most_restrictive(f.max_length for f in variants),
                "min_value": _largest(f.min_value for f in variants),
                "max_value": most_restrictive(f.max_value for f in variants),
                "min_count": _largest(f.min_count for f in variants),
                "max_count": most_restrictive(f.max_count for f in variants),
                "options": _intersect_options(variants),
            }))
        return merged
