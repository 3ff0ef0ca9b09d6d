"""Fallback policies for values that overrun a length limit."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FallbackPolicy(str, Enum):
    """How a too-long field is degraded instead of blocking the ad."""

    TRUNCATE = "truncate"            # hard cut at the limit
    TRUNCATE_WORD = "truncate_word"  # cut at the last whitespace at or before the limit
    ERROR = "error"                  # same as no policy

    @property
    def repairs(self) -> bool:
        return self is not FallbackPolicy.ERROR


@dataclass(frozen=True)
class FallbackOutcome:
    """A successful substitution for one field."""

    field: str
    original: str
    substituted: str
    limit: int
    policy: FallbackPolicy

    @property
    def reason(self) -> str:
        return f"Text will be truncated: {self.field} ({len(self.original)}/{self.limit})"


def truncate_text(text: str, limit: int) -> str:
    """Hard cut to at most ``limit`` characters."""
    if limit <= 0:
        return ""
    return text[:limit]


def truncate_to_word_boundary(text: str, limit: int) -> str:
    """Cut at the last whitespace at or before ``limit``; hard cut when there is none.

    Trailing whitespace is dropped from the result.
    """
    if len(text) <= limit:
        return text
    if limit <= 0:
        return ""
    # The boundary may sit exactly at the limit (text[limit] is whitespace).
    boundary = -1
    for index in range(limit, 0, -1):
        if text[index].isspace():
            boundary = index
            break
    if boundary <= 0:
        return text[:limit]
    cut = text[:boundary].rstrip()
    return cut or text[:limit]


def apply_fallback(
    field: str,
    text: str,
    limit: int,
    policy: FallbackPolicy | str | None,
) -> FallbackOutcome | None:
    """Apply ``policy`` to an overrunning value; ``None`` means no usable fallback."""
    if policy is None:
        return None
    policy = FallbackPolicy(policy)
    if not policy.repairs or len(text) <= limit:
        return None
    if policy is FallbackPolicy.TRUNCATE:
        substituted = truncate_text(text, limit)
    else:
        substituted = truncate_to_word_boundary(text, limit)
    return FallbackOutcome(
        field=field,
        original=text,
        substituted=substituted,
        limit=limit,
        policy=policy,
    )
