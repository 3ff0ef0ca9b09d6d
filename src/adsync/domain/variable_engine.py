"""Variable template engine: placeholder parsing, extraction and interpolation.

Grammar: a placeholder is ``{`` + one or more non-brace characters + ``}``
(regex ``\\{[^{}]+\\}``). Nested braces are never matched. Inside a
placeholder, ``|`` separates the primary variable name from trailing
segments; each trailing segment is either a named filter or a data fallback:

- ``{name|uppercase}``: ``uppercase`` is a registered filter, so it is applied.
- ``{sale_price|regular_price}``: ``regular_price`` is not a filter, so it is
  tried when ``sale_price`` is absent from the row. An empty string is a
  present value and stops the chain.
- ``{desc|truncate:30}``: a segment with ``:`` arguments is always a filter.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Mapping

PLACEHOLDER_RE = re.compile(r"\{[^{}]+\}")

_SLUG_STRIP_RE = re.compile(r"[^\w\s-]")
_WHITESPACE_RE = re.compile(r"\s+")
_DASHES_RE = re.compile(r"-+")

DEFAULT_MAX_TEMPLATE_LENGTH = 50_000
MAX_VARIABLES = 100

_DATE_TOKENS = (
    ("YYYY", "%Y"),
    ("MM", "%m"),
    ("DD", "%d"),
    ("HH", "%H"),
    ("mm", "%M"),
    ("ss", "%S"),
)

_CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£", "JPY": "¥"}

FilterFunction = Callable[..., str]

_LOGGER = logging.getLogger("adsync.templates")


def is_templated(value: Any) -> bool:
    """True for strings that contain both ``{`` and ``}`` anywhere."""
    return isinstance(value, str) and "{" in value and "}" in value


def value_to_string(value: Any) -> str:
    """Render a row value the way it appears inside interpolated text."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ", ".join(value_to_string(v) for v in value)
    return str(value)


def parse_iso_datetime(text: str) -> datetime:
    """Parse ISO 8601 (trailing ``Z`` allowed) as an aware UTC datetime. Raises ValueError."""
    text = text.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _is_missing(value: Any) -> bool:
    # An empty string is a present value; only absent keys fall through.
    return value is None


def _parse_float(value: str) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


# ---------------------------------------------------------------------------
# Built-in filters
# ---------------------------------------------------------------------------


def _capitalize(value: str) -> str:
    return value[:1].upper() + value[1:].lower()


def _titlecase(value: str) -> str:
    return " ".join(_capitalize(word) for word in value.split(" "))


def _truncate(value: str, length: str = "", suffix: str = "...") -> str:
    try:
        max_length = int(length)
    except ValueError:
        return value
    if len(value) <= max_length:
        return value
    return value[:max_length].rstrip() + suffix


def _format_date(value: str, *pattern_parts: str) -> str:
    """Render an ISO date with YYYY MM DD HH mm ss tokens (first occurrence each, UTC)."""
    # ``HH:mm`` arrives split on the argument separator.
    pattern = ":".join(pattern_parts)
    if not pattern:
        return value
    try:
        dt = parse_iso_datetime(value)
    except ValueError:
        return value
    result = pattern
    for token, directive in _DATE_TOKENS:
        result = result.replace(token, dt.strftime(directive), 1)
    return result


def _slug(value: str) -> str:
    slug = _SLUG_STRIP_RE.sub("", value.lower())
    slug = _WHITESPACE_RE.sub("-", slug)
    return _DASHES_RE.sub("-", slug).strip()


def _currency(value: str, currency_code: str = "USD") -> str:
    num = _parse_float(value)
    if num is None:
        return value
    code = currency_code.upper()
    symbol = _CURRENCY_SYMBOLS.get(code)
    sign = "-" if num < 0 else ""
    if symbol is None:
        return f"{sign}{code} {abs(num):,.2f}"
    return f"{sign}{symbol}{abs(num):,.2f}"


def _number(value: str, decimals: str | None = None) -> str:
    num = _parse_float(value)
    if num is None:
        return value
    if decimals is not None:
        try:
            places = int(decimals)
        except ValueError:
            places = -1
        if places >= 0:
            return f"{num:,.{places}f}"
    text = f"{num:,.3f}".rstrip("0").rstrip(".")
    return text


def _percent(value: str) -> str:
    num = _parse_float(value)
    if num is None:
        return value
    return f"{num * 100:.1f}%"


def _replace(value: str, search: str = "", replacement: str = "") -> str:
    if not search:
        return value
    return value.replace(search, replacement)


def _default(value: str, default_value: str = "") -> str:
    return default_value if value == "" else value


BUILTIN_FILTERS: dict[str, FilterFunction] = {
    "uppercase": lambda value: value.upper(),
    "lowercase": lambda value: value.lower(),
    "capitalize": _capitalize,
    "titlecase": _titlecase,
    "trim": lambda value: value.strip(),
    "truncate": _truncate,
    "slug": _slug,
    "currency": _currency,
    "number": _number,
    "percent": _percent,
    "format": _format_date,
    "replace": _replace,
    "default": _default,
}


# ---------------------------------------------------------------------------
# Parsed placeholders
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TemplateFilter:
    """A filter segment such as ``truncate:30`` -> name='truncate', args=('30',)."""

    name: str
    args: tuple[str, ...] = ()


@dataclass(frozen=True)
class Placeholder:
    """One ``{...}`` occurrence with its fallback chain and filters split out."""

    raw: str
    name: str
    fallbacks: tuple[str, ...] = ()
    filters: tuple[TemplateFilter, ...] = ()
    segments: tuple[str, ...] = field(default=(), repr=False)

    @property
    def data_references(self) -> tuple[str, ...]:
        """Variable names looked up in row data, in resolution order."""
        return (self.name, *self.fallbacks)


class VariableEngine:
    """Parse and interpolate ad templates against rows of source data."""

    def __init__(
        self,
        max_template_length: int | None = DEFAULT_MAX_TEMPLATE_LENGTH,
        max_variables: int | None = MAX_VARIABLES,
        logger: logging.Logger | None = None,
    ) -> None:
        self._filters: dict[str, FilterFunction] = dict(BUILTIN_FILTERS)
        self._max_template_length = max_template_length
        self._max_variables = max_variables
        self._logger = logger or _LOGGER

    # --- filters ---------------------------------------------------------

    def register_filter(self, name: str, fn: FilterFunction) -> None:
        """Register a custom filter on this engine instance."""
        self._filters[name] = fn

    def is_filter(self, name: str) -> bool:
        return name in self._filters

    @property
    def filter_names(self) -> list[str]:
        return sorted(self._filters)

    # --- parsing ---------------------------------------------------------

    def parse_placeholder(self, raw: str) -> Placeholder:
        """Split a ``{...}`` placeholder into name, data fallbacks and filters."""
        body = raw[1:-1] if raw.startswith("{") and raw.endswith("}") else raw
        segments = tuple(part.strip() for part in body.split("|") if part.strip())
        if not segments:
            return Placeholder(raw=raw, name="")
        name = segments[0]
        fallbacks: list[str] = []
        filters: list[TemplateFilter] = []
        for segment in segments[1:]:
            seg_name, *args = segment.split(":")
            seg_name = seg_name.strip()
            if args or self.is_filter(seg_name):
                filters.append(TemplateFilter(name=seg_name, args=tuple(args)))
            else:
                fallbacks.append(seg_name)
        return Placeholder(
            raw=raw,
            name=name,
            fallbacks=tuple(fallbacks),
            filters=tuple(filters),
            segments=segments,
        )

    def placeholders(self, template: str) -> list[Placeholder]:
        if not isinstance(template, str) or not template:
            return []
        return [self.parse_placeholder(m.group(0)) for m in PLACEHOLDER_RE.finditer(template)]

    def extract_variables(self, template: str) -> list[str]:
        """All names referenced by placeholders, first occurrence order, no duplicates.

        ``{a|b|c}`` contributes ``a``, ``b`` and ``c`` whether the trailing names
        are fallbacks or filters; filter arguments are dropped.
        """
        names: list[str] = []
        for placeholder in self.placeholders(template):
            for segment in placeholder.segments:
                name = segment.split(":")[0].strip()
                if name and name not in names:
                    names.append(name)
        return names

    def data_variables(self, template: str) -> list[str]:
        """Names looked up in row data (primary names and fallbacks, never filters)."""
        names: list[str] = []
        for placeholder in self.placeholders(template):
            for name in placeholder.data_references:
                if name and name not in names:
                    names.append(name)
        return names

    def unknown_variables(self, template: str, columns: Iterable[str]) -> list[str]:
        """Data variables that match no known column (case-insensitive)."""
        known = {c.lower() for c in columns}
        return [name for name in self.data_variables(template) if name.lower() not in known]

    # --- guards ----------------------------------------------------------

    def template_error(self, template: Any) -> str | None:
        """Why ``template`` is refused for interpolation, or None when it is accepted."""
        if not isinstance(template, str):
            return None
        if self._max_template_length is not None and len(template) > self._max_template_length:
            return f"Template exceeds maximum length of {self._max_template_length} characters"
        if self._max_variables is not None:
            distinct = {m.group(0) for m in PLACEHOLDER_RE.finditer(template)}
            if len(distinct) > self._max_variables:
                return f"Template exceeds maximum variable count of {self._max_variables}"
        return None

    # --- interpolation ---------------------------------------------------

    def interpolate(self, template: str, row: Mapping[str, Any] | None) -> str:
        """Substitute every placeholder from ``row``; unresolved ones become ``""``.

        Templates refused by :meth:`template_error` are returned unchanged.
        """
        if not isinstance(template, str) or not template:
            return "" if template is None else value_to_string(template)
        error = self.template_error(template)
        if error is not None:
            self._logger.warning("template_rejected", extra={"length": len(template), "error": error})
            return template
        data = row or {}

        def _substitute(match: re.Match[str]) -> str:
            placeholder = self.parse_placeholder(match.group(0))
            return self._resolve(placeholder, data)

        return PLACEHOLDER_RE.sub(_substitute, template)

    def get_character_count(self, template: str, row: Mapping[str, Any] | None) -> int:
        """Length of the interpolated string."""
        return len(self.interpolate(template, row))

    def _resolve(self, placeholder: Placeholder, row: Mapping[str, Any]) -> str:
        value: Any = None
        for name in placeholder.data_references:
            candidate = row.get(name)
            if not _is_missing(candidate):
                value = candidate
                break
        text = value_to_string(value)
        for template_filter in placeholder.filters:
            text = self._apply_filter(text, template_filter)
        return text

    def _apply_filter(self, value: str, template_filter: TemplateFilter) -> str:
        fn = self._filters.get(template_filter.name)
        if fn is None:
            return value
        try:
            return fn(value, *template_filter.args)
        except (TypeError, ValueError, ArithmeticError) as exc:
            self._logger.warning(
                "template_filter_failed",
                extra={"filter": template_filter.name, "error": str(exc)},
            )
            return value


_DEFAULT_ENGINE = VariableEngine()


def extract_variables(template: str) -> list[str]:
    return _DEFAULT_ENGINE.extract_variables(template)


def interpolate(template: str, row: Mapping[str, Any] | None) -> str:
    return _DEFAULT_ENGINE.interpolate(template, row)


def get_character_count(template: str, row: Mapping[str, Any] | None) -> int:
    return _DEFAULT_ENGINE.get_character_count(template, row)
