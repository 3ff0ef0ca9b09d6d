"""Field validator tests: per-type constraints, reason codes and ad type validation."""

from adsync.domain.ad_types import AdFieldDefinition, FieldOption, FieldType
from adsync.domain.error_codes import ValidationErrorCode
from adsync.domain.field_validator import (
    check_field,
    is_valid_url,
    validate_ad_type,
    validate_field,
)
from adsync.domain.registry import AdTypeRegistry


def _make_field(field_type: FieldType = FieldType.TEXT, **overrides) -> AdFieldDefinition:
    data = {"id": "headline", "name": "Headline", "type": field_type}
    data.update(overrides)
    return AdFieldDefinition(**data)


def _codes(field: AdFieldDefinition, value) -> list[ValidationErrorCode]:
    return [v.code for v in check_field(field, value)]


class TestRequired:
    """Empty required values yield exactly one REQUIRED_FIELD violation."""

    def test_required_missing(self):
        field = _make_field(required=True, min_length=5)
        violations = check_field(field, "")
        assert len(violations) == 1
        assert violations[0].code == ValidationErrorCode.REQUIRED_FIELD
        assert violations[0].message == "Headline is required"

    def test_required_none(self):
        field = _make_field(required=True)
        assert validate_field(field, None) == ["Headline is required"]

    def test_required_present(self):
        assert validate_field(_make_field(required=True), "x") == []

    def test_required_empty_list(self):
        field = _make_field(FieldType.ARRAY, id="headlines", name="Headlines", required=True, min_count=3)
        assert _codes(field, []) == [ValidationErrorCode.REQUIRED_FIELD]

    def test_optional_empty_passes(self):
        assert check_field(_make_field(max_length=5), None) == []


class TestText:
    """Length and pattern checks; templated raw values skip length checks."""

    def test_too_long(self):
        field = _make_field(max_length=10)
        violations = check_field(field, "This is far too long")
        assert violations[0].code == ValidationErrorCode.FIELD_TOO_LONG
        assert violations[0].message == "Headline must not exceed 10 characters"

    def test_too_short(self):
        assert validate_field(_make_field(min_length=5), "abc") == ["Headline must be at least 5 characters"]

    def test_templated_skips_length(self):
        assert check_field(_make_field(max_length=5), "{a_very_long_variable_name}") == []

    def test_pattern(self):
        field = _make_field(pattern=r"^[A-Z]")
        assert validate_field(field, "lower") == ["Headline has invalid format"]
        assert validate_field(field, "Upper") == []

    def test_invalid_pattern_is_ignored(self):
        assert check_field(_make_field(pattern="(unclosed"), "anything") == []


class TestUrl:
    """Strict http(s) URLs with a host."""

    def test_valid(self):
        assert is_valid_url("https://example.com/landing?x=1")
        assert check_field(_make_field(FieldType.URL, id="finalUrl", name="Final URL"), "http://shop.example.com") == []

    def test_invalid(self):
        field = _make_field(FieldType.URL, id="finalUrl", name="Final URL")
        violations = check_field(field, "not a url")
        assert violations[0].code == ValidationErrorCode.INVALID_URL
        assert violations[0].message == "Final URL must be a valid URL"

    def test_scheme_restricted(self):
        assert not is_valid_url("ftp://example.com/file")
        assert is_valid_url("ftp://example.com/file", schemes=("ftp",))

    def test_templated_url_skipped(self):
        assert check_field(_make_field(FieldType.URL), "https://example.com/{slug}") == []


class TestNumber:
    """Numeric parsing and range checks."""

    def test_range(self):
        field = _make_field(FieldType.NUMBER, id="bid", name="Bid", min_value=1, max_value=100)
        assert _codes(field, 0.5) == [ValidationErrorCode.VALUE_OUT_OF_RANGE]
        assert validate_field(field, "150") == ["Bid must not exceed 100"]
        assert check_field(field, "42") == []

    def test_not_a_number(self):
        field = _make_field(FieldType.NUMBER, id="bid", name="Bid")
        assert validate_field(field, "abc") == ["Bid must be a number"]
        assert validate_field(field, True) == ["Bid must be a number"]


class TestArray:
    """Item counts and per-item length."""

    def test_counts(self):
        field = _make_field(FieldType.ARRAY, id="headlines", name="Headlines", min_count=3, max_count=4)
        assert validate_field(field, ["a", "b"]) == ["Headlines requires at least 3 items"]
        assert validate_field(field, ["a"] * 5) == ["Headlines allows at most 4 items"]

    def test_item_too_long(self):
        field = _make_field(FieldType.ARRAY, id="headlines", name="Headlines", max_length=5)
        violations = check_field(field, ["ok", "way too long"])
        assert len(violations) == 1
        assert violations[0].code == ValidationErrorCode.FIELD_TOO_LONG
        assert violations[0].message == "Headlines item 2 exceeds 5 characters"

    def test_not_a_list(self):
        field = _make_field(FieldType.ARRAY, id="headlines", name="Headlines")
        assert validate_field(field, "single") == ["Headlines must be a list"]


class TestSelect:
    """Option membership; no options means free values."""

    def test_select(self):
        field = _make_field(
            FieldType.SELECT,
            id="callToAction",
            name="Call to Action",
            options=[FieldOption(value="SHOP_NOW", label="Shop Now")],
        )
        assert check_field(field, "SHOP_NOW") == []
        assert _codes(field, "BUY") == [ValidationErrorCode.INVALID_ENUM_VALUE]

    def test_multiselect(self):
        field = _make_field(
            FieldType.MULTISELECT,
            id="placements",
            name="Placements",
            options=[FieldOption(value="feed", label="Feed"), FieldOption(value="stories", label="Stories")],
        )
        assert check_field(field, ["feed"]) == []
        assert validate_field(field, ["feed", "reels"]) == ["Placements contains invalid value: reels"]

    def test_multiselect_without_options(self):
        field = _make_field(FieldType.MULTISELECT, id="subreddits", name="Subreddits")
        assert check_field(field, ["r/python"]) == []


class TestValidateAdType:
    """Registry lookup plus field checks plus rule set."""

    def test_unknown_ad_type(self):
        result = validate_ad_type(AdTypeRegistry().initialize(), "google", "banner", {})
        assert not result.valid
        assert result.errors == ['Ad type "banner" not found for platform "google"']

    def test_valid_responsive_search(self):
        data = {
            "headlines": ["Fast Shoes", "Cheap Shoes", "Great Shoes"],
            "descriptions": ["Buy shoes today.", "Free shipping on all orders."],
            "finalUrl": "https://example.com/shoes",
        }
        result = validate_ad_type(AdTypeRegistry().initialize(), "google", "responsive-search", data)
        assert result.valid
        assert result.errors == []

    def test_field_and_rule_errors_combined(self):
        data = {
            "headlines": ["Only one"],
            "descriptions": ["One", "Two"],
            "finalUrl": "example",
        }
        result = validate_ad_type(AdTypeRegistry().initialize(), "google", "responsive-search", data)
        assert not result.valid
        assert "Headlines requires at least 3 items" in result.errors
        assert "Final URL must be a valid URL" in result.errors
        assert "At least 3 headlines required" in result.errors

    def test_reddit_thread_link_post(self):
        data = {"title": "Check this out", "subreddit": "python", "postType": "link"}
        result = validate_ad_type(AdTypeRegistry().initialize(), "reddit", "thread", data)
        assert "URL is required for link posts" in result.errors
