"""PlatformConstraintResolver tests: most restrictive limit across platforms."""

from adsync.domain.ad_types import AdFieldDefinition, AdTypeDefinition, FieldOption, FieldType
from adsync.domain.platform_limits import PlatformConstraintResolver, most_restrictive


def _make_type(platform: str, **field_overrides) -> AdTypeDefinition:
    field = {"id": "headline", "name": "Headline", "type": FieldType.TEXT}
    field.update(field_overrides)
    return AdTypeDefinition(
        id="shared",
        platform=platform,
        name="Shared",
        fields=[AdFieldDefinition(**field)],
    )


class TestMostRestrictive:
    """Minimum of defined limits; undefined entries do not participate."""

    def test_minimum_wins(self):
        assert most_restrictive({"google": 30, "other": 100}) == 30

    def test_absent_limit_does_not_participate(self):
        assert most_restrictive({"google": None, "facebook": 40}) == 40

    def test_nothing_defined(self):
        assert most_restrictive([None, None]) is None
        assert most_restrictive([]) is None


class TestResolver:
    """Per-platform limits with field name mapping."""

    def test_google_facebook_headline(self):
        resolver = PlatformConstraintResolver()
        assert resolver.effective_limit("headline", ["google", "facebook"]) == 30
        assert resolver.effective_limit("headline", ["facebook"]) == 40

    def test_reddit_mapping(self):
        resolver = PlatformConstraintResolver()
        assert resolver.platform_field_name("reddit", "headline") == "title"
        assert resolver.get_field_limit("reddit", "headline") == 300
        assert resolver.effective_limit("description", ["reddit", "facebook"]) == 30

    def test_unknown_platform_and_field(self):
        resolver = PlatformConstraintResolver()
        assert resolver.get_field_limit("tiktok", "headline") is None
        assert resolver.effective_limit("finalUrl", ["google", "facebook"]) is None

    def test_custom_limits(self):
        resolver = PlatformConstraintResolver(limits={"a": {"headline": 100}, "b": {"headline": 30}})
        assert resolver.effective_limit("headline", ["a", "b"]) == 30
        assert resolver.platforms == ["a", "b"]

    def test_resolve_field_tightens(self):
        resolver = PlatformConstraintResolver()
        field = AdFieldDefinition(id="headline", name="Headline", type=FieldType.TEXT, max_length=100)
        assert resolver.resolve_field(field, ["google", "facebook"]).max_length == 30
        assert field.max_length == 100

    def test_resolve_field_keeps_tighter_definition(self):
        resolver = PlatformConstraintResolver()
        field = AdFieldDefinition(id="headline", name="Headline", type=FieldType.TEXT, max_length=20)
        assert resolver.resolve_field(field, ["facebook"]) is field


class TestMergeDefinitions:
    """One ad type present on several platforms."""

    def test_bounds_merged(self):
        resolver = PlatformConstraintResolver()
        merged = resolver.merge_definitions([
            _make_type("google", max_length=30, min_length=2, required=False),
            _make_type("facebook", max_length=40, min_length=5, required=True),
        ])
        assert len(merged) == 1
        assert merged[0].max_length == 30
        assert merged[0].min_length == 5
        assert merged[0].required is True

    def test_options_intersected(self):
        resolver = PlatformConstraintResolver()
        merged = resolver.merge_definitions([
            _make_type(
                "google",
                type=FieldType.SELECT,
                options=[FieldOption(value="A", label="A"), FieldOption(value="B", label="B")],
            ),
            _make_type(
                "facebook",
                type=FieldType.SELECT,
                options=[FieldOption(value="B", label="B"), FieldOption(value="C", label="C")],
            ),
        ])
        assert merged[0].option_values == ["B"]

    def test_single_definition_unchanged(self):
        definition = _make_type("google", max_length=30)
        merged = PlatformConstraintResolver().merge_definitions([definition])
        assert merged == definition.fields
