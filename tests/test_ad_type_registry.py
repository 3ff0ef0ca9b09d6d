"""AdTypeRegistry tests: built-in catalogue, lifecycle and queries."""

from adsync.domain.ad_types import AdFieldDefinition, AdTypeDefinition, FieldType
from adsync.domain.registry import AdTypeRegistry


def _make_type(ad_type_id: str = "custom", platform: str = "google", **overrides) -> AdTypeDefinition:
    data = {
        "id": ad_type_id,
        "platform": platform,
        "name": f"Custom {ad_type_id}",
        "description": "Test ad type",
        "category": "paid",
        "icon": "test",
        "fields": [AdFieldDefinition(id="title", name="Title", type=FieldType.TEXT, required=True)],
    }
    data.update(overrides)
    return AdTypeDefinition(**data)


class TestInitialize:
    """Built-ins are registered once; reset drops custom registrations."""

    def test_builtin_catalogue_loaded(self):
        registry = AdTypeRegistry().initialize()
        assert registry.initialized
        assert len(registry) == 13
        assert registry.get("google", "responsive-search") is not None
        assert registry.get("facebook", "carousel") is not None
        assert registry.get("reddit", "thread") is not None

    def test_initialize_is_idempotent(self):
        registry = AdTypeRegistry().initialize()
        registry.register(_make_type())
        registry.initialize()
        assert len(registry) == 14
        assert ("google", "custom") in registry

    def test_reset_drops_custom_types(self):
        registry = AdTypeRegistry().initialize()
        registry.register(_make_type())
        registry.initialize(reset=True)
        assert len(registry) == 13
        assert registry.get("google", "custom") is None

    def test_clear(self):
        registry = AdTypeRegistry().initialize()
        registry.clear()
        assert len(registry) == 0
        assert not registry.initialized

    def test_uninitialized_registry_is_empty(self):
        assert AdTypeRegistry().get("google", "responsive-search") is None


class TestRegister:
    """Keyed by (platform, id); last write wins."""

    def test_overwrite(self):
        registry = AdTypeRegistry()
        registry.register(_make_type(name="First"))
        registry.register(_make_type(name="Second"))
        assert len(registry) == 1
        assert registry.get("google", "custom").name == "Second"

    def test_same_id_different_platforms(self):
        registry = AdTypeRegistry([_make_type(platform="google"), _make_type(platform="reddit")])
        assert len(registry) == 2
        assert registry.platforms == ["google", "reddit"]


class TestQueries:
    """Platform and category filters."""

    def test_by_platform(self):
        registry = AdTypeRegistry().initialize()
        assert {d.id for d in registry.get_by_platform("google")} == {
            "responsive-search",
            "responsive-display",
            "performance-max",
        }
        assert registry.get_by_platform("tiktok") == []

    def test_by_category(self):
        registry = AdTypeRegistry().initialize()
        organic = registry.get_by_category("organic")
        assert [(d.platform, d.id) for d in organic] == [("reddit", "thread")]

    def test_paid_organic_promoted(self):
        registry = AdTypeRegistry().initialize()
        assert len(registry.get_paid_types("facebook")) == 4
        assert [d.id for d in registry.get_promoted_types("reddit")] == ["conversation"]
        assert [d.id for d in registry.get_organic_types("reddit")] == ["thread"]
        assert registry.get_organic_types("google") == []

    def test_get_field(self):
        definition = AdTypeRegistry().initialize().get("google", "responsive-search")
        headlines = definition.get_field("headlines")
        assert headlines.max_length == 30
        assert headlines.min_count == 3
        assert definition.get_field("nope") is None


class TestRuleSets:
    """Cross-field rules are looked up by name."""

    def test_responsive_search_rules(self):
        definition = AdTypeRegistry().initialize().get("google", "responsive-search")
        result = definition.validate_rules({"headlines": ["a", "b"], "descriptions": ["x", "y"]})
        assert not result.valid
        assert "At least 3 headlines required" in result.errors

    def test_duplicate_headlines_warn_only(self):
        definition = AdTypeRegistry().initialize().get("google", "responsive-search")
        result = definition.validate_rules({"headlines": ["a", "a", "b"], "descriptions": ["x", "y"]})
        assert result.valid
        assert result.warnings == ["Headlines should be unique for better performance"]

    def test_no_rule_set_is_valid(self):
        result = _make_type().validate_rules({})
        assert result.valid
        assert result.errors == []
