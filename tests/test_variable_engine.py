"""VariableEngine tests: placeholder grammar, fallbacks, filters, interpolation."""

from adsync.domain.variable_engine import (
    DEFAULT_MAX_TEMPLATE_LENGTH,
    MAX_VARIABLES,
    VariableEngine,
    extract_variables,
    get_character_count,
    interpolate,
    is_templated,
    value_to_string,
)


class TestExtractVariables:
    """Every referenced name, first-occurrence order, no duplicates."""

    def test_simple_and_repeated(self):
        assert extract_variables("{brand} {product} by {brand}") == ["brand", "product"]

    def test_fallback_and_filter_segments_included(self):
        assert extract_variables("{sale_price|regular_price} {name|uppercase}") == [
            "sale_price",
            "regular_price",
            "name",
            "uppercase",
        ]

    def test_filter_arguments_dropped(self):
        assert extract_variables("{desc|truncate:30}") == ["desc", "truncate"]

    def test_no_placeholders(self):
        assert extract_variables("Plain headline") == []
        assert extract_variables("") == []

    def test_nested_braces_not_matched_as_outer(self):
        assert extract_variables("{{inner}}") == ["inner"]


class TestDataVariables:
    """Filters are not data; fallbacks are."""

    def test_filters_excluded(self):
        engine = VariableEngine()
        assert engine.data_variables("{name|uppercase} {sale|regular}") == ["name", "sale", "regular"]

    def test_segment_with_args_is_filter(self):
        engine = VariableEngine()
        placeholder = engine.parse_placeholder("{price|currency:EUR}")
        assert placeholder.name == "price"
        assert placeholder.fallbacks == ()
        assert placeholder.filters[0].name == "currency"
        assert placeholder.filters[0].args == ("EUR",)

    def test_unknown_variables_case_insensitive(self):
        engine = VariableEngine()
        assert engine.unknown_variables("{Brand} {color}", ["brand", "size"]) == ["color"]


class TestInterpolate:
    """Substitution, fallback chains and missing values."""

    def test_substitutes_values(self):
        assert interpolate("Buy {product} now", {"product": "Shoes"}) == "Buy Shoes now"

    def test_missing_becomes_empty(self):
        assert interpolate("Hi {name}!", {}) == "Hi !"

    def test_fallback_used_when_primary_absent(self):
        assert interpolate("{sale_price|regular_price}", {"regular_price": "49"}) == "49"

    def test_empty_primary_stops_fallback_chain(self):
        row = {"sale_price": "", "regular_price": "49"}
        assert interpolate("{sale_price|regular_price}", row) == ""

    def test_none_primary_falls_through(self):
        row = {"sale_price": None, "regular_price": "49"}
        assert interpolate("{sale_price|regular_price}", row) == "49"

    def test_primary_wins_when_present(self):
        row = {"sale_price": "39", "regular_price": "49"}
        assert interpolate("{sale_price|regular_price}", row) == "39"

    def test_no_row(self):
        assert interpolate("{a}-{b}", None) == "-"

    def test_value_rendering(self):
        assert value_to_string(12.0) == "12"
        assert value_to_string(True) == "true"
        assert value_to_string(["a", "b"]) == "a, b"
        assert value_to_string(None) == ""

    def test_character_count(self):
        assert get_character_count("{brand} shoes", {"brand": "Acme"}) == len("Acme shoes")

    def test_overlong_template_returned_unchanged(self):
        engine = VariableEngine(max_template_length=5)
        assert engine.interpolate("{abc} long", {"abc": "x"}) == "{abc} long"


class TestTemplateGuards:
    """Length and distinct-placeholder limits refuse a template outright."""

    def test_accepted_template(self):
        assert VariableEngine().template_error("{name} shoes") is None
        assert VariableEngine().template_error(None) is None

    def test_length_limit(self):
        engine = VariableEngine(max_template_length=40)
        assert engine.template_error("{name} " + "x" * 60) == "Template exceeds maximum length of 40 characters"
        assert engine.template_error("x" * 40) is None

    def test_default_limits(self):
        assert DEFAULT_MAX_TEMPLATE_LENGTH == 50_000
        assert MAX_VARIABLES == 100
        assert VariableEngine().template_error("x" * 50_001) is not None

    def test_variable_count_limit(self):
        template = " ".join(f"{{v{i}}}" for i in range(101))
        assert VariableEngine().template_error(template) == "Template exceeds maximum variable count of 100"
        assert VariableEngine().interpolate(template, {"v0": "a"}) == template

    def test_repeated_placeholders_counted_once(self):
        template = " ".join("{v}" for _ in range(150))
        assert VariableEngine().template_error(template) is None

    def test_variable_count_configurable(self):
        engine = VariableEngine(max_variables=2)
        assert engine.template_error("{a} {b} {c}") == "Template exceeds maximum variable count of 2"
        assert VariableEngine(max_variables=None).template_error("{a} {b} {c}") is None


class TestFilters:
    """Built-in filters and custom registration."""

    def test_case_filters(self):
        row = {"name": "hello WORLD"}
        assert interpolate("{name|uppercase}", row) == "HELLO WORLD"
        assert interpolate("{name|lowercase}", row) == "hello world"
        assert interpolate("{name|capitalize}", row) == "Hello world"
        assert interpolate("{name|titlecase}", row) == "Hello World"

    def test_truncate_filter(self):
        assert interpolate("{t|truncate:5}", {"t": "abcdefgh"}) == "abcde..."
        assert interpolate("{t|truncate:20}", {"t": "short"}) == "short"

    def test_slug(self):
        assert interpolate("{t|slug}", {"t": "Hello, World  Shoes"}) == "hello-world-shoes"

    def test_currency(self):
        assert interpolate("{p|currency:USD}", {"p": 1234.5}) == "$1,234.50"
        assert interpolate("{p|currency:EUR}", {"p": "10"}) == "€10.00"
        assert interpolate("{p|currency:CHF}", {"p": "10"}) == "CHF 10.00"

    def test_currency_non_numeric_passthrough(self):
        assert interpolate("{p|currency:USD}", {"p": "free"}) == "free"

    def test_number_and_percent(self):
        assert interpolate("{n|number:2}", {"n": "1234.5"}) == "1,234.50"
        assert interpolate("{n|number}", {"n": "1234.5"}) == "1,234.5"
        assert interpolate("{r|percent}", {"r": "0.25"}) == "25.0%"

    def test_date_format(self):
        row = {"d": "2026-03-05T10:20:30Z"}
        assert interpolate("{d|format:YYYY-MM-DD}", row) == "2026-03-05"
        assert interpolate("{d|format:DD/MM/YYYY HH}", row) == "05/03/2026 10"

    def test_date_format_time_with_colons(self):
        assert interpolate("{d|format:HH:mm:ss}", {"d": "2026-03-05T10:20:30Z"}) == "10:20:30"

    def test_date_format_converts_to_utc(self):
        assert interpolate("{d|format:HH}", {"d": "2026-03-05T10:20:30+02:00"}) == "08"

    def test_date_format_first_token_only(self):
        assert interpolate("{d|format:YYYY YYYY}", {"d": "2026-03-05"}) == "2026 YYYY"

    def test_date_format_invalid_passthrough(self):
        assert interpolate("{d|format:YYYY}", {"d": "soon"}) == "soon"
        assert interpolate("{d|format}", {"d": "2026-03-05"}) == "2026-03-05"

    def test_format_is_filter_not_fallback(self):
        engine = VariableEngine()
        assert engine.data_variables("{d|format}") == ["d"]
        assert engine.unknown_variables("{d|format}", ["d"]) == []

    def test_replace_and_default(self):
        assert interpolate("{t|replace:-:_}", {"t": "a-b-c"}) == "a_b_c"
        assert interpolate("{t|default:N/A}", {"t": ""}) == "N/A"

    def test_filters_chain_after_fallback(self):
        assert interpolate("{sale|regular|uppercase}", {"regular": "shoes"}) == "SHOES"

    def test_custom_filter(self):
        engine = VariableEngine()
        engine.register_filter("reverse", lambda value: value[::-1])
        assert engine.is_filter("reverse")
        assert engine.interpolate("{w|reverse}", {"w": "abc"}) == "cba"

    def test_custom_filter_only_on_its_engine(self):
        engine = VariableEngine()
        engine.register_filter("reverse", lambda value: value[::-1])
        assert "reverse" not in VariableEngine().filter_names

    def test_failing_filter_leaves_value(self):
        engine = VariableEngine()

        def _boom(value):
            raise ValueError("bad")

        engine.register_filter("boom", _boom)
        assert engine.interpolate("{w|boom}", {"w": "abc"}) == "abc"


class TestIsTemplated:
    def test_detection(self):
        assert is_templated("{a}")
        assert not is_templated("plain")
        assert not is_templated(None)
        assert not is_templated(["{a}"])


class TestRoundTrip:
    """Supplying every extracted data variable leaves no placeholder behind."""

    def test_all_placeholders_resolved(self):
        engine = VariableEngine()
        template = "{brand}: {product|name} from {price|currency:USD}"
        row = {name: "x1" for name in engine.data_variables(template)}
        result = engine.interpolate(template, row)
        assert "{" not in result and "}" not in result
        assert result.startswith("x1: x1 from ")
