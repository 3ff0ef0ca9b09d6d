"""Fallback policy tests: truncation and word-boundary cuts."""

from adsync.domain.fallback import (
    FallbackPolicy,
    apply_fallback,
    truncate_text,
    truncate_to_word_boundary,
)

HEADLINE_46 = "Premium Wireless Noise Cancelling Headphones X"


class TestTruncate:
    """Hard cut at the limit, no ellipsis."""

    def test_hard_cut(self):
        assert len(HEADLINE_46) == 46
        assert truncate_text(HEADLINE_46, 30) == HEADLINE_46[:30]

    def test_short_text_unchanged(self):
        assert truncate_text("short", 30) == "short"

    def test_zero_limit(self):
        assert truncate_text("abc", 0) == ""


class TestTruncateWord:
    """Cut at the last whitespace at or before the limit."""

    def test_word_boundary(self):
        result = truncate_to_word_boundary(HEADLINE_46, 30)
        assert result == "Premium Wireless Noise"
        assert len(result) <= 30
        assert HEADLINE_46[len(result)].isspace()

    def test_boundary_exactly_at_limit(self):
        assert truncate_to_word_boundary("abcde fgh", 5) == "abcde"

    def test_no_whitespace_falls_back_to_hard_cut(self):
        assert truncate_to_word_boundary("abcdefghij", 4) == "abcd"

    def test_fits(self):
        assert truncate_to_word_boundary("fits fine", 30) == "fits fine"


class TestApplyFallback:
    """Outcome for overrunning values only."""

    def test_truncate_word_outcome(self):
        outcome = apply_fallback("headline", HEADLINE_46, 30, FallbackPolicy.TRUNCATE_WORD)
        assert outcome is not None
        assert outcome.substituted == "Premium Wireless Noise"
        assert outcome.reason == "Text will be truncated: headline (46/30)"

    def test_string_policy_accepted(self):
        outcome = apply_fallback("headline", HEADLINE_46, 30, "truncate")
        assert outcome.substituted == HEADLINE_46[:30]
        assert outcome.policy is FallbackPolicy.TRUNCATE

    def test_error_policy_does_not_repair(self):
        assert apply_fallback("headline", HEADLINE_46, 30, FallbackPolicy.ERROR) is None

    def test_no_policy(self):
        assert apply_fallback("headline", HEADLINE_46, 30, None) is None

    def test_value_within_limit(self):
        assert apply_fallback("headline", "short", 30, FallbackPolicy.TRUNCATE) is None
