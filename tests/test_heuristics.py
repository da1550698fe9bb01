"""Tests for offline handle scoring."""

import pytest

from handlecheck.heuristics import DEFAULT_WEIGHTS, HandleScorer
from handlecheck.models import HandleQuery
from handlecheck.platforms import Platform


@pytest.fixture
def scorer():
    """Create a handle scorer with default weights."""
    return HandleScorer()


class TestHandleScorer:
    """Test handle scoring behaviour."""

    def test_very_short_handle_is_taken(self, scorer):
        """Two-character handles should be taken with high confidence everywhere."""
        for platform in Platform:
            verdict = scorer.evaluate("zz", platform)
            assert verdict.taken_score >= 95
            assert not verdict.available
            assert verdict.confidence >= 80

    def test_random_handle_is_available(self, scorer):
        verdict = scorer.evaluate("kxqzv7j2m", Platform.TWITTER)
        assert verdict.available
        assert verdict.taken_score < 50
        assert 0 < verdict.confidence < 85

    def test_empty_handle_scores_as_short(self, scorer):
        verdict = scorer.evaluate("", Platform.GITHUB)
        assert verdict.taken_score >= 95
        assert not verdict.available

    def test_deterministic(self, scorer):
        first = scorer.evaluate("ab_unique_2024_handle", Platform.YOUTUBE)
        second = scorer.evaluate("ab_unique_2024_handle", Platform.YOUTUBE)
        assert first == second

    def test_case_and_whitespace_insensitive(self, scorer):
        assert scorer.evaluate("  KxQzV7j2M ", "twitter") == scorer.evaluate("kxqzv7j2m", "twitter")

    def test_confidence_tracks_distance_from_threshold(self, scorer):
        for handle in ("zz", "john", "google", "kxqzv7j2m", "ab_unique_2024_handle", "qwerty123"):
            verdict = scorer.evaluate(handle, Platform.YOUTUBE)
            assert 0 <= verdict.taken_score <= 100
            assert verdict.confidence == min(100, abs(50 - verdict.taken_score) * 2)

    def test_competitive_platforms_score_higher(self, scorer):
        twitter = scorer.evaluate("kxqzv7j2m", Platform.TWITTER)
        youtube = scorer.evaluate("kxqzv7j2m", Platform.YOUTUBE)
        snapchat = scorer.evaluate("kxqzv7j2m", Platform.SNAPCHAT)
        assert twitter.taken_score >= youtube.taken_score >= snapchat.taken_score

    def test_brand_scores_above_random(self, scorer):
        brand = scorer.evaluate("google", Platform.YOUTUBE)
        random = scorer.evaluate("kxqzv7j2m", Platform.YOUTUBE)
        assert brand.taken_score > random.taken_score
        assert "Tech brand or company name" in brand.factors

    def test_name_factor(self, scorer):
        verdict = scorer.evaluate("john", Platform.YOUTUBE)
        assert "Contains common name" in verdict.factors

    def test_short_handle_factor_first(self, scorer):
        verdict = scorer.evaluate("zz", Platform.GITHUB)
        assert verdict.factors[0] == "Very short handle (2 chars)"

    def test_factors_capped_at_three(self, scorer):
        for handle in ("zz", "john", "qwerty123", "the_official_nyc_ceo", "ab_unique_2024_handle"):
            assert len(scorer.evaluate(handle, Platform.TWITTER).factors) <= 3

    def test_positive_factors_for_long_available_handle(self, scorer):
        verdict = scorer.evaluate("kxqzvbnmtrpl", Platform.YOUTUBE)
        assert verdict.available
        assert verdict.factors == ("Long handle (12 chars)", "Good length for availability")

    def test_longer_handle_scores_lower(self, scorer):
        for platform in Platform:
            short = scorer.evaluate("ab", platform)
            long = scorer.evaluate("ab_unique_2024_handle", platform)
            assert short.taken_score > long.taken_score

    def test_non_ascii_handles(self, scorer):
        """Non-ASCII characters are opaque: no crash, no digit or leet signals."""
        for handle in ("ñandú", "用户", "Ωmega_ß"):
            signals = scorer.compute_signals(handle.lower())
            assert signals["special_chars"] <= 55
            assert signals["leet"] == 0
            verdict = scorer.evaluate(handle, Platform.YOUTUBE)
            assert 0 <= verdict.taken_score <= 100
            assert verdict.confidence == min(100, abs(50 - verdict.taken_score) * 2)

        assert scorer.compute_signals("ñandú")["special_chars"] == 0
        assert not scorer.evaluate("用户", Platform.YOUTUBE).available

    def test_evaluate_query(self, scorer):
        query = HandleQuery(base_handle="zz", platform=Platform.REDDIT)
        assert scorer.evaluate_query(query) == scorer.evaluate("zz", Platform.REDDIT)

    def test_unknown_platform_rejected(self, scorer):
        with pytest.raises(ValueError):
            scorer.evaluate("zz", "myspace")


class TestSignals:
    """Test individual sub-scores."""

    def test_length_buckets(self, scorer):
        expected = {3: 95, 4: 85, 5: 70, 6: 55, 7: 40, 9: 25, 12: 15, 20: 5}
        for length, score in expected.items():
            assert scorer.compute_signals("x" * length)["length"] == score

    def test_brand_exact_and_near_match(self, scorer):
        assert scorer.compute_signals("google")["brands"] == 100
        assert scorer.compute_signals("mygoogle")["brands"] == 90
        assert scorer.compute_signals("gooogle")["brands"] >= 85

    def test_name_combinations(self, scorer):
        assert scorer.compute_signals("john")["names"] == 99
        assert scorer.compute_signals("smith")["names"] == 95
        assert scorer.compute_signals("john_smith")["names"] == 80
        assert scorer.compute_signals("johnsmith")["names"] == 80

    def test_reserved_word(self, scorer):
        assert scorer.compute_signals("admin")["reserved"] == 100
        assert scorer.compute_signals("admin2")["reserved"] == 0

    def test_keyboard_and_sequence_patterns(self, scorer):
        assert scorer.compute_signals("qwerty")["patterns"] == 90
        assert scorer.compute_signals("x123x")["patterns"] == 85

    def test_special_characters_capped(self, scorer):
        signals = scorer.compute_signals("a_b_c_1234")
        assert signals["special_chars"] == 100

    def test_repetition(self, scorer):
        assert scorer.compute_signals("aaab")["repeating"] == 85
        assert scorer.compute_signals("abab")["repeating"] == 75
        assert scorer.compute_signals("abcd")["repeating"] == 0

    def test_pronounceability(self, scorer):
        assert scorer.compute_signals("banana")["pronounceability"] == 75
        assert scorer.compute_signals("kxqz")["pronounceability"] == 30
        assert scorer.compute_signals("1234")["pronounceability"] == 0


class TestOverrides:
    """Test configuration overrides."""

    def test_extra_brands(self):
        scorer = HandleScorer(extra_brands=["Zorblax"])
        assert scorer.compute_signals("zorblax")["brands"] == 100

    def test_extra_reserved_words(self):
        scorer = HandleScorer(extra_reserved_words=["webmaster"])
        assert scorer.compute_signals("webmaster")["reserved"] == 100

    def test_weight_override_changes_score(self):
        default = HandleScorer().evaluate("kxqzv7j2m", Platform.YOUTUBE)
        heavier = HandleScorer(weights={"length": 1.5}).evaluate("kxqzv7j2m", Platform.YOUTUBE)
        assert heavier.taken_score > default.taken_score

    def test_unknown_weights_ignored(self):
        scorer = HandleScorer(weights={"bogus": 5.0})
        assert scorer.weights == DEFAULT_WEIGHTS

    def test_decision_threshold(self):
        scorer = HandleScorer(decision_threshold=5)
        verdict = scorer.evaluate("kxqzv7j2m", Platform.TWITTER)
        assert verdict.decision_threshold == 5
        assert not verdict.available
