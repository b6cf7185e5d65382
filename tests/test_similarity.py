"""Tests for libscout.similarity module."""

from libscout.similarity import (
    FUZZY_ACCEPT_THRESHOLD,
    MAX_SUGGESTIONS,
    SUGGESTION_THRESHOLD,
    best_match,
    levenshtein,
    rank_suggestions,
    similarity,
)


class TestLevenshtein:
    def test_identical(self):
        assert levenshtein("yb-avatar", "yb-avatar") == 0

    def test_classic_example(self):
        assert levenshtein("kitten", "sitting") == 3

    def test_against_empty(self):
        assert levenshtein("", "abc") == 3
        assert levenshtein("abc", "") == 3

    def test_single_deletion(self):
        assert levenshtein("yb-avatar", "yb-avatr") == 1


class TestSimilarity:
    def test_identity(self):
        assert similarity("yb-button", "yb-button") == 1.0

    def test_both_empty(self):
        assert similarity("", "") == 1.0

    def test_one_empty(self):
        assert similarity("abc", "") == 0.0

    def test_case_insensitive(self):
        assert similarity("YB-Avatar", "yb-avatar") == 1.0

    def test_symmetric(self):
        assert similarity("encrypt", "encrypted") == similarity("encrypted", "encrypt")

    def test_in_unit_range(self):
        score = similarity("yb-avatr", "yb-avatar")
        assert 0.0 <= score <= 1.0
        assert abs(score - 8 / 9) < 1e-9


class TestBestMatch:
    def test_picks_closest(self):
        candidates = [("yb-avatar", "avatar"), ("yb-button", "button")]
        assert best_match("yb-avatr", candidates) == "avatar"

    def test_threshold_is_strict(self):
        # similarity("ab", "ax") == 0.5 exactly
        assert best_match("ab", [("ax", "x")], threshold=0.5) is None

    def test_nothing_close(self):
        assert best_match("zzzz", [("yb-avatar", "avatar")]) is None

    def test_raised_threshold(self):
        assert best_match("yb-avatr", [("yb-avatar", "avatar")], threshold=0.95) is None

    def test_ties_keep_first(self):
        candidates = [("ax", "first"), ("ay", "second")]
        assert best_match("ab", candidates, threshold=0.3) == "first"


class TestRankSuggestions:
    def test_sorted_by_score(self):
        candidates = [
            ("ax", {"name": "ax"}),
            ("ay", {"name": "ay"}),
            ("ab", {"name": "ab"}),
        ]
        result = rank_suggestions("ab", candidates)
        assert [s["name"] for s in result] == ["ab", "ax", "ay"]

    def test_limit(self):
        candidates = [(f"item{i}", {"name": f"item{i}"}) for i in range(10)]
        assert len(rank_suggestions("item", candidates)) == MAX_SUGGESTIONS
        assert len(rank_suggestions("item", candidates, limit=2)) == 2

    def test_below_threshold_dropped(self):
        assert rank_suggestions("zzzzzzzz", [("yb-avatar", {"name": "yb-avatar"})]) == []

    def test_empty_candidates(self):
        assert rank_suggestions("anything", []) == []


class TestDefaults:
    def test_thresholds(self):
        assert FUZZY_ACCEPT_THRESHOLD == 0.5
        assert SUGGESTION_THRESHOLD == 0.3
        assert MAX_SUGGESTIONS == 5
