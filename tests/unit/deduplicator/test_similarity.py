"""
Unit tests for pairwise similarity scoring.
"""

import pytest
from pagesift.config import SimilaritySettings
from pagesift.deduplicator import SimilarityAlgorithm, UnsupportedAlgorithmError, score
from pagesift.deduplicator.similarity import (
    SCORERS,
    cosine_similarity,
    jaccard_similarity,
    keyword_similarity,
    levenshtein_similarity,
)

TOKEN_ALGORITHMS = ["cosine", "jaccard"]
SYMMETRIC_ALGORITHMS = ["cosine", "jaccard", "levenshtein"]


class TestScoringFunctions:
    """Raw scoring functions."""

    def test_cosine_half_overlap(self):
        assert cosine_similarity(["a", "b"], ["a", "c"]) == pytest.approx(0.5)

    def test_cosine_uses_term_frequency(self):
        assert cosine_similarity(["a", "a"], ["a"]) == pytest.approx(1.0)
        assert cosine_similarity(["a", "a", "b"], ["a", "b", "b"]) == pytest.approx(0.8)

    def test_cosine_empty(self):
        assert cosine_similarity([], ["a"]) == 0.0
        assert cosine_similarity([], []) == 0.0

    def test_jaccard(self):
        assert jaccard_similarity(["a", "b", "c"], ["b", "c", "d"]) == pytest.approx(0.5)
        assert jaccard_similarity([], []) == 0.0

    def test_levenshtein_kitten_sitting(self):
        similarity, edits = levenshtein_similarity("kitten", "sitting")
        assert edits == 3
        assert similarity == pytest.approx(1 - 3 / 7)

    def test_levenshtein_both_empty(self):
        assert levenshtein_similarity("", "") == (1.0, 0)

    def test_levenshtein_one_empty(self):
        assert levenshtein_similarity("", "abc") == (0.0, 3)

    def test_keyword_similarity(self):
        assert keyword_similarity(["cloud", "storage"], ["cloud", "network"]) == pytest.approx(1 / 3)
        assert keyword_similarity([], []) == 0.0


class TestScore:
    """The public score entry point."""

    def test_every_algorithm_has_a_scorer(self):
        assert set(SCORERS) == set(SimilarityAlgorithm)

    def test_trailing_period(self):
        a, b = "The quick brown fox", "The quick brown fox."

        assert score(a, b, "cosine").value >= 0.95
        assert score(a, b, "jaccard").value >= 0.95
        assert score(a, b, "levenshtein").value < 1.0

    def test_kitten_sitting_rounded(self):
        result = score("kitten", "sitting", SimilarityAlgorithm.LEVENSHTEIN)

        assert result.value == 0.5714
        assert result.algorithm is SimilarityAlgorithm.LEVENSHTEIN
        assert result.details["edit_distance"] == 3

    def test_levenshtein_is_case_sensitive(self):
        assert score("Hello", "hello", "levenshtein").value == 0.8
        assert score("Hello", "hello", "cosine").value == 1.0

    def test_cosine_details(self):
        result = score("a b", "a c", "cosine")

        assert result.value == 0.5
        assert result.details["common_words"] == 1
        assert result.details["total_words"] == 3
        assert result.details["text_length1"] == 3

    @pytest.mark.parametrize("algorithm", ["cosine", "jaccard", "levenshtein", "fingerprint"])
    def test_identical_texts(self, algorithm):
        text = "Distributed storage systems replicate data across several machines"
        assert score(text, text, algorithm).value == 1.0

    @pytest.mark.parametrize("algorithm", ["cosine", "jaccard", "levenshtein", "fingerprint"])
    def test_scores_in_range(self, algorithm):
        pairs = [
            ("", ""),
            ("", "text"),
            ("!!!", "???"),
            ("apple banana cherry", "banana cherry durian eggplant"),
            ("東京 大阪", "東京 京都"),
        ]
        for text1, text2 in pairs:
            assert 0.0 <= score(text1, text2, algorithm).value <= 1.0

    @pytest.mark.parametrize("algorithm", TOKEN_ALGORITHMS)
    def test_empty_and_punctuation_only_score_zero(self, algorithm):
        assert score("", "", algorithm).value == 0.0
        assert score("...", "!!!", algorithm).value == 0.0

    @pytest.mark.parametrize("algorithm", SYMMETRIC_ALGORITHMS)
    def test_symmetry(self, algorithm):
        a = "the cat sat on the mat with another cat"
        b = "a dog sat on the log near the mat"
        assert score(a, b, algorithm).value == score(b, a, algorithm).value

    def test_cjk_tokens(self):
        assert score("東京 大阪", "東京 京都", "jaccard").value == pytest.approx(round(1 / 3, 4))

    def test_fingerprint_proxy_ignores_stop_words(self):
        a = "the cloud storage service"
        b = "of cloud storage service"
        result = score(a, b, "fingerprint")

        assert result.value == 1.0
        assert result.details["common_keywords"] == 3

    def test_algorithm_name_is_normalized(self):
        assert score("a", "a", "  COSINE ").algorithm is SimilarityAlgorithm.COSINE

    @pytest.mark.parametrize("algorithm", ["semantic", "", "euclidean", None, 3])
    def test_unsupported_algorithm(self, algorithm):
        with pytest.raises(UnsupportedAlgorithmError) as exc_info:
            score("a", "b", algorithm)

        assert exc_info.value.kind == "similarity"
        assert "cosine" in exc_info.value.supported

    def test_unsupported_algorithm_is_value_error(self):
        with pytest.raises(ValueError):
            score("a", "b", "semantic")

    def test_precision_setting(self):
        result = score("kitten", "sitting", "levenshtein", SimilaritySettings(precision=2))
        assert result.value == 0.57

    def test_zero_precision_rounds_to_whole_numbers(self):
        result = score("kitten", "sitting", "levenshtein", SimilaritySettings(precision=0))
        assert result.value == 1.0
