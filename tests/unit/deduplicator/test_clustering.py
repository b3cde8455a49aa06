"""
Unit tests for duplicate clustering and batch checks.
"""

import pytest
from pagesift.deduplicator import (
    Document,
    SimilarityAlgorithm,
    SimilarityScore,
    UnsupportedAlgorithmError,
    batch_similarity_check,
    cluster_duplicates,
)
from pagesift.deduplicator import clustering


def _fake_scores(monkeypatch, table):
    """Replace pairwise scoring with a lookup keyed on document content."""

    def fake_score(text1, text2, algorithm, settings=None):
        value = table.get((text1, text2), table.get((text2, text1), 0.0))
        return SimilarityScore(value=value, algorithm=algorithm)

    monkeypatch.setattr(clustering, "score", fake_score)


def _partition(report):
    grouped = [m for g in report.groups for m in g.members]
    return grouped + list(report.unique_documents)


class TestClusterDuplicates:
    """Greedy representative-based clustering."""

    def test_greedy_grouping_is_not_transitive(self, monkeypatch):
        _fake_scores(monkeypatch, {("d1", "d2"): 0.9, ("d2", "d3"): 0.9, ("d1", "d3"): 0.3})
        docs = [Document("doc1", "d1"), Document("doc2", "d2"), Document("doc3", "d3")]

        report = cluster_duplicates(docs, threshold=0.8)

        assert len(report.groups) == 1
        assert report.groups[0].members == ("doc1", "doc2")
        assert report.groups[0].representative == "doc1"
        assert report.groups[0].similarity == 0.9
        assert report.unique_documents == ("doc3",)
        assert report.total_processed == 3
        assert report.duplicate_count == 1

    def test_group_similarity_is_highest_member_score(self, monkeypatch):
        _fake_scores(monkeypatch, {("a", "b"): 0.85, ("a", "c"): 0.95})
        docs = [Document("1", "a"), Document("2", "b"), Document("3", "c")]

        report = cluster_duplicates(docs, threshold=0.8)

        assert report.groups[0].members == ("1", "2", "3")
        assert report.groups[0].similarity == 0.95

    def test_threshold_is_inclusive(self, monkeypatch):
        _fake_scores(monkeypatch, {("a", "b"): 0.8})
        report = cluster_duplicates([Document("1", "a"), Document("2", "b")], threshold=0.8)

        assert report.groups[0].members == ("1", "2")

    def test_threshold_zero_groups_everything(self):
        docs = [Document(str(i), text) for i, text in enumerate(["alpha", "beta", "", "gamma delta"])]
        report = cluster_duplicates(docs, threshold=0.0)

        assert len(report.groups) == 1
        assert report.groups[0].members == ("0", "1", "2", "3")
        assert report.unique_documents == ()

    def test_threshold_one_with_distinct_texts(self):
        docs = [Document("a", "red apples"), Document("b", "green pears"), Document("c", "red apples")]
        report = cluster_duplicates(docs, threshold=1.0)

        assert [g.members for g in report.groups] == [("a", "c")]
        assert report.unique_documents == ("b",)

    @pytest.mark.parametrize("threshold", [0.0, 0.3, 0.5, 0.8, 1.0])
    @pytest.mark.parametrize("algorithm", ["cosine", "jaccard", "levenshtein", "fingerprint"])
    def test_partition(self, threshold, algorithm):
        texts = [
            "the council approved new bike lanes downtown",
            "the council approved new bike lanes in the downtown core",
            "quarterly earnings beat analyst expectations",
            "",
            "earnings beat expectations this quarter",
            "bike lanes approved by council",
        ]
        docs = [Document(f"doc{i}", text) for i, text in enumerate(texts)]
        report = cluster_duplicates(docs, threshold=threshold, algorithm=algorithm)
        ids = _partition(report)

        assert sorted(ids) == sorted(d.id for d in docs)
        assert len(ids) == len(set(ids))
        assert all(g.representative == g.members[0] for g in report.groups)
        assert all(len(g.members) >= 2 for g in report.groups)

    def test_empty_collection(self):
        report = cluster_duplicates([])

        assert report.groups == ()
        assert report.unique_documents == ()
        assert report.total_processed == 0

    def test_single_document(self):
        report = cluster_duplicates([Document("only", "text")])
        assert report.unique_documents == ("only",)

    def test_report_records_parameters(self):
        report = cluster_duplicates([Document("a", "x")], threshold=0.6, algorithm="JACCARD")

        assert report.threshold == 0.6
        assert report.algorithm is SimilarityAlgorithm.JACCARD

    @pytest.mark.parametrize("threshold", [-0.1, 1.5])
    def test_threshold_out_of_range(self, threshold):
        with pytest.raises(ValueError):
            cluster_duplicates([Document("a", "x")], threshold=threshold)

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError):
            cluster_duplicates([Document("a", "x"), Document("a", "y")])

    def test_unsupported_algorithm_before_any_scoring(self, monkeypatch):
        def fail(*args, **kwargs):
            raise AssertionError("score must not be called")

        monkeypatch.setattr(clustering, "score", fail)
        with pytest.raises(UnsupportedAlgorithmError):
            cluster_duplicates([Document("a", "x"), Document("b", "y")], algorithm="semantic")


class TestBatchSimilarityCheck:
    """One-to-many scoring."""

    def test_sorted_by_similarity(self):
        base = "solar panels on every roof"
        texts = ["wind farms offshore", "solar panels on every roof", "solar panels on some roofs"]
        matches = batch_similarity_check(base, texts, threshold=0.7)

        assert [m.index for m in matches] == [1, 2, 0]
        assert matches[0].similarity == 1.0
        assert matches[0].is_match
        assert not matches[-1].is_match

    def test_ties_keep_input_order(self):
        matches = batch_similarity_check("x", ["y", "z"], threshold=0.5)
        assert [m.index for m in matches] == [0, 1]

    def test_empty_texts(self):
        assert batch_similarity_check("x", []) == []

    def test_invalid_threshold(self):
        with pytest.raises(ValueError):
            batch_similarity_check("x", ["y"], threshold=2)
