"""
Unit tests for SeenContentIndex.
"""

import pytest
from pagesift.deduplicator import FingerprintAlgorithm, SeenContentIndex, UnsupportedAlgorithmError
from pagesift.protocols import KeyValueStore


class TestSeenContentIndex:
    """Seen-content checks against an injected store."""

    def test_store_satisfies_protocol(self, memory_store):
        assert isinstance(memory_store, KeyValueStore)

    def test_first_sighting_is_recorded(self, memory_store):
        index = SeenContentIndex(memory_store)
        result = index.check("doc-1", "A fresh article about tides")

        assert not result.is_duplicate
        assert result.first_seen_id == "doc-1"
        assert memory_store.puts == [(index.key_for(result.fingerprint), "doc-1", None)]

    def test_repeat_is_duplicate(self, memory_store):
        index = SeenContentIndex(memory_store)
        index.check("doc-1", "A fresh article about tides")
        result = index.check("doc-2", "a FRESH article, about tides!")

        assert result.is_duplicate
        assert result.first_seen_id == "doc-1"
        assert len(memory_store.puts) == 1

    def test_key_format(self, memory_store):
        index = SeenContentIndex(memory_store, algorithm="shingle", namespace="news")
        result = index.check("d", "content")

        assert index.key_for(result.fingerprint) == f"news:shingle:{result.fingerprint.value}"
        assert result.fingerprint.algorithm is FingerprintAlgorithm.SHINGLE

    def test_ttl_is_passed_to_store(self, memory_store):
        index = SeenContentIndex(memory_store)
        index.check("doc-1", "short lived", ttl=60)

        assert memory_store.puts[0][2] == 60

    def test_expired_entry_is_not_a_duplicate(self, memory_store):
        index = SeenContentIndex(memory_store)
        index.check("doc-1", "short lived", ttl=60)
        memory_store.now = 61

        result = index.check("doc-2", "short lived")
        assert not result.is_duplicate
        assert result.first_seen_id == "doc-2"

    def test_forget(self, memory_store):
        index = SeenContentIndex(memory_store)
        index.check("doc-1", "to be forgotten")

        assert index.forget("to be forgotten") is True
        assert index.forget("to be forgotten") is False
        assert not index.check("doc-2", "to be forgotten").is_duplicate

    def test_namespaces_are_isolated(self, memory_store):
        SeenContentIndex(memory_store, namespace="a").check("doc-1", "shared text")
        result = SeenContentIndex(memory_store, namespace="b").check("doc-2", "shared text")

        assert not result.is_duplicate

    def test_unsupported_algorithm(self, memory_store):
        with pytest.raises(UnsupportedAlgorithmError):
            SeenContentIndex(memory_store, algorithm="crc32")
