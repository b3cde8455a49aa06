"""
SimilarityEngine: configured entry point to scoring, fingerprints and clustering.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..config.config import FingerprintSettings, SimilaritySettings
from .clustering import batch_similarity_check, cluster_duplicates
from .fingerprint import fingerprint
from .models import (
    BatchMatch,
    Document,
    DuplicateReport,
    Fingerprint,
    FingerprintAlgorithm,
    SimilarityAlgorithm,
    SimilarityScore,
)
from .similarity import score


class SimilarityEngine:
    """
    Stateless facade over the similarity algorithms.

    Holds only settings; every call is independent, so one engine may be
    shared freely between threads.
    """

    def __init__(
        self,
        settings: Optional[SimilaritySettings] = None,
        fingerprint_settings: Optional[FingerprintSettings] = None,
    ) -> None:
        self.settings = settings or SimilaritySettings()
        self.fingerprint_settings = fingerprint_settings or FingerprintSettings()

    def _similarity_algorithm(self, algorithm: Optional[SimilarityAlgorithm | str]) -> SimilarityAlgorithm | str:
        return self.settings.default_algorithm if algorithm is None else algorithm

    def score(
        self, text1: str, text2: str, algorithm: Optional[SimilarityAlgorithm | str] = None
    ) -> SimilarityScore:
        return score(text1, text2, self._similarity_algorithm(algorithm), self.settings)

    def cluster_duplicates(
        self,
        documents: Sequence[Document],
        threshold: Optional[float] = None,
        algorithm: Optional[SimilarityAlgorithm | str] = None,
    ) -> DuplicateReport:
        return cluster_duplicates(
            documents,
            self.settings.default_threshold if threshold is None else threshold,
            self._similarity_algorithm(algorithm),
            self.settings,
        )

    def fingerprint(self, content: str, algorithm: Optional[FingerprintAlgorithm | str] = None) -> Fingerprint:
        if algorithm is None:
            algorithm = self.fingerprint_settings.default_algorithm
        return fingerprint(content, algorithm, self.fingerprint_settings)

    def batch_check(
        self,
        base: str,
        texts: Sequence[str],
        threshold: float = 0.7,
        algorithm: Optional[SimilarityAlgorithm | str] = None,
    ) -> List[BatchMatch]:
        return batch_similarity_check(
            base, texts, threshold, self._similarity_algorithm(algorithm), self.settings
        )
