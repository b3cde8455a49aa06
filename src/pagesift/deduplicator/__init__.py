"""
pagesift Similarity Engine.

Markup-agnostic near-duplicate detection over plain text:
- Scores: cosine, jaccard, levenshtein and a keyword-overlap proxy
- Fingerprints: simhash, minhash and shingle digests for pre-filtering and index keys
- Clustering: greedy, representative-based duplicate groups
- Seen-content checks against an injected key/value store
"""

from .clustering import batch_similarity_check, cluster_duplicates
from .engine import SimilarityEngine
from .fingerprint import estimate_similarity, fingerprint, hamming_distance
from .models import (
    BatchMatch,
    Document,
    DuplicateGroup,
    DuplicateReport,
    Fingerprint,
    FingerprintAlgorithm,
    SeenCheck,
    SimilarityAlgorithm,
    SimilarityScore,
    UnsupportedAlgorithmError,
)
from .registry import SeenContentIndex
from .similarity import score

__all__ = [
    "SimilarityEngine",
    "score",
    "cluster_duplicates",
    "batch_similarity_check",
    "fingerprint",
    "estimate_similarity",
    "hamming_distance",
    "SeenContentIndex",
    # Models
    "Document",
    "SimilarityAlgorithm",
    "SimilarityScore",
    "DuplicateGroup",
    "DuplicateReport",
    "FingerprintAlgorithm",
    "Fingerprint",
    "BatchMatch",
    "SeenCheck",
    "UnsupportedAlgorithmError",
]
