"""
pagesift - heuristic HTML content extraction and near-duplicate detection.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Config
from .deduplicator import SimilarityEngine, cluster_duplicates, fingerprint, score
from .extractor import HeuristicExtractor, extract

__all__ = [
    "__version__",
    "Config",
    "HeuristicExtractor",
    "SimilarityEngine",
    "extract",
    "score",
    "cluster_duplicates",
    "fingerprint",
]
