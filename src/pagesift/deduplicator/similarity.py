"""
Pairwise text similarity.

Implements the four interchangeable scoring algorithms:

- cosine: term-frequency vectors over the shared vocabulary
- jaccard: token-set overlap
- levenshtein: normalized edit distance on the raw text
- fingerprint: overlap of the top-N keyword sets, a cheap stand-in for
  semantic similarity when no embedding service is available

All scores lie in [0, 1] and every degenerate input has a defined value.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np  # type: ignore[import-not-found]
import structlog
from rapidfuzz import distance  # type: ignore[import-not-found]

from ..config.config import SimilaritySettings
from .models import SimilarityAlgorithm, SimilarityScore
from .preprocessing import extract_keywords, tokenize

logger = structlog.get_logger(__name__)


def cosine_similarity(tokens1: Sequence[str], tokens2: Sequence[str]) -> float:
    """Cosine of the term-frequency vectors; 0.0 when either vector is empty."""
    counts1, counts2 = Counter(tokens1), Counter(tokens2)
    vocabulary = sorted(counts1.keys() | counts2.keys())
    if not vocabulary:
        return 0.0

    v1 = np.array([counts1[w] for w in vocabulary], dtype=np.float64)
    v2 = np.array([counts2[w] for w in vocabulary], dtype=np.float64)
    norm1, norm2 = np.linalg.norm(v1), np.linalg.norm(v2)
    if norm1 == 0 or norm2 == 0:
        return 0.0
    return float(np.dot(v1, v2) / (norm1 * norm2))


def jaccard_similarity(tokens1: Sequence[str], tokens2: Sequence[str]) -> float:
    """Intersection over union of token sets; 0.0 for an empty union."""
    set1, set2 = set(tokens1), set(tokens2)
    union = set1 | set2
    if not union:
        return 0.0
    return len(set1 & set2) / len(union)


def levenshtein_similarity(text1: str, text2: str) -> Tuple[float, int]:
    """
    ``1 - distance / max(len)`` on the raw, case-sensitive text.

    Returns:
        (similarity, edit distance); two empty strings are identical
    """
    longest = max(len(text1), len(text2))
    if longest == 0:
        return 1.0, 0
    edits = distance.Levenshtein.distance(text1, text2)
    return 1.0 - edits / longest, edits


def keyword_similarity(keywords1: Sequence[str], keywords2: Sequence[str]) -> float:
    """Shared keywords over distinct keywords; 0.0 when neither text has any."""
    set1, set2 = set(keywords1), set(keywords2)
    union = set1 | set2
    if not union:
        return 0.0
    return len(set1 & set2) / len(union)


def _token_details(tokens1: List[str], tokens2: List[str]) -> Dict[str, Any]:
    set1, set2 = set(tokens1), set(tokens2)
    return {"common_words": len(set1 & set2), "total_words": len(set1 | set2)}


def _score_cosine(text1: str, text2: str, settings: SimilaritySettings) -> Tuple[float, Dict[str, Any]]:
    tokens1, tokens2 = tokenize(text1), tokenize(text2)
    return cosine_similarity(tokens1, tokens2), _token_details(tokens1, tokens2)


def _score_jaccard(text1: str, text2: str, settings: SimilaritySettings) -> Tuple[float, Dict[str, Any]]:
    tokens1, tokens2 = tokenize(text1), tokenize(text2)
    return jaccard_similarity(tokens1, tokens2), _token_details(tokens1, tokens2)


def _score_levenshtein(text1: str, text2: str, settings: SimilaritySettings) -> Tuple[float, Dict[str, Any]]:
    similarity, edits = levenshtein_similarity(text1, text2)
    return similarity, {"edit_distance": edits}


def _score_fingerprint(text1: str, text2: str, settings: SimilaritySettings) -> Tuple[float, Dict[str, Any]]:
    options: Dict[str, Any] = {
        "limit": settings.keyword_limit,
        "min_length": settings.keyword_min_length,
        "stop_words": settings.stop_words,
    }
    keywords1 = extract_keywords(text1, **options)
    keywords2 = extract_keywords(text2, **options)
    details = {
        "common_keywords": len(set(keywords1) & set(keywords2)),
        "total_keywords": len(set(keywords1) | set(keywords2)),
    }
    return keyword_similarity(keywords1, keywords2), details


_Scorer = Callable[[str, str, SimilaritySettings], Tuple[float, Dict[str, Any]]]

SCORERS: Dict[SimilarityAlgorithm, _Scorer] = {
    SimilarityAlgorithm.COSINE: _score_cosine,
    SimilarityAlgorithm.JACCARD: _score_jaccard,
    SimilarityAlgorithm.LEVENSHTEIN: _score_levenshtein,
    SimilarityAlgorithm.FINGERPRINT: _score_fingerprint,
}


def score(
    text1: str,
    text2: str,
    algorithm: SimilarityAlgorithm | str = SimilarityAlgorithm.COSINE,
    settings: Optional[SimilaritySettings] = None,
) -> SimilarityScore:
    """
    Score the similarity of two texts.

    Args:
        text1: First text
        text2: Second text
        algorithm: cosine, jaccard, levenshtein or fingerprint

    Returns:
        SimilarityScore rounded to ``settings.precision`` decimals

    Raises:
        UnsupportedAlgorithmError: If the algorithm is not recognized
    """
    settings = settings or SimilaritySettings()
    selected = SimilarityAlgorithm.parse(algorithm)

    value, details = SCORERS[selected](text1, text2, settings)
    details.update(text_length1=len(text1), text_length2=len(text2))

    # Clamp floating-point drift (e.g. 1.0000000002 for identical vectors).
    value = round(min(1.0, max(0.0, value)), settings.precision)
    logger.debug("Scored text pair", algorithm=selected.value, similarity=value)
    return SimilarityScore(value=value, algorithm=selected, details=details)
