"""
Near-duplicate clustering of a document collection.

Clustering is a single greedy pass, not a transitive closure: the open
document is compared with every later unassigned document, and only direct
matches join its group. With A~B and B~C but not A~C, C does not join A's
group; it stays available for later documents. Callers rely on this
representative-based grouping.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Set

import structlog

from ..config.config import SimilaritySettings
from .models import BatchMatch, Document, DuplicateGroup, DuplicateReport, SimilarityAlgorithm
from .similarity import score

logger = structlog.get_logger(__name__)


def _validate_threshold(threshold: float) -> None:
    if not 0.0 <= threshold <= 1.0:
        raise ValueError("threshold must be between 0.0 and 1.0")


def cluster_duplicates(
    documents: Sequence[Document],
    threshold: float = 0.8,
    algorithm: SimilarityAlgorithm | str = SimilarityAlgorithm.COSINE,
    settings: Optional[SimilaritySettings] = None,
) -> DuplicateReport:
    """
    Group documents whose pairwise similarity reaches ``threshold``.

    Args:
        documents: Collection in input order; ids must be unique
        threshold: Minimum score for a document to join a group
        algorithm: Similarity algorithm used for every comparison

    Returns:
        DuplicateReport; each id is in exactly one group or in unique_documents

    Raises:
        UnsupportedAlgorithmError: If the algorithm is not recognized
        ValueError: If the threshold is outside [0, 1] or ids repeat
    """
    selected = SimilarityAlgorithm.parse(algorithm)
    _validate_threshold(threshold)
    settings = settings or SimilaritySettings()

    ids = [doc.id for doc in documents]
    if len(set(ids)) != len(ids):
        raise ValueError("Document ids must be unique")

    logger.info(
        "Detecting duplicates",
        documents=len(documents),
        threshold=threshold,
        algorithm=selected.value,
    )

    groups: List[DuplicateGroup] = []
    unique: List[str] = []
    assigned: Set[str] = set()

    for i, current in enumerate(documents):
        if current.id in assigned:
            continue

        members = [current.id]
        max_similarity = 0.0
        for candidate in documents[i + 1 :]:
            if candidate.id in assigned:
                continue
            result = score(current.content, candidate.content, selected, settings)
            if result.value >= threshold:
                members.append(candidate.id)
                assigned.add(candidate.id)
                max_similarity = max(max_similarity, result.value)

        assigned.add(current.id)
        if len(members) > 1:
            groups.append(DuplicateGroup(members=tuple(members), representative=current.id, similarity=max_similarity))
        else:
            unique.append(current.id)

    logger.info("Duplicate detection completed", groups=len(groups), unique=len(unique))

    return DuplicateReport(
        groups=tuple(groups),
        unique_documents=tuple(unique),
        total_processed=len(documents),
        threshold=threshold,
        algorithm=selected,
    )


def batch_similarity_check(
    base: str,
    texts: Sequence[str],
    threshold: float = 0.7,
    algorithm: SimilarityAlgorithm | str = SimilarityAlgorithm.COSINE,
    settings: Optional[SimilaritySettings] = None,
) -> List[BatchMatch]:
    """
    Score one text against many.

    Returns:
        One BatchMatch per text, most similar first (input order among equals)
    """
    selected = SimilarityAlgorithm.parse(algorithm)
    _validate_threshold(threshold)

    matches = []
    for index, text in enumerate(texts):
        value = score(base, text, selected, settings).value
        matches.append(BatchMatch(index=index, similarity=value, is_match=value >= threshold))

    return sorted(matches, key=lambda m: m.similarity, reverse=True)
